"""Mapper: moves a source object into the matching property of a destination graph.

- engine.py: Mapper, map_object / map_object_to entry points
- merge.py: collection merge and preserve-existing tree merge
"""
