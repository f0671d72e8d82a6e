"""Schema cache: per-type property descriptors and the container/leaf classifier.

- descriptors.py: PropertyDescriptor, PropertyKind, describe(), classify(), instantiate()
"""
