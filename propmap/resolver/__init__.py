"""Destination resolver.

Picks the single destination property a source maps into, by runtime type and an
optional case-insensitive dotted path. See `propmap/resolver/core.py`.
"""
