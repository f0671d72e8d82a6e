"""Indexers that turn an object graph into a PropertyNode trie.

- destination.py: depth-bounded schema scan producing a TypeIndex
- source.py: populated-substructure capture with preserve flags
"""
