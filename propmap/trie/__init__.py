"""Property trie shared by the destination and source indexers.

- node.py: PropertyNode and the type -> qualified name -> node TypeIndex
"""
