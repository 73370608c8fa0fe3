"""Contract-driven tree walking."""

from .tree_walker import TreeWalker, WalkState

__all__ = ['TreeWalker', 'WalkState']
