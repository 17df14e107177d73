"""
Taxonomy Tree Component

A reusable component for browsing a taxonomy as a hierarchical, expandable tree.
"""

from .tree_view import render_taxonomy_tree, reset_tree_state

__all__ = ['render_taxonomy_tree', 'reset_tree_state']
