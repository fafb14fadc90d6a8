"""Read-only projections of scripts and folders."""

from .builder import build_catalog, build_tree
from .models import CatalogEntry, TreeNode

__all__ = ["CatalogEntry", "TreeNode", "build_catalog", "build_tree"]
