"""
Gallery Module

Lists landing page images from the static images directory.
"""

from .router import router

__all__ = ["router"]
