"""
Site Module

Static copy for the landing page sections.
"""

from .router import router

__all__ = ["router"]
