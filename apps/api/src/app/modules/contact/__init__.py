"""
Contact Module

Contact and newsletter forms for the landing page.
"""

from .router import router

__all__ = ["router"]
