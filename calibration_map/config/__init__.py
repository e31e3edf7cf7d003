"""
Configuration package for table and logging settings.
"""

from .settings import Settings

__all__ = ['Settings']
