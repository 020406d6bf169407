"""
Database models for the short link service.
"""

from .link import Link

__all__ = ["Link"]
