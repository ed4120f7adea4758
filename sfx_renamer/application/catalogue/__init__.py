"""
Term Catalogue Module

Loads the controlled vocabulary and answers catID/category lookups.
"""

from .catalogue import TermCatalogue

__all__ = [
    "TermCatalogue",
]
