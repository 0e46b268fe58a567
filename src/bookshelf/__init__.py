"""
Bookshelf GraphQL API
Book catalogue and user sessions over GraphQL
"""

__version__ = "0.1.0"

from .config import Settings

__all__ = ["Settings", "__version__"]
