"""
Bookshelf: a personal-library catalog web application.
"""

__version__ = "1.0.0"
