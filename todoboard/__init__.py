"""
Todoboard - to-do lists with an identity API.
"""

__version__ = "0.1.0"
