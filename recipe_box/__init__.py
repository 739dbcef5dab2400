"""
Recipe Box: recipe browsing, nutrition, scaling and shopping lists.
"""

__version__ = "1.0.0"
