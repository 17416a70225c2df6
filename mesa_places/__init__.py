# mesa_places/__init__.py
"""
Mesa places — GraphQL API для отзывов о местах.
"""

__version__ = "1.0.0"
