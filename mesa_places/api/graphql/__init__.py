"""
GraphQL-схема API.
"""

from mesa_places.api.graphql.schema import schema

__all__ = ["schema"]
