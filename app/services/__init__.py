"""
Services package for the Asset Management API.

Contains the request flow shared by the resource endpoints, sitting between
the routes and the repository layer (which is for data access).
"""

from app.services.resource_handler import ResourceHandler

__all__ = ["ResourceHandler"]
