"""API layer package for HTTP surface composition."""

from .application import create_api_application

__all__ = ["create_api_application"]
