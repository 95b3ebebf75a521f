"""
API package - FastAPI routes and schemas.
"""

from alertflow.api.routes import workflows

__all__ = ["workflows"]
