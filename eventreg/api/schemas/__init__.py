"""
API Schemas Package

Contains shared Pydantic models for API Layer.
"""

from eventreg.api.schemas.common import ErrorResponse

__all__ = ["ErrorResponse"]
