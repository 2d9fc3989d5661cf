"""
API Routers Package

Available Routers:
    - exports_router: request an order export, poll its status
"""

from .exports import router as exports_router

__all__ = ["exports_router"]
