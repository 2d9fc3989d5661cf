"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface for requesting order exports and polling their status.
    No business logic.

Contains:
    - FastAPI routers (exports)
    - Request/Response models (Pydantic)
    - Middleware and exception handler setup
"""
