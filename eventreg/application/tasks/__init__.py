"""
Celery Tasks

Responsibility:
    Asynchronous task definitions for long-running operations.
    Export outcomes are stored in Redis for polling.

Contains:
    - celery_app.py - Celery configuration
    - export_tasks.py - order CSV export task

Does NOT contain:
    - Business logic (delegates to Application services and Domain rules)
"""

from .celery_app import celery_app, health_check
from .export_tasks import export_orders_task

__all__ = ["celery_app", "health_check", "export_orders_task"]
