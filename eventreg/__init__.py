"""
eventreg - Event registration back office integrations.

Two independent flows live in this package:
    - Order CSV export: Celery job that streams orders page by page,
      formats them into CSV rows, stores the file and records the outcome
      in a Redis status cache for polling.
    - WhatsApp notifications: channel adapter that turns a notification's
      WhatsApp representation into a template message sent through the
      WhatsApp Cloud API.

Layers:
    - domain: formatting rules, message model, exceptions (no I/O)
    - application: use cases, ports, Celery tasks, queries
    - infrastructure: SQLAlchemy, Redis, blob storage, HTTP client
    - api: FastAPI trigger/poll endpoints
"""

__version__ = "0.1.0"
