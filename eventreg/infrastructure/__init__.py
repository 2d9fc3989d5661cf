"""
Infrastructure Layer - External Dependencies

Implements Application Layer ports on top of external systems.

Modules:
    - persistence: SQLAlchemy models, order query, Redis status cache
    - file_storage: CSV encoding and blob storage (local disk, S3)
    - whatsapp: WhatsApp Cloud API client and configuration
    - notifications: notification channels (WhatsApp)

Usage:
    >>> from eventreg.infrastructure.persistence import OrderFilter, RedisStatusCache
    >>> from eventreg.infrastructure.file_storage import CsvWriterService, get_blob_storage
    >>> from eventreg.infrastructure.notifications import WhatsAppChannel
"""
