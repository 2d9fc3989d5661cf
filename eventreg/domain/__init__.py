"""
Domain Layer - Core Business Rules

Framework-independent rules for the two flows of eventreg:
    - orders: CSV row formatting, money rules, export file naming
    - notifications: outbound WhatsApp template message model
    - shared: domain exceptions

Nothing in this layer performs I/O. Infrastructure and Application layers
depend on it, never the other way round.
"""

from .shared import DomainException

__all__ = ["DomainException"]
