"""
Application Layer

Orchestrates domain rules and infrastructure adapters: the order export use
case, the export status query, the Celery task and notification dispatch.
"""
