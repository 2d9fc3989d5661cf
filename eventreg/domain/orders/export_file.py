"""
Export File Naming

File names are built from the requested date range (or today's date) plus a
short random token. The token keeps collisions unlikely without a global
uniqueness check; two exports of the same range on the same day still get
different files.

Storage layout:
    {production|staging}/{tenant-domain}/csv/{prefix}-{range-or-date}-{token}.csv
"""

import secrets
import string
from datetime import date
from typing import Any, Final, Mapping, Optional

from .export_config import DEFAULT_FILE_PREFIX, FILE_TOKEN_LENGTH, ExportConfig

TOKEN_ALPHABET: Final[str] = string.ascii_letters + string.digits
DATE_RANGE_PARAM: Final[str] = "date_range"


def random_token(length: int = FILE_TOKEN_LENGTH) -> str:
    """Random alphanumeric token, e.g. 'aB3xY'."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def export_file_name(
    params: Mapping[str, Any],
    today: date,
    token: str,
    prefix: str = DEFAULT_FILE_PREFIX,
) -> str:
    """
    Build the export file name without extension.

    Args:
        params: Filter parameters of the export request
        today: Date used when no date range was requested
        token: Random suffix (see random_token)
        prefix: Fixed label (default "orders")

    Returns:
        File name such as "orders-2025-01-01-to-2025-01-31-aB3xY"

    Examples:
        >>> export_file_name({"date_range": "2025-01-01 to 2025-01-31"}, date(2025, 2, 1), "aB3xY")
        'orders-2025-01-01-to-2025-01-31-aB3xY'
        >>> export_file_name({}, date(2025, 2, 1), "aB3xY")
        'orders-2025-02-01-aB3xY'
    """
    slug = ""
    date_range: Optional[Any] = params.get(DATE_RANGE_PARAM)
    if date_range is not None:
        slug = str(date_range).replace(" ", "-")

    if not slug:
        slug = today.strftime("%Y-%m-%d")

    return f"{prefix}-{slug}-{token}"


def export_storage_path(config: ExportConfig, file_name: str) -> str:
    """
    Namespaced storage path for an export file.

    Examples:
        >>> export_storage_path(ExportConfig(environment="production", tenant_domain="acme.run"), "orders-x")
        'production/acme.run/csv/orders-x.csv'
    """
    return f"{config.storage_environment}/{config.storage_domain}/csv/{file_name}.csv"
