"""
Tests for export file naming and storage paths.
"""

from datetime import date

from eventreg.domain.orders import (
    ExportConfig,
    export_file_name,
    export_storage_path,
    random_token,
)
from eventreg.domain.orders.export_file import TOKEN_ALPHABET


def test_file_name_uses_date_range_with_dashes():
    name = export_file_name(
        {"date_range": "2025-01-01 to 2025-01-31"}, date(2025, 2, 1), "aB3xY"
    )
    assert name == "orders-2025-01-01-to-2025-01-31-aB3xY"


def test_file_name_falls_back_to_today():
    assert export_file_name({}, date(2025, 2, 1), "aB3xY") == "orders-2025-02-01-aB3xY"


def test_file_name_blank_date_range_falls_back_to_today():
    name = export_file_name({"date_range": ""}, date(2025, 2, 1), "tok12")
    assert name == "orders-2025-02-01-tok12"


def test_file_name_custom_prefix():
    assert export_file_name({}, date(2025, 2, 1), "x", prefix="refunds") == "refunds-2025-02-01-x"


def test_random_token_is_alphanumeric_of_requested_length():
    token = random_token()
    assert len(token) == 5
    assert all(ch in TOKEN_ALPHABET for ch in token)
    assert len(random_token(12)) == 12


def test_random_tokens_differ():
    assert len({random_token() for _ in range(50)}) > 1


def test_storage_path_production_with_tenant():
    config = ExportConfig(environment="production", tenant_domain="acme.run")
    assert (
        export_storage_path(config, "orders-2025-02-01-aB3xY")
        == "production/acme.run/csv/orders-2025-02-01-aB3xY.csv"
    )


def test_storage_path_non_production_without_tenant():
    config = ExportConfig(environment="local", tenant_domain=None)
    assert export_storage_path(config, "f") == "staging/default/csv/f.csv"
