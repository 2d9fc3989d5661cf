"""
CSV Encoder Port
"""

from typing import Any, Iterable, Protocol, Sequence


class CsvEncoderProtocol(Protocol):
    """Encodes a header and a stream of rows into CSV file content."""

    def write(self, header: Sequence[str], rows: Iterable[Sequence[Any]]) -> bytes:
        """
        Encode rows to CSV bytes.

        Args:
            header: Column names, written as the first line
            rows: Row values, consumed lazily

        Returns:
            Complete file content (UTF-8)
        """
        ...
