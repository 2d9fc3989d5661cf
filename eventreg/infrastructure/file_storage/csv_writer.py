"""
CSV Writer Service

Encodes the export header and rows into CSV file content.

Format:
    - UTF-8 with BOM so spreadsheet applications detect the encoding
    - Minimal quoting (csv.QUOTE_MINIMAL), "\\r\\n" line endings
    - None cells written as empty strings
    - Numbers written with str(): amounts from the money rules read
      "100", "-2.5", "97.5"
"""

import codecs
import csv
import io
import logging
from typing import Any, Iterable, Sequence

logger = logging.getLogger(__name__)


class CsvWriterService:
    """
    CsvEncoderProtocol implementation using the standard csv module.

    Examples:
        >>> CsvWriterService().write(["Order No.", "Total"], [["ORD-1", 100]])
        b'\\xef\\xbb\\xbfOrder No.,Total\\r\\nORD-1,100\\r\\n'
    """

    def __init__(self, include_bom: bool = True) -> None:
        self.include_bom = include_bom

    def write(self, header: Sequence[str], rows: Iterable[Sequence[Any]]) -> bytes:
        buffer = io.StringIO(newline="")
        writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL)
        writer.writerow(header)

        count = 0
        for row in rows:
            writer.writerow(["" if value is None else value for value in row])
            count += 1

        content = buffer.getvalue().encode("utf-8")
        logger.info(f"Encoded {count} rows ({len(content)} bytes)")
        if self.include_bom:
            return codecs.BOM_UTF8 + content
        return content
