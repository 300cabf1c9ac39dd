"""Spreadsheet (xlsx) export of the shopping list using openpyxl."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterable, Sequence

from .models import Item

logger = logging.getLogger(__name__)

XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

DEFAULT_COLUMNS = ["nome", "quantidade", "valor"]


def items_to_records(items: Iterable[Item]) -> list[dict]:
    """Convert items into plain name/quantity/price records."""
    return [
        {
            "nome": item.name,
            "quantidade": item.quantity,
            "valor": item.unit_price,
        }
        for item in items
    ]


class SpreadsheetExporter:
    """Build a single-sheet workbook from a sequence of records.

    The header row is taken from the keys of the first record; every record
    becomes one row below it.
    """

    def __init__(self, sheet_name: str = "Produtos") -> None:
        self.sheet_name = sheet_name

    def _build_workbook(self, records: Sequence[dict]):
        try:
            from openpyxl import Workbook
        except ImportError:
            raise ImportError("openpyxl é necessário: pip install openpyxl")

        wb = Workbook()
        ws = wb.active
        ws.title = self.sheet_name

        columns = list(records[0].keys()) if records else list(DEFAULT_COLUMNS)
        ws.append(columns)
        for record in records:
            ws.append([record.get(col) for col in columns])
        return wb

    def export(self, records: Sequence[dict]) -> bytes:
        """Serialize the records to xlsx bytes."""
        wb = self._build_workbook(records)
        buf = io.BytesIO()
        wb.save(buf)
        data = buf.getvalue()
        logger.debug(
            "Planilha gerada: %d linha(s), %d bytes", len(records), len(data)
        )
        return data

    def save(self, records: Sequence[dict], output_path: str | Path) -> Path:
        """Write the workbook to a file and return its path."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(self.export(records))
        return output_path
