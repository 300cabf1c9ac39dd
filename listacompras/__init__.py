"""Shopping list with running total and spreadsheet export."""

from .config import (
    AppConfig,
    DeliveryConfig,
    ExportConfig,
    LocaleConfig,
    load_config,
)
from .controller import ShoppingListController
from .delivery import FileDelivery, create_delivery, detect_environment
from .exporter import XLSX_MIME_TYPE, SpreadsheetExporter, items_to_records
from .formatting import format_currency, parse_price, parse_quantity
from .models import (
    ExportResult,
    ExportStatus,
    ExportWriteError,
    FormState,
    Item,
    ShareError,
    ShoppingListState,
    ValidationError,
)

__all__ = [
    "ShoppingListController",
    "ShoppingListState",
    "FormState",
    "Item",
    "ExportResult",
    "ExportStatus",
    "ValidationError",
    "ExportWriteError",
    "ShareError",
    "SpreadsheetExporter",
    "items_to_records",
    "XLSX_MIME_TYPE",
    "FileDelivery",
    "create_delivery",
    "detect_environment",
    "format_currency",
    "parse_price",
    "parse_quantity",
    "AppConfig",
    "LocaleConfig",
    "ExportConfig",
    "DeliveryConfig",
    "load_config",
]
