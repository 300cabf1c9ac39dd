"""Data models for the shopping list screen."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Context, Decimal
from enum import Enum


class ValidationError(ValueError):
    """Form input that cannot become an item."""


class ExportWriteError(RuntimeError):
    """The spreadsheet could not be written to its temporary location."""


class ShareError(RuntimeError):
    """The platform share/open action failed."""


# Wide enough that products and sums of bounded inputs are never rounded
MONEY_CONTEXT = Context(prec=60)


@dataclass(frozen=True)
class Item:
    """A single line of the shopping list."""

    id: str
    name: str
    quantity: Decimal
    unit_price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return MONEY_CONTEXT.multiply(self.quantity, self.unit_price)


@dataclass(frozen=True)
class FormState:
    """Raw text of the input fields plus the editing marker."""

    name: str = ""
    quantity: str = ""
    price: str = ""
    editing_id: str | None = None  # None → adding a new item

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None


@dataclass(frozen=True)
class ShoppingListState:
    items: tuple[Item, ...] = ()
    total: Decimal = Decimal("0")
    form: FormState = field(default_factory=FormState)

    def find(self, item_id: str) -> Item | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None


class ExportStatus(Enum):
    SHARED = "shared"
    WRITE_FAILED = "write_failed"
    SHARE_FAILED = "share_failed"
    NO_DELIVERY = "no_delivery"


@dataclass
class ExportResult:
    status: ExportStatus
    handle: str | None = None  # file path or URL handed to the share action
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is ExportStatus.SHARED
