"""Controller for the shopping list screen."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable

from . import messages
from .config import AppConfig, LocaleConfig
from .delivery import FileDelivery
from .exporter import SpreadsheetExporter, items_to_records
from .formatting import format_currency, format_quantity
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
from .state import (
    cancel_edit,
    delete_item,
    new_item_id,
    start_edit,
    submit_form,
    update_form,
)

logger = logging.getLogger(__name__)


class ShoppingListController:
    """Owns the list state and wires UI events to state transitions.

    The view supplies two callbacks: ``alert`` shows a blocking message and
    ``dismiss_keyboard`` hides any on-screen keyboard after a save. Export
    is delegated to an injected FileDelivery.
    """

    def __init__(
        self,
        delivery: FileDelivery | None = None,
        exporter: SpreadsheetExporter | None = None,
        alert: Callable[[str], None] | None = None,
        dismiss_keyboard: Callable[[], None] | None = None,
        locale: LocaleConfig | None = None,
        id_factory: Callable[[], str] = new_item_id,
        filename: str = "produtos.xlsx",
    ) -> None:
        self._state = ShoppingListState()
        self._delivery = delivery
        self._exporter = exporter or SpreadsheetExporter()
        self._alert = alert or (lambda message: None)
        self._dismiss_keyboard = dismiss_keyboard or (lambda: None)
        self._locale = locale or LocaleConfig()
        self._id_factory = id_factory
        self._filename = filename

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        delivery: FileDelivery | None = None,
        **kwargs,
    ) -> ShoppingListController:
        """Build a controller whose exporter and locale follow the config."""
        return cls(
            delivery=delivery,
            exporter=SpreadsheetExporter(sheet_name=config.export.sheet_name),
            locale=config.locale,
            filename=config.export.filename,
            **kwargs,
        )

    @property
    def state(self) -> ShoppingListState:
        return self._state

    @property
    def items(self) -> tuple[Item, ...]:
        return self._state.items

    @property
    def total(self) -> Decimal:
        return self._state.total

    @property
    def form(self) -> FormState:
        return self._state.form

    @property
    def is_editing(self) -> bool:
        return self._state.form.is_editing

    @property
    def submit_label(self) -> str:
        return messages.BUTTON_SAVE if self.is_editing else messages.BUTTON_ADD

    # -- text inputs --

    def set_name(self, text: str) -> None:
        self._state = update_form(self._state, name=text)

    def set_quantity(self, text: str) -> None:
        self._state = update_form(self._state, quantity=text)

    def set_price(self, text: str) -> None:
        self._state = update_form(self._state, price=text)

    # -- actions --

    def submit(self) -> Item | None:
        """Add the form as a new item, or save the item being edited.

        Returns the stored item, or None when the form is invalid.
        """
        try:
            self._state, item = submit_form(self._state, self._id_factory)
        except ValidationError as e:
            logger.debug("Formulário inválido: %s", e)
            self._alert(messages.INVALID_FORM)
            return None
        self._dismiss_keyboard()
        return item

    def edit(self, item_id: str) -> None:
        self._state = start_edit(self._state, item_id)

    def cancel_edit(self) -> None:
        self._state = cancel_edit(self._state)

    def delete(self, item_id: str) -> None:
        self._state = delete_item(self._state, item_id)

    # -- display --

    def format_price(self, value: Decimal | float | int) -> str:
        return format_currency(value, self._locale)

    def total_display(self) -> str:
        return f"{messages.TOTAL_LABEL}: {self.format_price(self.total)}"

    def item_lines(self) -> list[str]:
        return [
            f"{item.name}  {format_quantity(item.quantity)} x "
            f"{self.format_price(item.unit_price)}"
            for item in self.items
        ]

    # -- export --

    async def export(self) -> ExportResult:
        """Export the current items as a spreadsheet and share it.

        Write and share failures are logged and reported in the result;
        they never propagate to the caller.
        """
        data = self._exporter.export(items_to_records(self.items))

        if self._delivery is None:
            logger.warning("Nenhuma forma de entrega configurada")
            return ExportResult(ExportStatus.NO_DELIVERY)

        try:
            handle = await self._delivery.write(data, self._filename)
        except ExportWriteError as e:
            logger.error("Erro ao escrever arquivo: %s", e)
            return ExportResult(ExportStatus.WRITE_FAILED, error=str(e))
        except Exception as e:
            logger.exception("Erro inesperado ao escrever arquivo")
            return ExportResult(ExportStatus.WRITE_FAILED, error=str(e))

        try:
            await self._delivery.share(handle)
        except ShareError as e:
            logger.error("Erro ao compartilhar arquivo: %s", e)
            return ExportResult(ExportStatus.SHARE_FAILED, handle, str(e))
        except Exception as e:
            logger.exception("Erro inesperado ao compartilhar arquivo")
            return ExportResult(ExportStatus.SHARE_FAILED, handle, str(e))

        logger.info("Planilha compartilhada: %s", handle[:80])
        return ExportResult(ExportStatus.SHARED, handle)
