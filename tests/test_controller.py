"""Tests for the shopping list controller."""

import io
import itertools
import logging
from decimal import Decimal

import pytest
from openpyxl import load_workbook

from listacompras import messages
from listacompras.config import load_config
from listacompras.controller import ShoppingListController
from listacompras.delivery import FileDelivery
from listacompras.models import ExportStatus, ExportWriteError, ShareError


class FakeDelivery(FileDelivery):
    """Records calls and fails on demand."""

    def __init__(self, write_error=None, share_error=None):
        self.write_error = write_error
        self.share_error = share_error
        self.written: list[tuple[bytes, str]] = []
        self.shared: list[str] = []

    async def write(self, data, filename):
        if self.write_error is not None:
            raise self.write_error
        self.written.append((data, filename))
        return f"/cache/{filename}"

    async def share(self, handle):
        if self.share_error is not None:
            raise self.share_error
        self.shared.append(handle)


@pytest.fixture
def alerts():
    return []


@pytest.fixture
def controller(alerts):
    counter = itertools.count(1)
    return ShoppingListController(
        alert=alerts.append,
        id_factory=lambda: f"id-{next(counter)}",
    )


def _add(controller, name, quantity, price):
    controller.set_name(name)
    controller.set_quantity(quantity)
    controller.set_price(price)
    return controller.submit()


class TestSubmit:
    def test_add_updates_total_and_display(self, controller):
        item = _add(controller, "Milk", "2", "3,50")
        assert item.id == "id-1"
        assert controller.total == Decimal("7.00")
        assert controller.total_display() == "Total: R$ 7,00"
        assert controller.item_lines() == ["Milk  2 x R$ 3,50"]

    def test_invalid_shows_alert_and_keeps_input(self, controller, alerts):
        assert _add(controller, "", "2", "3,50") is None
        assert alerts == [messages.INVALID_FORM]
        assert controller.items == ()
        assert controller.total == Decimal("0")
        assert controller.form.quantity == "2"
        assert controller.form.price == "3.50"

    def test_quantity_abc_rejected(self, controller, alerts):
        assert _add(controller, "Milk", "abc", "3,50") is None
        assert alerts == [messages.INVALID_FORM]
        assert controller.items == ()

    def test_keyboard_dismissed_on_success_only(self):
        dismissed = []
        controller = ShoppingListController(
            dismiss_keyboard=lambda: dismissed.append(True)
        )
        _add(controller, "", "1", "1")
        assert dismissed == []
        _add(controller, "Milk", "1", "1")
        assert dismissed == [True]

    def test_submit_label(self, controller):
        assert controller.submit_label == "Adicionar Produto"
        item = _add(controller, "Milk", "2", "3,50")
        controller.edit(item.id)
        assert controller.is_editing
        assert controller.submit_label == "Salvar Alterações"
        controller.cancel_edit()
        assert controller.submit_label == "Adicionar Produto"


class TestLargeNumbers:
    """Oversized or over-precise numbers are rejected before reaching the total."""

    @pytest.mark.parametrize("quantity", ["1" * 29, "1e999999"])
    def test_huge_quantity_rejected(self, controller, alerts, quantity):
        """An out-of-range quantity alerts and leaves the list untouched."""
        assert _add(controller, "Milk", quantity, "3,50") is None
        assert alerts == [messages.INVALID_FORM]
        assert controller.items == ()
        assert controller.total_display() == "Total: R$ 0,00"

    def test_huge_price_rejected(self, controller, alerts):
        """A price with too many integer digits alerts."""
        assert _add(controller, "Milk", "1", "1" * 29) is None
        assert alerts == [messages.INVALID_FORM]
        assert controller.total == Decimal("0")

    def test_largest_values_keep_total_exact(self, controller):
        """The largest accepted quantity and price multiply without rounding."""
        largest = "9999999999999.999999"
        item = _add(controller, "Ouro", largest, largest)
        assert item is not None
        assert controller.total == Decimal(
            "9999999999999999998" + "0" * 7 + "." + "0" * 11 + "1"
        )
        assert controller.total_display() == (
            "Total: R$ 99.999.999.999.999.999.980.000.000,00"
        )

        controller.delete(item.id)
        assert controller.total == 0
        assert controller.total_display() == "Total: R$ 0,00"


def test_example_walkthrough(controller):
    milk = _add(controller, "Milk", "2", "3,50")
    assert controller.total_display() == "Total: R$ 7,00"
    bread = _add(controller, "Bread", "1", "5,00")
    assert controller.total == Decimal("12.00")

    controller.edit(milk.id)
    assert controller.form.price == "3,50"
    controller.set_quantity("3")
    saved = controller.submit()
    assert saved.id == milk.id
    assert len(controller.items) == 2
    assert controller.total == Decimal("15.50")

    controller.delete(bread.id)
    assert controller.total == Decimal("10.50")
    assert controller.total_display() == "Total: R$ 10,50"

    controller.delete("missing")
    assert controller.total == Decimal("10.50")


@pytest.mark.asyncio
async def test_from_config_uses_locale_and_filename():
    config = load_config()
    config.locale.currency_symbol = "US$"
    config.export.filename = "lista.xlsx"
    config.export.sheet_name = "Feira"
    delivery = FakeDelivery()
    controller = ShoppingListController.from_config(config, delivery=delivery)
    _add(controller, "Eggs", "12", "0,50")
    assert controller.total_display() == "Total: US$ 6,00"

    result = await controller.export()

    assert result.ok
    data, filename = delivery.written[0]
    assert filename == "lista.xlsx"
    assert delivery.shared == ["/cache/lista.xlsx"]
    workbook = load_workbook(io.BytesIO(data))
    assert workbook.sheetnames == ["Feira"]


class TestExport:
    @pytest.mark.asyncio
    async def test_export_shares_file(self, controller):
        delivery = FakeDelivery()
        controller._delivery = delivery
        _add(controller, "Milk", "2", "3,50")

        result = await controller.export()

        assert result.ok
        assert result.status is ExportStatus.SHARED
        assert result.handle == "/cache/produtos.xlsx"
        data, filename = delivery.written[0]
        assert filename == "produtos.xlsx"
        assert data[:2] == b"PK"
        assert delivery.shared == ["/cache/produtos.xlsx"]

    @pytest.mark.asyncio
    async def test_export_empty_list(self):
        delivery = FakeDelivery()
        controller = ShoppingListController(delivery=delivery)
        result = await controller.export()
        assert result.ok
        assert len(delivery.written) == 1

    @pytest.mark.asyncio
    async def test_write_failure_skips_share(self, caplog):
        delivery = FakeDelivery(write_error=ExportWriteError("disco cheio"))
        controller = ShoppingListController(delivery=delivery)

        with caplog.at_level(logging.ERROR, logger="listacompras.controller"):
            result = await controller.export()

        assert result.status is ExportStatus.WRITE_FAILED
        assert result.error == "disco cheio"
        assert delivery.shared == []
        assert "Erro ao escrever arquivo" in caplog.text

    @pytest.mark.asyncio
    async def test_unexpected_write_error_is_caught(self, caplog):
        delivery = FakeDelivery(write_error=OSError("permissão negada"))
        controller = ShoppingListController(delivery=delivery)

        with caplog.at_level(logging.ERROR, logger="listacompras.controller"):
            result = await controller.export()

        assert result.status is ExportStatus.WRITE_FAILED
        assert result.error == "permissão negada"
        assert result.handle is None
        assert delivery.shared == []
        assert "Erro inesperado ao escrever arquivo" in caplog.text

    @pytest.mark.asyncio
    async def test_share_failure_is_reported(self, caplog):
        delivery = FakeDelivery(share_error=ShareError("sem aplicativo"))
        controller = ShoppingListController(delivery=delivery)

        with caplog.at_level(logging.ERROR, logger="listacompras.controller"):
            result = await controller.export()

        assert result.status is ExportStatus.SHARE_FAILED
        assert result.handle == "/cache/produtos.xlsx"
        assert not result.ok
        assert "Erro ao compartilhar arquivo" in caplog.text

    @pytest.mark.asyncio
    async def test_unexpected_share_error_is_caught(self):
        delivery = FakeDelivery(share_error=ConnectionError("offline"))
        controller = ShoppingListController(delivery=delivery)
        result = await controller.export()
        assert result.status is ExportStatus.SHARE_FAILED
        assert result.error == "offline"

    @pytest.mark.asyncio
    async def test_no_delivery(self, controller):
        result = await controller.export()
        assert result.status is ExportStatus.NO_DELIVERY
