"""Pure state transitions for the shopping list screen.

Every function takes a ShoppingListState and returns a new one; nothing is
mutated in place, so the controller can hold the state in a single attribute
and tests can exercise transitions without any UI.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Callable

from .formatting import (
    format_price_input,
    format_quantity,
    normalize_price_text,
    parse_price,
    parse_quantity,
)
from .models import (
    MONEY_CONTEXT,
    FormState,
    Item,
    ShoppingListState,
    ValidationError,
)


def new_item_id() -> str:
    return uuid.uuid4().hex


def update_form(
    state: ShoppingListState,
    *,
    name: str | None = None,
    quantity: str | None = None,
    price: str | None = None,
) -> ShoppingListState:
    """Apply text-input changes. Fields left as None keep their value.

    The price text is normalized as it is typed, so "3,50" is held as "3.50".
    """
    changes: dict = {}
    if name is not None:
        changes["name"] = name
    if quantity is not None:
        changes["quantity"] = quantity
    if price is not None:
        changes["price"] = normalize_price_text(price)
    if not changes:
        return state
    return replace(state, form=replace(state.form, **changes))


def _validate(form: FormState) -> tuple[str, Decimal, Decimal]:
    name = form.name.strip()
    if not name:
        raise ValidationError("Nome do produto é obrigatório")
    quantity = parse_quantity(form.quantity)
    price = parse_price(form.price)
    return name, quantity, price


def submit_form(
    state: ShoppingListState,
    id_factory: Callable[[], str] = new_item_id,
) -> tuple[ShoppingListState, Item]:
    """Add a new item, or save the one being edited.

    Returns:
        The new state and the stored item.

    Raises:
        ValidationError: If the name is empty or a number does not parse.
            No new state is produced in that case.
    """
    name, quantity, price = _validate(state.form)
    editing_id = state.form.editing_id

    if editing_id is None:
        item = Item(id=id_factory(), name=name, quantity=quantity, unit_price=price)
        items = state.items + (item,)
        total = MONEY_CONTEXT.add(state.total, item.subtotal)
    else:
        item = Item(id=editing_id, name=name, quantity=quantity, unit_price=price)
        previous = state.find(editing_id)
        # An item deleted mid-edit contributes nothing and is not re-added
        if previous is None:
            items = state.items
            total = state.total
        else:
            items = tuple(item if i.id == editing_id else i for i in state.items)
            total = MONEY_CONTEXT.add(
                MONEY_CONTEXT.subtract(state.total, previous.subtotal),
                item.subtotal,
            )

    return ShoppingListState(items=items, total=total, form=FormState()), item


def start_edit(state: ShoppingListState, item_id: str) -> ShoppingListState:
    """Load an item into the form and mark it as being edited."""
    item = state.find(item_id)
    if item is None:
        return state
    form = FormState(
        name=item.name,
        quantity=format_quantity(item.quantity),
        price=format_price_input(item.unit_price),
        editing_id=item.id,
    )
    return replace(state, form=form)


def cancel_edit(state: ShoppingListState) -> ShoppingListState:
    return replace(state, form=FormState())


def delete_item(state: ShoppingListState, item_id: str) -> ShoppingListState:
    """Remove an item by id. Unknown ids leave the state unchanged."""
    item = state.find(item_id)
    if item is None:
        return state
    form = state.form
    if form.editing_id == item_id:
        form = FormState()
    return ShoppingListState(
        items=tuple(i for i in state.items if i.id != item_id),
        total=MONEY_CONTEXT.subtract(state.total, item.subtotal),
        form=form,
    )
