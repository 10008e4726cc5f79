"""Option-aware price calculation.

Prices are resolved against the option groups a service declares:

- additive choices add a fixed amount (negative amounts are discounts)
- doubling choices double the running total, at most once per calculation
- tiered groups add ``(quantity - threshold) * per_unit_amount`` above the threshold

Groups are walked in declaration order, so the order in which the user picked
options never changes the result. Arithmetic runs in ``Decimal`` and is rounded
to cents once, at the end.
"""

import math
from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from planner.app.models.catalog import (
    AdditiveAdjustment,
    DoublingAdjustment,
    OptionGroup,
    OptionSelection,
    ServiceCatalogEntry,
)
from planner.app.models.errors import InvalidPriceInput
from planner.app.models.summary import PriceBreakdown, PriceLine

_CENT = Decimal("0.01")
_ZERO = Decimal("0")


def _to_decimal(value: float, what: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, int | float | Decimal):
        raise InvalidPriceInput(f"{what} must be a number", value=repr(value))
    try:
        finite = math.isfinite(float(value))
    except OverflowError:
        finite = False
    if not finite:
        raise InvalidPriceInput(f"{what} must be finite", value=repr(value))
    return Decimal(str(value))


def round_money(value: Decimal | float) -> float:
    """Round to cents (half-up) and return a float."""
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def sum_money(amounts: Iterable[float]) -> float:
    """Sum prices exactly and round once."""
    total = sum((Decimal(str(a)) for a in amounts), _ZERO)
    return round_money(total)


def _index_selections(
    selections: Sequence[OptionSelection], option_groups: Sequence[OptionGroup]
) -> dict[str, OptionSelection]:
    declared = {g.id for g in option_groups}
    indexed: dict[str, OptionSelection] = {}
    for selection in selections:
        if selection.group_id not in declared:
            raise InvalidPriceInput(
                f"Unknown option group '{selection.group_id}'", group_id=selection.group_id
            )
        if selection.group_id in indexed:
            raise InvalidPriceInput(
                f"Option group '{selection.group_id}' selected more than once",
                group_id=selection.group_id,
            )
        indexed[selection.group_id] = selection
    return indexed


def _build_lines(
    base: float,
    selections: Sequence[OptionSelection],
    option_groups: Sequence[OptionGroup],
    base_label: str,
) -> tuple[Decimal, list[PriceLine]]:
    """Resolve selections into a raw (unrounded) subtotal plus display lines."""
    total = _to_decimal(base, "base price")
    if total < 0:
        raise InvalidPriceInput("base price must not be negative", value=base)

    lines = [PriceLine(label=base_label, amount=round_money(total), kind="base")]
    indexed = _index_selections(selections, option_groups)
    doubled = False

    for group in option_groups:
        selection = indexed.get(group.id)
        if selection is None:
            continue

        if group.tiered is not None:
            quantity = selection.quantity
            if quantity is None or quantity < 0:
                raise InvalidPriceInput(
                    f"Option group '{group.id}' requires a non-negative quantity",
                    group_id=group.id,
                    quantity=quantity,
                )
            per_unit = _to_decimal(group.tiered.per_unit_amount, "per-unit amount")
            extra_units = quantity - group.tiered.threshold
            if extra_units > 0:
                amount = per_unit * extra_units
                total += amount
                lines.append(
                    PriceLine(
                        label=f"{group.label} ({extra_units} × {round_money(per_unit)})",
                        amount=round_money(amount),
                        kind="tiered",
                    )
                )
            continue

        if selection.value is None:
            raise InvalidPriceInput(
                f"Option group '{group.id}' requires a value", group_id=group.id
            )
        choice = group.choice(selection.value)
        if choice is None:
            raise InvalidPriceInput(
                f"Unknown value '{selection.value}' for option group '{group.id}'",
                group_id=group.id,
                value=selection.value,
            )

        adjustment = choice.adjustment
        if isinstance(adjustment, AdditiveAdjustment):
            amount = _to_decimal(adjustment.amount, "option amount")
            total += amount
            if amount != 0:
                lines.append(
                    PriceLine(
                        label=f"{group.label}: {choice.label}",
                        amount=round_money(amount),
                        kind="discount" if amount < 0 else "addon",
                    )
                )
        elif isinstance(adjustment, DoublingAdjustment) and not doubled:
            doubled = True
            lines.append(
                PriceLine(
                    label=f"{group.label}: {choice.label} (×2)",
                    amount=round_money(total),
                    kind="multiplier",
                )
            )
            total *= 2

    return max(total, _ZERO), lines


def price(
    base: float,
    selections: Sequence[OptionSelection],
    option_groups: Sequence[OptionGroup] = (),
) -> float:
    """Final price of a service configuration, rounded to cents.

    Args:
        base: Service base price (>= 0, finite)
        selections: Chosen options; any order
        option_groups: Option schema declared by the service

    Returns:
        Price rounded half-up to 2 decimals, never below zero

    Raises:
        InvalidPriceInput: Negative/non-finite numbers or unresolvable selections
    """
    subtotal, _ = _build_lines(base, selections, option_groups, "Base price")
    return round_money(subtotal)


def price_service(service: ServiceCatalogEntry, selections: Sequence[OptionSelection]) -> float:
    """Price a catalog entry with the given selections."""
    return price(service.base_price, selections, service.option_groups)


def apply_tax(subtotal: float, tax_rate_percent: float) -> PriceBreakdown:
    """Add a flat percentage tax to a subtotal."""
    sub = _to_decimal(subtotal, "subtotal")
    rate = _to_decimal(tax_rate_percent, "tax rate")
    if sub < 0 or rate < 0:
        raise InvalidPriceInput("subtotal and tax rate must not be negative")
    tax = sub * rate / Decimal(100)
    return PriceBreakdown(
        subtotal=round_money(sub),
        tax=round_money(tax),
        total=round_money(sub + tax),
    )


def breakdown(
    base: float,
    selections: Sequence[OptionSelection],
    option_groups: Sequence[OptionGroup] = (),
    tax_rate_percent: float = 0.0,
    base_label: str = "Base price",
) -> PriceBreakdown:
    """Line-item breakdown of a configuration, optionally with tax.

    ``breakdown(...).subtotal`` always equals ``price(...)`` for the same inputs.
    """
    subtotal, lines = _build_lines(base, selections, option_groups, base_label)
    taxed = apply_tax(round_money(subtotal), tax_rate_percent)
    return PriceBreakdown(
        subtotal=taxed.subtotal,
        tax=taxed.tax,
        total=taxed.total,
        details=lines,
    )


def describe_selections(
    selections: Sequence[OptionSelection], option_groups: Sequence[OptionGroup]
) -> str:
    """Human-readable label of a configuration, in declaration order."""
    indexed = {s.group_id: s for s in selections}
    parts: list[str] = []
    for group in option_groups:
        selection = indexed.get(group.id)
        if selection is None:
            continue
        if group.tiered is not None:
            if selection.quantity is not None:
                parts.append(f"{group.label}: {selection.quantity}")
            continue
        choice = group.choice(selection.value) if selection.value is not None else None
        if choice is not None:
            parts.append(f"{group.label}: {choice.label}")
    return ", ".join(parts)
