"""
Movement classification.

Maps a movement name (canonical or alias) to the warehouse column it is
grouped by and its sign in on-hand balances. Pure lookups, no I/O.
"""

from dataclasses import dataclass
from decimal import Decimal

from productwise.core.entities.movement import MovementCategory, WarehouseColumn

INBOUND = 1
OUTBOUND = -1


@dataclass(frozen=True)
class Classification:
    """How a movement name is aggregated."""

    category: str  # canonical value, or the raw name when unknown
    known: bool
    column: WarehouseColumn
    sign: int
    absolute: bool  # sum abs(quantity) instead of the stored sign
    aliases: tuple[str, ...]  # stored movement_type values matched


@dataclass(frozen=True)
class _Rule:
    column: WarehouseColumn
    sign: int
    aliases: tuple[str, ...]
    absolute: bool = False


# Alias lookup is exact and case-sensitive.
_RULES: dict[MovementCategory, _Rule] = {
    MovementCategory.PURCHASE: _Rule(
        WarehouseColumn.DEST, INBOUND, ("purchase", "purchases")
    ),
    MovementCategory.PURCHASE_RETURN: _Rule(
        WarehouseColumn.SOURCE, OUTBOUND, ("purchase_return", "purchase_returns")
    ),
    MovementCategory.SALES: _Rule(WarehouseColumn.SOURCE, OUTBOUND, ("sales", "sale")),
    # Returns are stored with negative quantities
    MovementCategory.SALES_RETURNS: _Rule(
        WarehouseColumn.SOURCE,
        INBOUND,
        ("sales_returns", "sales_return", "sale_return"),
        absolute=True,
    ),
    MovementCategory.TRANSFER_IN: _Rule(
        WarehouseColumn.DEST, INBOUND, ("transfer_in", "transfer")
    ),
    MovementCategory.TRANSFER_OUT: _Rule(WarehouseColumn.SOURCE, OUTBOUND, ("transfer_out",)),
    MovementCategory.MANUFACTURING: _Rule(
        WarehouseColumn.DEST, INBOUND, ("manufacturing", "manufacture")
    ),
    MovementCategory.WASTAGES: _Rule(WarehouseColumn.SOURCE, OUTBOUND, ("wastages", "wastage")),
    MovementCategory.CONSUMPTION: _Rule(
        WarehouseColumn.SOURCE, OUTBOUND, ("consumption", "consumptions")
    ),
}

_ALIAS_INDEX: dict[str, MovementCategory] = {
    alias: category for category, rule in _RULES.items() for alias in rule.aliases
}

# Options offered to report clients, in display order
MOVEMENT_OPTIONS: list[tuple[MovementCategory, str]] = [
    (MovementCategory.PURCHASE, "Purchases"),
    (MovementCategory.PURCHASE_RETURN, "Purchase Returns"),
    (MovementCategory.SALES, "Sales"),
    (MovementCategory.SALES_RETURNS, "Sales Returns"),
    (MovementCategory.TRANSFER_IN, "Transfers In"),
    (MovementCategory.TRANSFER_OUT, "Transfers Out"),
    (MovementCategory.MANUFACTURING, "Manufacturing"),
    (MovementCategory.WASTAGES, "Wastages"),
    (MovementCategory.CONSUMPTION, "Consumptions"),
]


def _from_rule(category: MovementCategory) -> Classification:
    rule = _RULES[category]
    return Classification(
        category=category.value,
        known=True,
        column=rule.column,
        sign=rule.sign,
        absolute=rule.absolute,
        aliases=rule.aliases,
    )


def classify(name: str) -> Classification:
    """
    Classify a movement name.

    Unknown names resolve to themselves, grouped on the source warehouse
    with a positive sign, matching only their own stored value.
    """
    category = _ALIAS_INDEX.get(name)
    if category is not None:
        return _from_rule(category)

    return Classification(
        category=name,
        known=False,
        column=WarehouseColumn.SOURCE,
        sign=INBOUND,
        absolute=False,
        aliases=(name,),
    )


def all_categories() -> list[Classification]:
    """Classifications of every known category, in enum order."""
    return [_from_rule(category) for category in MovementCategory]


def signed_quantity(classification: Classification, quantity: Decimal) -> Decimal:
    """Quantity contribution to an on-hand balance."""
    value = abs(quantity) if classification.absolute else quantity
    return classification.sign * value
