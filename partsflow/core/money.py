from collections.abc import Iterable
from decimal import Decimal, ROUND_HALF_UP

MONEY_QUANT = Decimal("0.01")
ZERO_MONEY = Decimal("0.00")


def to_money(value: Decimal | int | float | str) -> Decimal:
    return Decimal(str(value)).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def line_value(quantity: int, unit_price: Decimal | str) -> Decimal:
    return to_money(Decimal(quantity) * Decimal(str(unit_price)))


def sum_money(values: Iterable[Decimal]) -> Decimal:
    total = ZERO_MONEY
    for value in values:
        total += value
    return to_money(total)
