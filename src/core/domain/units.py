"""
TokenUnits — Централизованный модуль единиц payment token и fee-математики

Единственный допустимый способ преобразований между:
- десятичной суммой токена (например, 1.0 MANA)
- base units (наименьшая единица, int, 18 знаков)
- долей owner cut в процентах от цены

ЗАПРЕЩЕНО считать балансы во float. Все суммы внутри marketplace — int
base units; Decimal используется только на границе конверсии.
"""

from decimal import Decimal
from typing import Final, Union


# =============================================================================
# ПАРАМЕТРЫ ТОКЕНА
# =============================================================================
# Количество знаков после запятой payment token
TOKEN_DECIMALS: Final[int] = 18

# Множитель десятичная сумма → base units
BASE_UNITS_PER_TOKEN: Final[int] = 10**TOKEN_DECIMALS

# Owner cut задаётся целым процентом, строго меньше 100
OWNER_CUT_PERCENT_MAX: Final[int] = 99

# Знаменатель для процентов
PERCENT_DENOMINATOR: Final[int] = 100


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def to_base_units(amount: Union[int, str, Decimal, float]) -> int:
    """
    Конверсия: десятичная сумма токена → base units.

    Float приводится через str(), чтобы 0.1 превратился ровно в 10**17,
    а не в ближайшее двоичное приближение.

    Args:
        amount: Сумма в токенах (например, 1.0 или "0.2")

    Returns:
        Сумма в base units (int)

    Raises:
        ValueError: Если сумма отрицательная или дробнее base unit
    """
    value = Decimal(str(amount)) * BASE_UNITS_PER_TOKEN
    if value < 0:
        raise ValueError(f"Token amount cannot be negative: {amount}")
    if value != value.to_integral_value():
        raise ValueError(f"Token amount {amount} is finer than one base unit")
    return int(value)


def from_base_units(units: int) -> Decimal:
    """
    Конверсия: base units → десятичная сумма токена.

    Args:
        units: Сумма в base units

    Returns:
        Decimal сумма в токенах
    """
    return Decimal(units) / BASE_UNITS_PER_TOKEN


# =============================================================================
# FEE-МАТЕМАТИКА
# =============================================================================


def owner_cut_amount(price: int, owner_cut_percent: int) -> int:
    """
    Доля владельца marketplace от цены сделки.

    cut = floor(price * owner_cut_percent / 100)

    Args:
        price: Цена ордера в base units
        owner_cut_percent: Целый процент owner cut

    Returns:
        Owner cut в base units (округление вниз)
    """
    validate_price(price)
    validate_owner_cut_percent(owner_cut_percent)
    return price * owner_cut_percent // PERCENT_DENOMINATOR


def seller_proceeds(price: int, owner_cut_percent: int) -> int:
    """
    Сумма, которую получает seller: price - cut.

    Округление cut вниз означает, что остаток от деления всегда уходит seller.
    """
    return price - owner_cut_amount(price, owner_cut_percent)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_price(price: int) -> None:
    """
    Проверка корректности цены.

    Нулевая цена допустима (нижней границы нет), отрицательная — нет.

    Raises:
        ValueError: Если цена отрицательная или не целая
    """
    if isinstance(price, bool) or not isinstance(price, int):
        raise ValueError(f"Price must be an integer amount of base units: {price!r}")
    if price < 0:
        raise ValueError(f"Price cannot be negative: {price}")


def validate_publication_fee(fee: int) -> None:
    """
    Проверка publication fee.

    Raises:
        ValueError: Если fee отрицательный или не целый
    """
    if isinstance(fee, bool) or not isinstance(fee, int):
        raise ValueError(f"Publication fee must be an integer amount of base units: {fee!r}")
    if fee < 0:
        raise ValueError(f"Publication fee cannot be negative: {fee}")


def validate_owner_cut_percent(owner_cut_percent: int) -> None:
    """
    Проверка owner cut: целое в диапазоне [0, OWNER_CUT_PERCENT_MAX].

    Raises:
        ValueError: Если процент вне диапазона
    """
    if isinstance(owner_cut_percent, bool) or not isinstance(owner_cut_percent, int):
        raise ValueError(f"Owner cut must be an integer percentage: {owner_cut_percent!r}")
    if not 0 <= owner_cut_percent <= OWNER_CUT_PERCENT_MAX:
        raise ValueError(
            f"Owner cut {owner_cut_percent}% out of range "
            f"[0, {OWNER_CUT_PERCENT_MAX}] (owner_cut_must_be_below_100)"
        )
