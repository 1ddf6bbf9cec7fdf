"""
Settlement — раскладка цены сделки между seller и владельцем marketplace

Publication fee собирается при создании ордера и здесь не участвует.
"""

from dataclasses import dataclass

from src.core.domain.units import owner_cut_amount


@dataclass(frozen=True)
class Settlement:
    """Результат расчёта settlement.

    Инвариант: owner_cut + seller_amount == price.
    """

    price: int
    owner_cut_percent: int
    owner_cut: int
    seller_amount: int


def compute_settlement(price: int, owner_cut_percent: int) -> Settlement:
    """
    Расчёт settlement для исполнения ордера.

    cut = floor(price * owner_cut_percent / 100)
    seller_amount = price - cut

    Args:
        price: Цена ордера в base units
        owner_cut_percent: Текущий owner cut

    Returns:
        Settlement
    """
    cut = owner_cut_amount(price, owner_cut_percent)
    return Settlement(
        price=price,
        owner_cut_percent=owner_cut_percent,
        owner_cut=cut,
        seller_amount=price - cut,
    )
