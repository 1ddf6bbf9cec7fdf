"""
InMemoryPaymentToken — fungible payment token с allowances

Все суммы — int base units.
"""

import logging
from typing import Dict, Tuple

from src.core.errors import InsufficientFunds

logger = logging.getLogger(__name__)


class InMemoryPaymentToken:
    """
    Args:
        address: Identity токена
        symbol: Тикер (для логов)
    """

    def __init__(self, address: str = "accepted-token", symbol: str = "MANA"):
        self.address = address
        self.symbol = symbol
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}

    def balance_of(self, holder: str) -> int:
        return self._balances.get(holder, 0)

    def allowance(self, holder: str, spender: str) -> int:
        return self._allowances.get((holder, spender), 0)

    def total_supply(self) -> int:
        return sum(self._balances.values())

    def set_balance(self, holder: str, amount: int) -> None:
        """Прямая установка баланса (faucet для тестов и симуляций)."""
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        self._balances[holder] = amount

    def approve(self, holder: str, spender: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Allowance cannot be negative: {amount}")
        self._allowances[(holder, spender)] = amount

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        self._debit(sender, amount)
        self._credit(recipient, amount)

    def transfer_from(self, spender: str, holder: str, recipient: str, amount: int) -> None:
        """
        Перевод от имени spender в пределах allowance.

        Raises:
            InsufficientFunds: Недостаточно баланса или allowance
        """
        allowed = self.allowance(holder, spender)
        if allowed < amount:
            raise InsufficientFunds(
                f"{spender} allowance from {holder} is {allowed}, needs {amount} {self.symbol}"
            )
        self._debit(holder, amount)
        self._allowances[(holder, spender)] = allowed - amount
        self._credit(recipient, amount)
        logger.info("%s: %d transferred %s -> %s by %s", self.symbol, amount, holder, recipient, spender)

    def _debit(self, holder: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Transfer amount cannot be negative: {amount}")
        balance = self.balance_of(holder)
        if balance < amount:
            raise InsufficientFunds(f"{holder} balance is {balance}, needs {amount} {self.symbol}")
        self._balances[holder] = balance - amount

    def _credit(self, recipient: str, amount: int) -> None:
        self._balances[recipient] = self.balance_of(recipient) + amount

    # Checkpoint capability
    def checkpoint(self) -> Tuple[Dict[str, int], Dict[Tuple[str, str], int]]:
        return dict(self._balances), dict(self._allowances)

    def restore(self, token: Tuple[Dict[str, int], Dict[Tuple[str, str], int]]) -> None:
        balances, allowances = token
        self._balances = dict(balances)
        self._allowances = dict(allowances)
