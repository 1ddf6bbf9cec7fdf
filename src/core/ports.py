"""
Ports — Контракты внешних коллабораторов

Engine работает с реестрами активов и payment token только через эти
протоколы. Fingerprint и checkpoint — опциональные capabilities,
проверяются в момент вызова через isinstance (runtime_checkable).
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class AssetProvider(Protocol):
    """
    Реестр non-fungible активов (parcels или estates).

    address — identity контракта, по нему ордер ссылается на реестр.
    """

    address: str

    def owner_of(self, asset_id: int) -> Optional[str]:
        """Текущий владелец или None, если актива не существует."""
        ...

    def is_approved_or_owner(self, operator: str, asset_id: int) -> bool:
        """True если operator — владелец, approved для asset_id или approved-for-all."""
        ...

    def transfer(self, operator: str, from_: str, to: str, asset_id: int) -> None:
        """Перевод актива; бросает исключение, если from_ не владелец или operator не авторизован."""
        ...


@runtime_checkable
class FingerprintProvider(Protocol):
    """Capability composite-реестров: fingerprint текущего состава актива."""

    def fingerprint_of(self, asset_id: int) -> bytes:
        ...


@runtime_checkable
class PaymentToken(Protocol):
    """Fungible payment token с allowance-gated transfer_from."""

    def balance_of(self, holder: str) -> int:
        ...

    def allowance(self, holder: str, spender: str) -> int:
        ...

    def transfer_from(self, spender: str, holder: str, recipient: str, amount: int) -> None:
        """Списывает amount с holder в пользу recipient от имени spender."""
        ...


@runtime_checkable
class Checkpointable(Protocol):
    """Capability отката: snapshot состояния и восстановление из него."""

    def checkpoint(self) -> Any:
        ...

    def restore(self, token: Any) -> None:
        ...
