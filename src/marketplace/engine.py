"""
Marketplace — Order Lifecycle Engine

Создание, замена, отмена и исполнение ордеров на parcels и estates
против fungible payment token.

Порядок проверок фиксирован, каждая проверка — отдельный тип отказа.
Все проверки выполняются до первого изменения состояния; изменения
выполняются внутри AtomicScope: сначала Order Store, затем внешние
переводы. Любой сбой перевода откатывает всю операцию, поэтому token
и asset providers обязаны поддерживать checkpoint/restore.

Состояния ордера: absent → active (create) → absent (cancel | execute).
Повторный create для той же пары — replace: новый id, старый недоступен.
"""

import hashlib
import hmac
import logging
from typing import Dict, Iterable, Optional

from src.core.domain.events import OrderCancelled, OrderCreated, OrderSuccessful
from src.core.domain.order import Order, OrderKey
from src.core.domain.units import validate_price
from src.core.errors import (
    FingerprintMismatch,
    FingerprintUnsupported,
    InsufficientFunds,
    InvalidExpiry,
    OrderExpired,
    OrderNotFound,
    OwnershipChanged,
    PriceMismatch,
    SystemPaused,
    Unauthorized,
    UnsupportedAssetContract,
)
from src.core.ports import AssetProvider, Checkpointable, FingerprintProvider, PaymentToken
from src.marketplace.admin import AdminControls
from src.marketplace.atomic import AtomicScope
from src.marketplace.clock import SystemClock
from src.marketplace.event_log import EventLog
from src.marketplace.settlement import compute_settlement
from src.marketplace.store import OrderStore

logger = logging.getLogger(__name__)


class Marketplace:
    """Order Lifecycle Engine.

    Args:
        address: Identity marketplace (operator для approvals и spender для allowance)
        accepted_token: Payment token
        admin: Инициализированные AdminControls
        asset_providers: Реестры активов, с которыми работает marketplace
        clock: Источник времени с методом now() (default SystemClock)
        store: Order Store (default новый пустой)
        event_log: Журнал событий (default журнал AdminControls)
    """

    def __init__(
        self,
        address: str,
        accepted_token: PaymentToken,
        admin: AdminControls,
        asset_providers: Iterable[AssetProvider],
        clock=None,
        store: Optional[OrderStore] = None,
        event_log: Optional[EventLog] = None,
    ):
        if not address:
            raise ValueError("Marketplace address must be non-empty")
        if not admin.is_initialized:
            raise ValueError("Admin controls must be initialized before building the marketplace")
        if not isinstance(accepted_token, PaymentToken):
            raise TypeError(f"{accepted_token!r} does not implement the payment token interface")
        if not isinstance(accepted_token, Checkpointable):
            raise TypeError(f"Payment token {accepted_token!r} must support checkpoint/restore")

        self.address = address
        self.accepted_token = accepted_token
        self.admin = admin
        self.clock = clock or SystemClock()
        self.store = store if store is not None else OrderStore()
        self.event_log = event_log if event_log is not None else admin.event_log

        self._providers: Dict[str, AssetProvider] = {}
        for provider in asset_providers:
            if not isinstance(provider, AssetProvider):
                raise TypeError(f"{provider!r} does not implement the asset provider interface")
            if not isinstance(provider, Checkpointable):
                raise TypeError(f"Asset provider {provider.address} must support checkpoint/restore")
            self._providers[provider.address] = provider

        # Nonce гарантирует уникальность id даже при равных остальных входах
        self._nonce = 0

    # =========================================================================
    # QUERIES
    # =========================================================================

    def order_by_asset(self, asset_contract: str, asset_id: int) -> Optional[Order]:
        # Такой пары не может быть в store
        if not asset_contract or asset_id < 0:
            return None
        return self.store.get(OrderKey(asset_contract=asset_contract, asset_id=asset_id))

    # =========================================================================
    # CREATE / CANCEL
    # =========================================================================

    def create_order(
        self,
        asset_contract: str,
        asset_id: int,
        price: int,
        expires_at: int,
        caller: str,
    ) -> Order:
        """
        Выставление актива на продажу (или replace существующего ордера).

        Порядок проверок:
        1. Marketplace не на паузе
        2. expires_at строго в будущем
        3. caller — текущий владелец, marketplace approved (для актива или for-all)
        4. Если publication_fee > 0 — баланс и allowance caller достаточны

        Returns:
            Новый ордер

        Raises:
            SystemPaused, InvalidExpiry, UnsupportedAssetContract,
            Unauthorized, InsufficientFunds
        """
        self._require_not_paused("create_order")
        validate_price(price)

        now = self.clock.now()
        if expires_at <= now:
            self._reject(InvalidExpiry(f"expires_at {expires_at} must be after current time {now}"))

        provider = self._provider(asset_contract)
        asset_owner = provider.owner_of(asset_id)
        if asset_owner is None or asset_owner != caller:
            self._reject(
                Unauthorized(f"{caller} does not own asset {asset_id} of {asset_contract}")
            )
        if not provider.is_approved_or_owner(self.address, asset_id):
            self._reject(
                Unauthorized(f"Marketplace is not approved to move asset {asset_id} of {asset_contract}")
            )

        publication_fee = self.admin.publication_fee()
        if publication_fee > 0:
            self._require_funds(caller, publication_fee)

        order = Order(
            id=self._next_order_id(caller, asset_contract, asset_id, price, now),
            seller=caller,
            asset_contract=asset_contract,
            asset_id=asset_id,
            price=price,
            expires_at=expires_at,
        )

        with AtomicScope(self.event_log, self.store, self.accepted_token, label="create_order") as scope:
            replaced = self.store.put(order.key, order)
            if publication_fee > 0:
                self.accepted_token.transfer_from(
                    self.address, caller, self.admin.admin_identity(), publication_fee
                )
            scope.emit(
                OrderCreated(
                    order_id=order.id,
                    asset_id=order.asset_id,
                    seller=order.seller,
                    asset_contract=order.asset_contract,
                    price=order.price,
                    expires_at=order.expires_at,
                )
            )

        if replaced is not None:
            logger.info("Order %s replaced by %s for %s", replaced.id, order.id, order.key)
        logger.info(
            "Order %s created for %s, seller=%s price=%d expires_at=%d",
            order.id, order.key, order.seller, order.price, order.expires_at,
        )
        return order

    def cancel_order(self, asset_contract: str, asset_id: int, caller: str) -> Order:
        """
        Отмена ордера seller или владельцем marketplace. Средства не двигаются.

        Returns:
            Отменённый ордер

        Raises:
            SystemPaused, OrderNotFound, Unauthorized
        """
        self._require_not_paused("cancel_order")
        order = self._require_order(asset_contract, asset_id)

        if caller != order.seller and caller != self.admin.admin_identity():
            self._reject(Unauthorized(f"{caller} is neither the seller nor the marketplace owner"))

        with AtomicScope(self.event_log, self.store, label="cancel_order") as scope:
            self.store.remove(order.key)
            scope.emit(
                OrderCancelled(
                    order_id=order.id,
                    asset_id=order.asset_id,
                    seller=order.seller,
                    asset_contract=order.asset_contract,
                )
            )

        logger.info("Order %s cancelled for %s by %s", order.id, order.key, caller)
        return order

    # =========================================================================
    # EXECUTE
    # =========================================================================

    def execute_order(self, asset_contract: str, asset_id: int, price: int, caller: str) -> Order:
        """
        Покупка актива по точной цене ордера.

        Returns:
            Исполненный ордер

        Raises:
            SystemPaused, OrderNotFound, Unauthorized, OrderExpired,
            PriceMismatch, InsufficientFunds, OwnershipChanged
        """
        return self._execute(asset_contract, asset_id, price, caller)

    def safe_execute_order(
        self,
        asset_contract: str,
        asset_id: int,
        price: int,
        fingerprint: bytes,
        caller: str,
    ) -> Order:
        """
        Покупка composite-актива с проверкой fingerprint.

        Fingerprint пересчитывается у provider в момент исполнения и должен
        совпасть с переданным побайтно: состав estate не менялся с момента,
        когда покупатель его осмотрел.

        Raises:
            Всё, что execute_order, а также
            FingerprintUnsupported: provider не умеет считать fingerprint
            FingerprintMismatch: fingerprint изменился
        """
        return self._execute(
            asset_contract, asset_id, price, caller, fingerprint=fingerprint, verify_fingerprint=True
        )

    def _execute(
        self,
        asset_contract: str,
        asset_id: int,
        price: int,
        caller: str,
        fingerprint: Optional[bytes] = None,
        verify_fingerprint: bool = False,
    ) -> Order:
        operation = "safe_execute_order" if verify_fingerprint else "execute_order"

        # 1. Pause
        self._require_not_paused(operation)

        # 2. Ордер существует
        order = self._require_order(asset_contract, asset_id)
        if caller == order.seller:
            self._reject(Unauthorized(f"Seller {caller} cannot buy their own order {order.id}"))

        # 3. Expiry
        now = self.clock.now()
        if order.is_expired(now):
            self._reject(OrderExpired(f"Order {order.id} expired at {order.expires_at}, now {now}"))

        # 4. Точная цена
        if price != order.price:
            self._reject(PriceMismatch(f"Order {order.id} price is {order.price}, got {price}"))

        # 5. Баланс и allowance покупателя
        self._require_funds(caller, order.price)

        # 6. Seller всё ещё владелец (свежий запрос к provider)
        provider = self._provider(order.asset_contract)
        if provider.owner_of(order.asset_id) != order.seller:
            self._reject(
                OwnershipChanged(f"Seller {order.seller} no longer owns asset {order.asset_id}")
            )
        if not provider.is_approved_or_owner(self.address, order.asset_id):
            self._reject(
                Unauthorized(
                    f"Marketplace is no longer approved to move asset {order.asset_id} "
                    f"of {order.asset_contract}"
                )
            )

        # 7. Fingerprint (только safe_execute_order)
        if verify_fingerprint:
            self._require_fingerprint(provider, order.asset_id, fingerprint)

        settlement = compute_settlement(order.price, self.admin.owner_cut_percent())
        marketplace_owner = self.admin.admin_identity()

        with AtomicScope(
            self.event_log, self.store, self.accepted_token, provider, label=operation
        ) as scope:
            self.store.remove(order.key)
            if settlement.owner_cut > 0:
                self.accepted_token.transfer_from(
                    self.address, caller, marketplace_owner, settlement.owner_cut
                )
            if settlement.seller_amount > 0:
                self.accepted_token.transfer_from(
                    self.address, caller, order.seller, settlement.seller_amount
                )
            provider.transfer(self.address, order.seller, caller, order.asset_id)
            scope.emit(
                OrderSuccessful(
                    order_id=order.id,
                    asset_id=order.asset_id,
                    seller=order.seller,
                    asset_contract=order.asset_contract,
                    price=order.price,
                    buyer=caller,
                )
            )

        logger.info(
            "Order %s executed for %s: buyer=%s price=%d owner_cut=%d seller_amount=%d",
            order.id, order.key, caller, settlement.price, settlement.owner_cut,
            settlement.seller_amount,
        )
        return order

    # =========================================================================
    # GUARDS
    # =========================================================================

    def _require_not_paused(self, operation: str) -> None:
        if self.admin.is_paused():
            self._reject(SystemPaused(f"{operation} rejected: marketplace is paused"))

    def _require_order(self, asset_contract: str, asset_id: int) -> Order:
        order = self.order_by_asset(asset_contract, asset_id)
        if order is None:
            self._reject(OrderNotFound(f"No order for asset {asset_id} of {asset_contract}"))
        return order

    def _require_funds(self, holder: str, amount: int) -> None:
        balance = self.accepted_token.balance_of(holder)
        if balance < amount:
            self._reject(InsufficientFunds(f"{holder} balance {balance} is below {amount}"))
        allowance = self.accepted_token.allowance(holder, self.address)
        if allowance < amount:
            self._reject(
                InsufficientFunds(f"{holder} allowance {allowance} to marketplace is below {amount}")
            )

    def _require_fingerprint(
        self, provider: AssetProvider, asset_id: int, fingerprint: Optional[bytes]
    ) -> None:
        if not isinstance(provider, FingerprintProvider):
            self._reject(
                FingerprintUnsupported(f"{provider.address} does not support asset fingerprints")
            )
        current = provider.fingerprint_of(asset_id)
        if not isinstance(fingerprint, (bytes, bytearray)) or not hmac.compare_digest(
            current, bytes(fingerprint)
        ):
            self._reject(FingerprintMismatch(f"Fingerprint of asset {asset_id} does not match"))

    def _provider(self, asset_contract: str) -> AssetProvider:
        provider = self._providers.get(asset_contract)
        if provider is None:
            self._reject(UnsupportedAssetContract(f"{asset_contract} is not a supported asset registry"))
        return provider

    def _next_order_id(
        self, seller: str, asset_contract: str, asset_id: int, price: int, now: int
    ) -> str:
        self._nonce += 1
        blob = f"{self._nonce}:{now}:{seller}:{asset_contract}:{asset_id}:{price}".encode("utf-8")
        return "0x" + hashlib.sha3_256(blob).hexdigest()

    @staticmethod
    def _reject(error: Exception) -> None:
        logger.debug("Rejected: %s: %s", type(error).__name__, error)
        raise error
