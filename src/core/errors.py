"""
Errors — Таксономия отказов marketplace

Любой отказ отклоняет операцию целиком: частичного успеха не бывает.
Все исключения наследуются от MarketplaceError, чтобы вызывающий код мог
перехватить весь класс отказов одним except.
"""


class MarketplaceError(Exception):
    """Базовый класс всех отказов marketplace."""


class SystemPaused(MarketplaceError):
    """Marketplace на паузе, state-changing операции запрещены."""


class AlreadyInitialized(MarketplaceError):
    """Повторная инициализация административного состояния."""


class Unauthorized(MarketplaceError):
    """У вызывающего нет нужной роли или approval."""


class UnsupportedAssetContract(MarketplaceError):
    """Asset contract не зарегистрирован в marketplace."""


class InvalidExpiry(MarketplaceError):
    """expires_at не лежит строго в будущем."""


class OrderNotFound(MarketplaceError):
    """Для (asset_contract, asset_id) нет активного ордера."""


class OrderExpired(MarketplaceError):
    """Текущее время больше expires_at ордера."""


class PriceMismatch(MarketplaceError):
    """Переданная цена не совпадает с ценой ордера."""


class InsufficientFunds(MarketplaceError):
    """Недостаточно баланса или allowance payment token."""


class OwnershipChanged(MarketplaceError):
    """Seller больше не владеет активом."""


class InvalidAssetFingerprint(MarketplaceError):
    """Общий класс отказов проверки fingerprint."""


class FingerprintUnsupported(InvalidAssetFingerprint):
    """Asset provider не умеет считать fingerprint."""


class FingerprintMismatch(InvalidAssetFingerprint):
    """Fingerprint актива изменился с момента осмотра покупателем."""
