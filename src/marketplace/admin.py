"""
AdminControls — административное состояние marketplace

- Однократная инициализация владельца (повтор → AlreadyInitialized)
- Pause switch
- Publication fee и owner cut
- Передача ownership

Engine читает эти значения на каждом вызове и ничего не кэширует,
поэтому изменения видны со следующей операции.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core.domain.events import (
    ChangedOwnerCut,
    ChangedPublicationFee,
    OwnershipTransferred,
    Pause,
    Unpause,
)
from src.core.domain.units import validate_owner_cut_percent, validate_publication_fee
from src.core.errors import AlreadyInitialized, Unauthorized
from src.marketplace.event_log import EventLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarketplaceConfig:
    """Начальная конфигурация комиссий.

    - publication_fee: фиксированная плата за выставление (base units)
    - owner_cut_percent: доля цены владельцу marketplace, 0..99
    """

    publication_fee: int = 0
    owner_cut_percent: int = 0

    def __post_init__(self):
        validate_publication_fee(self.publication_fee)
        validate_owner_cut_percent(self.owner_cut_percent)


class AdminControls:
    """Pause, fee/cut конфигурация и single-owner access control.

    Args:
        config: Начальные значения комиссий
        event_log: Журнал событий (общий с engine)
    """

    def __init__(
        self,
        config: Optional[MarketplaceConfig] = None,
        event_log: Optional[EventLog] = None,
    ):
        config = config or MarketplaceConfig()
        self.event_log = event_log if event_log is not None else EventLog()

        self._owner: Optional[str] = None
        self._initialized = False
        self._paused = False
        self._publication_fee = config.publication_fee
        self._owner_cut_percent = config.owner_cut_percent

    # -------------------------------------------------------------------------
    # Инициализация
    # -------------------------------------------------------------------------

    def initialize(self, owner: str) -> None:
        """
        Однократная установка владельца.

        Raises:
            AlreadyInitialized: Если владелец уже установлен
            ValueError: Если owner пустой
        """
        if self._initialized:
            raise AlreadyInitialized("Admin controls already initialized")
        if not owner:
            raise ValueError("Owner identity must be non-empty")
        self._owner = owner
        self._initialized = True
        logger.info("Marketplace admin initialized, owner=%s", owner)
        self.event_log.publish(OwnershipTransferred(previous_owner=None, new_owner=owner))

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    # -------------------------------------------------------------------------
    # Чтение (используется engine)
    # -------------------------------------------------------------------------

    def is_paused(self) -> bool:
        return self._paused

    def publication_fee(self) -> int:
        return self._publication_fee

    def owner_cut_percent(self) -> int:
        return self._owner_cut_percent

    def admin_identity(self) -> Optional[str]:
        return self._owner

    # -------------------------------------------------------------------------
    # Owner-only операции
    # -------------------------------------------------------------------------

    def pause(self, caller: str) -> None:
        self._require_owner(caller)
        if self._paused:
            return
        self._paused = True
        logger.info("Marketplace paused by %s", caller)
        self.event_log.publish(Pause())

    def unpause(self, caller: str) -> None:
        self._require_owner(caller)
        if not self._paused:
            return
        self._paused = False
        logger.info("Marketplace unpaused by %s", caller)
        self.event_log.publish(Unpause())

    def set_publication_fee(self, caller: str, publication_fee: int) -> None:
        """
        Raises:
            Unauthorized: caller не владелец
            ValueError: fee отрицательный
        """
        self._require_owner(caller)
        validate_publication_fee(publication_fee)
        self._publication_fee = publication_fee
        logger.info("Publication fee set to %d", publication_fee)
        self.event_log.publish(ChangedPublicationFee(publication_fee=publication_fee))

    def set_owner_cut(self, caller: str, owner_cut_percent: int) -> None:
        """
        Raises:
            Unauthorized: caller не владелец
            ValueError: процент вне [0, 99]
        """
        self._require_owner(caller)
        validate_owner_cut_percent(owner_cut_percent)
        self._owner_cut_percent = owner_cut_percent
        logger.info("Owner cut set to %d%%", owner_cut_percent)
        self.event_log.publish(ChangedOwnerCut(owner_cut_percent=owner_cut_percent))

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self._require_owner(caller)
        if not new_owner:
            raise ValueError("New owner identity must be non-empty")
        previous = self._owner
        self._owner = new_owner
        logger.info("Marketplace ownership transferred %s -> %s", previous, new_owner)
        self.event_log.publish(OwnershipTransferred(previous_owner=previous, new_owner=new_owner))

    def _require_owner(self, caller: str) -> None:
        if not self._initialized or caller != self._owner:
            logger.debug("Rejected admin call from %s", caller)
            raise Unauthorized(f"{caller} is not the marketplace owner")
