"""
AtomicScope — all-or-nothing выполнение state-changing операции

Внутри scope изменяются Order Store и внешние коллабораторы. Если любой
шаг бросает исключение, все участники с checkpoint capability
откатываются к состоянию на входе в scope, буферизованные события
отбрасываются, исключение пробрасывается без изменений.

События публикуются только после успешного завершения всех шагов.
"""

import logging
from typing import Any, List, Tuple

from src.core.domain.events import MarketplaceEvent
from src.core.ports import Checkpointable
from src.marketplace.event_log import EventLog

logger = logging.getLogger(__name__)


class AtomicScope:
    """
    Context manager атомарной операции.

    Args:
        event_log: Журнал, куда публикуются события при commit
        *participants: Store и коллабораторы; без checkpoint capability игнорируются
        label: Имя операции для логов
    """

    def __init__(self, event_log: EventLog, *participants: Any, label: str = "operation"):
        self._event_log = event_log
        self._participants = participants
        self._label = label
        self._snapshots: List[Tuple[Checkpointable, Any]] = []
        self._pending: List[MarketplaceEvent] = []

    def __enter__(self) -> "AtomicScope":
        self._snapshots = []
        self._pending = []
        seen = set()
        for participant in self._participants:
            # Один коллаборатор может участвовать дважды (token == provider в тестах)
            if id(participant) in seen or not isinstance(participant, Checkpointable):
                continue
            seen.add(id(participant))
            self._snapshots.append((participant, participant.checkpoint()))
        return self

    def emit(self, event: MarketplaceEvent) -> None:
        self._pending.append(event)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self._rollback(exc)
            return False

        try:
            for event in self._pending:
                self._event_log.validate(event)
        except Exception as validation_error:
            self._rollback(validation_error)
            raise

        for event in self._pending:
            self._event_log.publish(event)
        return False

    def _rollback(self, cause: BaseException) -> None:
        for participant, token in reversed(self._snapshots):
            participant.restore(token)
        self._pending = []
        logger.warning(
            "%s rolled back after %s: %s", self._label, type(cause).__name__, cause
        )
