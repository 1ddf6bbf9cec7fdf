"""
NonFungibleRegistry — общая логика владения и approvals

Ownership, per-asset approval, approval-for-all и перевод с проверкой
оператора. Используется LandRegistry и EstateRegistry.
"""

import copy
import logging
from typing import Any, Dict, Optional, Set

from src.core.errors import Unauthorized

logger = logging.getLogger(__name__)


class NonFungibleRegistry:
    """
    In-memory реестр non-fungible активов.

    Args:
        address: Identity реестра (asset_contract в ордерах)
    """

    def __init__(self, address: str):
        self.address = address
        self._owners: Dict[int, str] = {}
        self._approvals: Dict[int, str] = {}
        self._operators: Dict[str, Set[str]] = {}

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------

    def exists(self, asset_id: int) -> bool:
        return asset_id in self._owners

    def owner_of(self, asset_id: int) -> Optional[str]:
        return self._owners.get(asset_id)

    def balance_of(self, holder: str) -> int:
        return sum(1 for owner in self._owners.values() if owner == holder)

    def assets_of(self, holder: str) -> list[int]:
        return sorted(asset_id for asset_id, owner in self._owners.items() if owner == holder)

    # -------------------------------------------------------------------------
    # Approvals
    # -------------------------------------------------------------------------

    def approve(self, caller: str, operator: str, asset_id: int) -> None:
        """
        Approval оператора на конкретный актив.

        Raises:
            Unauthorized: caller не владелец и не approved-for-all оператор владельца
        """
        owner = self._require_exists(asset_id)
        if caller != owner and not self.is_approved_for_all(owner, caller):
            raise Unauthorized(f"{caller} cannot approve asset {asset_id}")
        self._approvals[asset_id] = operator

    def get_approved(self, asset_id: int) -> Optional[str]:
        return self._approvals.get(asset_id)

    def set_approval_for_all(self, caller: str, operator: str, approved: bool) -> None:
        operators = self._operators.setdefault(caller, set())
        if approved:
            operators.add(operator)
        else:
            operators.discard(operator)

    def is_approved_for_all(self, holder: str, operator: str) -> bool:
        return operator in self._operators.get(holder, set())

    def is_approved_or_owner(self, operator: str, asset_id: int) -> bool:
        owner = self._owners.get(asset_id)
        if owner is None:
            return False
        return (
            operator == owner
            or self._approvals.get(asset_id) == operator
            or self.is_approved_for_all(owner, operator)
        )

    # -------------------------------------------------------------------------
    # Transfer
    # -------------------------------------------------------------------------

    def transfer(self, operator: str, from_: str, to: str, asset_id: int) -> None:
        """
        Перевод актива.

        Raises:
            Unauthorized: from_ не владелец или operator не авторизован
            ValueError: Пустой получатель
        """
        owner = self._require_exists(asset_id)
        if owner != from_:
            raise Unauthorized(f"{from_} is not the owner of asset {asset_id}")
        if not self.is_approved_or_owner(operator, asset_id):
            raise Unauthorized(f"{operator} is not allowed to transfer asset {asset_id}")
        if not to:
            raise ValueError("Transfer recipient must be non-empty")
        self._move(asset_id, to)
        logger.info("%s: asset %d transferred %s -> %s", self.address, asset_id, from_, to)

    def _mint(self, asset_id: int, to: str) -> None:
        if asset_id in self._owners:
            raise ValueError(f"Asset {asset_id} already exists in {self.address}")
        self._owners[asset_id] = to

    def _move(self, asset_id: int, to: str) -> None:
        self._approvals.pop(asset_id, None)
        self._owners[asset_id] = to

    def _require_exists(self, asset_id: int) -> str:
        owner = self._owners.get(asset_id)
        if owner is None:
            raise ValueError(f"Asset {asset_id} does not exist in {self.address}")
        return owner

    # -------------------------------------------------------------------------
    # Checkpoint capability
    # -------------------------------------------------------------------------

    def checkpoint(self) -> Any:
        return copy.deepcopy(self._state())

    def restore(self, token: Any) -> None:
        self._load_state(copy.deepcopy(token))

    def _state(self) -> Dict[str, Any]:
        return {
            "owners": self._owners,
            "approvals": self._approvals,
            "operators": self._operators,
        }

    def _load_state(self, state: Dict[str, Any]) -> None:
        self._owners = state["owners"]
        self._approvals = state["approvals"]
        self._operators = state["operators"]
