"""
EstateRegistry — реестр estates (composite-активы из parcels)

Fingerprint estate — SHA3-256 от id estate, XOR-комбинированный с
SHA3-256 каждого parcel. Не зависит от порядка parcels и меняется при
любом добавлении или изъятии parcel.
"""

import hashlib
import logging
from typing import Any, Dict, FrozenSet, Optional, Set

from src.core.errors import Unauthorized
from src.registries.base import NonFungibleRegistry

logger = logging.getLogger(__name__)


def _digest(data: bytes) -> bytes:
    return hashlib.sha3_256(data).digest()


class EstateRegistry(NonFungibleRegistry):
    """
    Args:
        land_registry: Реестр parcels, из которых собираются estates
        address: Identity реестра
    """

    def __init__(self, land_registry, address: str = "estate-registry"):
        super().__init__(address)
        self.land_registry = land_registry
        self._next_estate_id = 1
        self._estate_lands: Dict[int, Set[int]] = {}
        self._land_estate: Dict[int, int] = {}

    def mint(self, to: str) -> int:
        estate_id = self._next_estate_id
        self._next_estate_id += 1
        self._mint(estate_id, to)
        self._estate_lands[estate_id] = set()
        return estate_id

    def attach_land(self, estate_id: int, land_id: int) -> None:
        """Регистрация parcel, уже переведённого реестру, внутри estate."""
        self._require_exists(estate_id)
        if self.land_registry.owner_of(land_id) != self.address:
            raise ValueError(f"Parcel {land_id} is not held by {self.address}")
        if land_id in self._land_estate:
            raise ValueError(f"Parcel {land_id} already belongs to estate {self._land_estate[land_id]}")
        self._estate_lands[estate_id].add(land_id)
        self._land_estate[land_id] = estate_id

    def add_land(self, caller: str, estate_id: int, land_id: int) -> None:
        """
        Добавление parcel владельца в существующий estate.

        Raises:
            Unauthorized: caller не может распоряжаться estate или parcel
        """
        if not self.is_approved_or_owner(caller, estate_id):
            raise Unauthorized(f"{caller} cannot modify estate {estate_id}")
        owner = self.land_registry.owner_of(land_id)
        self.land_registry.transfer(caller, owner, self.address, land_id)
        self.attach_land(estate_id, land_id)
        logger.info("%s: parcel %d added to estate %d", self.address, land_id, estate_id)

    def transfer_land(self, caller: str, estate_id: int, land_id: int, destination: str) -> None:
        """
        Изъятие parcel из estate в пользу destination.

        Raises:
            Unauthorized: caller не может распоряжаться estate
            ValueError: parcel не входит в estate
        """
        if not self.is_approved_or_owner(caller, estate_id):
            raise Unauthorized(f"{caller} cannot modify estate {estate_id}")
        if self._land_estate.get(land_id) != estate_id:
            raise ValueError(f"Parcel {land_id} is not part of estate {estate_id}")
        self.land_registry.transfer(self.address, self.address, destination, land_id)
        self._estate_lands[estate_id].discard(land_id)
        del self._land_estate[land_id]
        logger.info("%s: parcel %d removed from estate %d", self.address, land_id, estate_id)

    def get_land_estate_id(self, land_id: int) -> Optional[int]:
        return self._land_estate.get(land_id)

    def lands_of(self, estate_id: int) -> FrozenSet[int]:
        self._require_exists(estate_id)
        return frozenset(self._estate_lands[estate_id])

    def size_of(self, estate_id: int) -> int:
        return len(self.lands_of(estate_id))

    # -------------------------------------------------------------------------
    # Fingerprint capability
    # -------------------------------------------------------------------------

    def fingerprint_of(self, estate_id: int) -> bytes:
        """
        Fingerprint текущего состава estate.

        Raises:
            ValueError: Estate не существует
        """
        lands = self.lands_of(estate_id)
        result = int.from_bytes(_digest(b"estateId" + estate_id.to_bytes(32, "big")), "big")
        for land_id in lands:
            result ^= int.from_bytes(_digest(land_id.to_bytes(32, "big")), "big")
        return result.to_bytes(32, "big")

    def verify_fingerprint(self, estate_id: int, fingerprint: bytes) -> bool:
        return self.exists(estate_id) and self.fingerprint_of(estate_id) == fingerprint

    # -------------------------------------------------------------------------
    # Checkpoint capability
    # -------------------------------------------------------------------------

    def _state(self) -> Dict[str, Any]:
        state = super()._state()
        state["next_estate_id"] = self._next_estate_id
        state["estate_lands"] = self._estate_lands
        state["land_estate"] = self._land_estate
        return state

    def _load_state(self, state: Dict[str, Any]) -> None:
        super()._load_state(state)
        self._next_estate_id = state["next_estate_id"]
        self._estate_lands = state["estate_lands"]
        self._land_estate = state["land_estate"]
