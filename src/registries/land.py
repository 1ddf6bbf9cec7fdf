"""
LandRegistry — реестр parcels, адресуемых координатами (x, y)

Token id parcel кодирует координаты: старшие 128 бит — x, младшие — y
(two's complement для отрицательных). Parcel, поглощённый estate,
принадлежит реестру estates, а не пользователю.
"""

import logging
from typing import Final, Iterable, Optional, Tuple

from src.core.errors import Unauthorized
from src.registries.base import NonFungibleRegistry

logger = logging.getLogger(__name__)

# Допустимый диапазон координат (открытый интервал)
COORDINATE_LIMIT: Final[int] = 1_000_000

_HALF_BITS: Final[int] = 128
_HALF_MASK: Final[int] = (1 << _HALF_BITS) - 1


def encode_token_id(x: int, y: int) -> int:
    """
    Кодирование координат в token id.

    Raises:
        ValueError: Координата вне (-1_000_000, 1_000_000)
    """
    if not (-COORDINATE_LIMIT < x < COORDINATE_LIMIT and -COORDINATE_LIMIT < y < COORDINATE_LIMIT):
        raise ValueError(f"Coordinates ({x}, {y}) out of range")
    return ((x & _HALF_MASK) << _HALF_BITS) | (y & _HALF_MASK)


def decode_token_id(token_id: int) -> Tuple[int, int]:
    def signed(value: int) -> int:
        return value - (1 << _HALF_BITS) if value >> (_HALF_BITS - 1) else value

    return signed(token_id >> _HALF_BITS), signed(token_id & _HALF_MASK)


class LandRegistry(NonFungibleRegistry):
    """Реестр parcels (простой актив, без fingerprint)."""

    def __init__(self, address: str = "land-registry"):
        super().__init__(address)
        self.estate_registry = None

    def set_estate_registry(self, estate_registry) -> None:
        self.estate_registry = estate_registry

    @staticmethod
    def encode_token_id(x: int, y: int) -> int:
        return encode_token_id(x, y)

    @staticmethod
    def decode_token_id(token_id: int) -> Tuple[int, int]:
        return decode_token_id(token_id)

    def assign_new_parcel(self, x: int, y: int, beneficiary: str) -> int:
        """
        Создание parcel.

        Returns:
            Token id нового parcel

        Raises:
            ValueError: Parcel уже существует
        """
        token_id = encode_token_id(x, y)
        self._mint(token_id, beneficiary)
        logger.info("%s: parcel (%d, %d) assigned to %s", self.address, x, y, beneficiary)
        return token_id

    def owner_of_land(self, x: int, y: int) -> Optional[str]:
        return self.owner_of(encode_token_id(x, y))

    def create_estate(
        self, caller: str, coordinates: Iterable[Tuple[int, int]], beneficiary: str
    ) -> int:
        """
        Объединение parcels в estate.

        Parcels переходят во владение реестра estates, estate — beneficiary.

        Returns:
            Id нового estate

        Raises:
            Unauthorized: caller не может распоряжаться одним из parcels
            ValueError: Реестр estates не подключён или список пуст
        """
        if self.estate_registry is None:
            raise ValueError("Estate registry is not configured")
        token_ids = [encode_token_id(x, y) for x, y in coordinates]
        if not token_ids:
            raise ValueError("Estate must contain at least one parcel")
        for token_id in token_ids:
            self._require_exists(token_id)
            if not self.is_approved_or_owner(caller, token_id):
                raise Unauthorized(f"{caller} cannot move parcel {decode_token_id(token_id)}")

        estate_id = self.estate_registry.mint(beneficiary)
        for token_id in token_ids:
            self._move(token_id, self.estate_registry.address)
            self.estate_registry.attach_land(estate_id, token_id)
        logger.info("%s: estate %d created from %d parcels", self.address, estate_id, len(token_ids))
        return estate_id
