"""Registries — in-memory коллабораторы marketplace.

Payment token, реестр parcels и реестр estates. Все три реализуют
checkpoint capability, поэтому откатываются вместе с операцией
marketplace.
"""

from .estate import EstateRegistry
from .land import LandRegistry, decode_token_id, encode_token_id
from .payment_token import InMemoryPaymentToken

__all__ = [
    "InMemoryPaymentToken",
    "LandRegistry",
    "EstateRegistry",
    "encode_token_id",
    "decode_token_id",
]
