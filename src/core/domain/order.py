"""
Order — Модель активного ордера на продажу

Immutable Pydantic модель. Ордер никогда не изменяется на месте:
любое изменение — это replace (новый create_order для той же пары)
или delete (cancel / execute).
"""

from pydantic import BaseModel, Field


# =============================================================================
# ORDER KEY
# =============================================================================


class OrderKey(BaseModel):
    """
    Ключ Order Store: на одну пару (asset_contract, asset_id) — не больше
    одного активного ордера.
    """

    asset_contract: str = Field(..., min_length=1, description="Identity asset provider")
    asset_id: int = Field(..., ge=0, description="Идентификатор актива внутри provider")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.asset_contract}#{self.asset_id}"


# =============================================================================
# ORDER MODEL
# =============================================================================


class Order(BaseModel):
    """
    Модель ордера на продажу parcel или estate.

    Immutable модель (frozen=True).
    """

    # Идентификация
    id: str = Field(..., min_length=1, description="Уникальный id, новый при каждом создании")
    seller: str = Field(..., min_length=1, description="Кто выставил актив")

    # Актив
    asset_contract: str = Field(..., min_length=1, description="Identity asset provider")
    asset_id: int = Field(..., ge=0, description="Идентификатор parcel или estate")

    # Условия
    price: int = Field(..., ge=0, description="Цена в base units payment token")
    expires_at: int = Field(..., gt=0, description="Момент истечения (UNIX seconds)")

    model_config = {"frozen": True}

    @property
    def key(self) -> OrderKey:
        return OrderKey(asset_contract=self.asset_contract, asset_id=self.asset_id)

    def is_expired(self, now: int) -> bool:
        """
        Истёк ли ордер к моменту now.

        Исполнение разрешено при now <= expires_at.
        """
        return now > self.expires_at
