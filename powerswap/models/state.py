"""Pydantic model for raw pair state read from chain."""

from pydantic import BaseModel, Field

from powerswap.constants import WEIGHT_SCALE
from powerswap.models.types import Uint112, Uint256


class PairState(BaseModel):
    """Snapshot of a pair contract's storage, in canonical (token0, token1) order.

    Field sources on the contract:
    - getReserves(): reserve0, reserve1
    - getBalances(): buy_virtual0, buy_virtual1, sell_virtual0, sell_virtual1
    - getPrices(): base_price0, base_price1 (UQ112x112)
    - getR(): blend
    """

    model_config = {"frozen": True, "populate_by_name": True}

    reserve0: Uint112
    reserve1: Uint112
    buy_virtual0: Uint256 = Field(alias="buyVirtual0")
    buy_virtual1: Uint256 = Field(alias="buyVirtual1")
    sell_virtual0: Uint256 = Field(alias="sellVirtual0")
    sell_virtual1: Uint256 = Field(alias="sellVirtual1")
    base_price0: Uint256 = Field(alias="basePrice0")
    base_price1: Uint256 = Field(alias="basePrice1")
    blend: int = Field(ge=0, le=WEIGHT_SCALE, alias="R")

    @classmethod
    def reserves_only(cls, reserve0: int, reserve1: int) -> "PairState":
        """State of a pair with no virtual bookkeeping: everything mirrors the reserves."""
        return cls(
            reserve0=reserve0,
            reserve1=reserve1,
            buy_virtual0=reserve0,
            buy_virtual1=reserve1,
            sell_virtual0=reserve0,
            sell_virtual1=reserve1,
            base_price0=reserve0,
            base_price1=reserve1,
            blend=0,
        )
