from enum import Enum

from pydantic import BaseModel, Field

from app.api.common.annotations import (
    ETH_AMOUNT_DESCRIPTION,
    WALLET_ADDRESS_DESCRIPTION,
)


class InputMode(str, Enum):
    ADDRESS = "address"
    MANUAL = "manual"


class AnalysisRequest(BaseModel):
    address: str | None = Field(default=None, description=WALLET_ADDRESS_DESCRIPTION)
    eth_amount: float | None = Field(default=None, description=ETH_AMOUNT_DESCRIPTION)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"address": "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"},
                {"eth_amount": 10.5},
            ]
        }
    }

    @property
    def mode(self) -> InputMode:
        return InputMode.MANUAL if self.eth_amount is not None else InputMode.ADDRESS


class EthPortfolio(BaseModel):
    balance: float = Field(description="ETH held one month ago")
    current_price: float
    month_ago_price: float
    value_month_ago: float = Field(description="USD value of the balance a month ago")
    current_value: float = Field(description="USD value of the balance today")
    price_change: float = Field(description="30-day ETH price change percentage")


class CoinComparison(BaseModel):
    coin: str = Field(description="Coin name")
    symbol: str
    potential_gain: float = Field(
        description="USD difference between converting to the coin and holding ETH"
    )
    actual_gain: float = Field(description="30-day price change of the coin")
    price_change: float
    eth_change: float
    token_change: float
    eth_winner: bool = Field(description="Whether holding ETH did at least as well")


class AnalysisResponse(BaseModel):
    eth: EthPortfolio
    comparisons: list[CoinComparison]
