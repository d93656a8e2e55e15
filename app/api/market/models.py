from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CoinMarket(BaseModel):
    """Subset of a CoinGecko /coins/markets entry."""

    id: str
    symbol: str
    name: str
    current_price: float | None = None
    price_change_percentage_30d_in_currency: float | None = None

    model_config = ConfigDict(extra="ignore")


class NativeCoinChange(BaseModel):
    name: str
    symbol: str
    price_change_30d: float | None = Field(
        description="30-day USD price change percentage, rounded to 2 decimals"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Solana", "symbol": "SOL", "price_change_30d": 12.34},
            ]
        }
    }


class TopCoinsResponse(BaseModel):
    symbol_change_array: list[NativeCoinChange]

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )


class EthPrice(BaseModel):
    current: float = Field(alias="cur", description="Current ETH price in USD")
    month_ago: float = Field(
        alias="back", description="ETH price implied by the 30-day change"
    )
    change: float = Field(description="30-day ETH price change percentage")

    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True)
