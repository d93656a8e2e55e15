from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from app.api.common.annotations import WALLET_ADDRESS_DESCRIPTION


class BlockSource(str, Enum):
    """How the block used for the balance lookup was chosen."""

    HISTORICAL = "HISTORICAL"
    LATEST_TRANSFER = "LATEST_TRANSFER"
    LATEST_BLOCK = "LATEST_BLOCK"


class HistoricalBalance(BaseModel):
    address: str = Field(description=WALLET_ADDRESS_DESCRIPTION)
    balance: float = Field(description="ETH balance at the chosen block")
    balance_wei: str = Field(description="Exact balance in wei, decimal encoded")
    block_number: int | None = Field(
        description="Block the balance was read at, None for the chain head"
    )
    block_source: BlockSource
    timestamp: datetime = Field(description="The moment the lookup aimed for")
    message: str = "Balance retrieved successfully"

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address": "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045",
                    "balance": 1.2345,
                    "balance_wei": "1234500000000000000",
                    "block_number": 21000000,
                    "block_source": BlockSource.HISTORICAL,
                    "timestamp": "2024-10-19T12:00:00Z",
                    "message": "Balance retrieved successfully",
                }
            ]
        }
    }
