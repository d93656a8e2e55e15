from enum import Enum

from pydantic import BaseModel


class HealthStatus(str, Enum):
    OK = "OK"
    KO = "KO"


class Tags(str, Enum):
    """API documentation tags for grouping endpoints in Swagger UI."""

    ANALYSIS = "Analysis"
    BALANCE = "Balance"
    HEALTH = "Health"
    MARKET = "Market"


class PingResponse(BaseModel):
    redis: HealthStatus


class StatusResponse(BaseModel):
    status: str
    message: str


class ErrorKind(str, Enum):
    INVALID_ADDRESS = "INVALID_ADDRESS"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    NO_BALANCE = "NO_BALANCE"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    NOT_CONFIGURED = "NOT_CONFIGURED"
    UNKNOWN = "UNKNOWN"


ERROR_MESSAGES = {
    ErrorKind.INVALID_ADDRESS: "Invalid Ethereum address - Did you copy that right?",
    ErrorKind.INVALID_AMOUNT: (
        "Please enter a valid ETH amount , "
        "Atleast imagine you are rich for a second."
    ),
    ErrorKind.NO_BALANCE: (
        "This wallet has no ETH balance! Try sending an address of NON-BROKE person."
    ),
    ErrorKind.UNKNOWN: "Failed to analyze wallet. Please try again in a few minutes.",
}


class ApiError(Exception):
    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.UNKNOWN,
        status_code: int = 400,
        details: str | None = None,
    ):
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    @classmethod
    def from_kind(cls, kind: ErrorKind, status_code: int = 400) -> "ApiError":
        return cls(message=ERROR_MESSAGES[kind], kind=kind, status_code=status_code)

    def as_dict(self) -> dict:
        return {"error": self.message, "details": self.details, "kind": self.kind.value}


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
    kind: ErrorKind
