from dataclasses import dataclass
from enum import Enum


class ApiErrorKind(str, Enum):
    """
    Failure classes for calls to the PUBG API.\n
    NOT_FOUND: the player, clan or match does not exist (or a search returned nothing).\n
    UNAUTHORIZED: the API key was rejected.\n
    RATE_LIMITED: upstream throttling, the user should try again later.\n
    UNREACHABLE: timeout, transport failure or a 5xx answer.\n
    MALFORMED: upstream answered but not with the expected entity.\n
    """

    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    UNREACHABLE = "unreachable"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ApiError:
    kind: ApiErrorKind
    message: str
    status_code: int | None = None

    @classmethod
    def not_found(cls, message: str = "Player not found") -> "ApiError":
        return cls(ApiErrorKind.NOT_FOUND, message, 404)

    @classmethod
    def malformed(cls, message: str) -> "ApiError":
        return cls(ApiErrorKind.MALFORMED, message)

    @classmethod
    def unreachable(cls, message: str = "No response from server") -> "ApiError":
        return cls(ApiErrorKind.UNREACHABLE, message, 503)


class StorageError(Exception):
    """The player record document could not be written."""
