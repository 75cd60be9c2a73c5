"""Exception hierarchy shared by the codec, RPC client, registry and dispatcher."""
from __future__ import annotations


class MantleYieldError(Exception):
    """Base error. ``status`` is the HTTP-equivalent code used at the dispatcher."""

    status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


class TransportError(MantleYieldError):
    """RPC or HTTP endpoint unreachable, non-2xx, or malformed JSON."""

    status = 502


class RpcError(TransportError):
    """JSON-RPC envelope carried a populated ``error`` field."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code

    def __str__(self) -> str:
        if self.code is None:
            return f"RPC Error: {self.message}"
        return f"RPC Error [{self.code}]: {self.message}"


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------


class ProtocolNotFound(MantleYieldError):
    status = 404

    def __init__(self, protocol_id: str) -> None:
        super().__init__(f"Protocol not found: {protocol_id}")
        self.protocol_id = protocol_id


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ValidationError(MantleYieldError):
    """User input rejected before any core logic runs."""

    status = 400


class MissingParameter(ValidationError):
    def __init__(self, *names: str) -> None:
        joined = " and ".join(names)
        verb = "are" if len(names) > 1 else "is"
        super().__init__(f"{joined} {verb} required")
        self.names = names


class MalformedAmount(ValidationError, ValueError):
    def __init__(self, amount: object) -> None:
        super().__init__(f"Malformed amount: {amount!r}")
        self.amount = amount


class InvalidAddress(ValidationError):
    def __init__(self, address: object) -> None:
        super().__init__(f"Invalid address: {address!r}")
        self.address = address


class InvalidQuoteRequest(ValidationError):
    pass


class UnknownAction(ValidationError):
    def __init__(self, action: object) -> None:
        super().__init__(f"Unknown action: {action}")
        self.action = action
