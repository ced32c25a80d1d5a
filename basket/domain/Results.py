"""Tagged gateway results: every AI call resolves to a success or a failure, never an exception."""
from dataclasses import dataclass
from typing import Any, Literal, Union

INPUT_ERROR = "input"
PROVIDER_ERROR = "provider"


@dataclass(frozen=True)
class GatewaySuccess:
    payload: Any
    ok: Literal[True] = True


@dataclass(frozen=True)
class GatewayFailure:
    kind: str
    message: str
    ok: Literal[False] = False

    @property
    def is_input_error(self) -> bool:
        return self.kind == INPUT_ERROR


GatewayResult = Union[GatewaySuccess, GatewayFailure]


def input_failure(message: str = "Invalid input") -> GatewayFailure:
    return GatewayFailure(kind=INPUT_ERROR, message=message)


def provider_failure(message: str = "Failed to process request") -> GatewayFailure:
    return GatewayFailure(kind=PROVIDER_ERROR, message=message)
