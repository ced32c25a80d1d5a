"""Analysis domain: display-ready result and the four analysis states of a task.

A task's analysis is exactly one of:
  NotAnalyzed  -> nothing requested yet (or cleared)
  Pending      -> request in flight
  Failed       -> the gateway reported a failure
  Completed    -> carries an AnalysisResult

Serialized form keeps the wire shape used by clients:
null | "pending" | "error" | {hint, alternatives, showWarning, showRemove}.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Tuple, Union

PENDING_MARKER = "pending"
ERROR_MARKER = "error"


@dataclass(frozen=True)
class Alternative:
    name: str
    is_vegan: bool = False

    def to_dict(self):
        return {"name": self.name, "isVegan": self.is_vegan}


@dataclass(frozen=True)
class AnalysisResult:
    hint: str = ""
    alternatives: Tuple[Alternative, ...] = ()
    show_warning: bool = False
    show_remove: bool = False

    @staticmethod
    def from_health_response(payload) -> "AnalysisResult":
        '''Maps a gateway HealthResponse into the shape shown next to a task.'''
        return AnalysisResult(
            hint=payload.message,
            alternatives=tuple(Alternative(name=a.name, is_vegan=a.isVegan) for a in payload.alternatives),
            show_warning=payload.isAllergy,
            show_remove=False,
        )

    def to_dict(self):
        return {
            "hint": self.hint,
            "alternatives": [a.to_dict() for a in self.alternatives],
            "showWarning": self.show_warning,
            "showRemove": self.show_remove,
        }


@dataclass(frozen=True)
class NotAnalyzed:
    def to_dict(self) -> Any:
        return None


@dataclass(frozen=True)
class Pending:
    def to_dict(self) -> Any:
        return PENDING_MARKER


@dataclass(frozen=True)
class Failed:
    reason: str = ""

    def to_dict(self) -> Any:
        return ERROR_MARKER


@dataclass(frozen=True)
class Completed:
    result: AnalysisResult = field(default_factory=AnalysisResult)

    def to_dict(self) -> Any:
        return self.result.to_dict()


AnalysisState = Union[NotAnalyzed, Pending, Failed, Completed]

NOT_ANALYZED = NotAnalyzed()
PENDING = Pending()


__all__ = [
    'Alternative', 'AnalysisResult', 'AnalysisState',
    'NotAnalyzed', 'Pending', 'Failed', 'Completed',
    'NOT_ANALYZED', 'PENDING', 'PENDING_MARKER', 'ERROR_MARKER',
]
