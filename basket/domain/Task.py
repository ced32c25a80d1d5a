"""Task domain entity: one shopping list line with its checked flag and analysis state."""
from dataclasses import dataclass, replace
from basket.domain.Analysis import AnalysisState, NOT_ANALYZED


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    checked: bool = False
    analysis: AnalysisState = NOT_ANALYZED

    def with_changes(self, **changes) -> "Task":
        '''Returns a copy with the given fields replaced (tasks are immutable).'''
        return replace(self, **changes)

    def __str__(self) -> str:
        mark = "x" if self.checked else " "
        return f"[{mark}] {self.title} ({type(self.analysis).__name__})"

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "checked": self.checked,
            "analysisResponse": self.analysis.to_dict(),
        }
