"""Settings value object: health strictness, allergies, vegan toggle and the active list."""
from dataclasses import dataclass, replace
from typing import Iterable, Tuple
from basket.utilities.constants import DEFAULT_HEALTH_LEVEL, DEFAULT_SHOPPING_LIST, HEALTH_LEVELS


def normalize_allergies(allergies: Iterable[str]) -> Tuple[str, ...]:
    '''Strips entries, drops blanks and duplicates, keeps first-seen order.'''
    seen = []
    for allergy in allergies or ():
        if not isinstance(allergy, str):
            continue
        value = allergy.strip()
        if value and value not in seen:
            seen.append(value)
    return tuple(seen)


@dataclass(frozen=True)
class Settings:
    health_level: int = DEFAULT_HEALTH_LEVEL
    allergies: Tuple[str, ...] = ()
    suggest_vegan: bool = False
    current_list: str = DEFAULT_SHOPPING_LIST

    def __post_init__(self):
        if self.health_level not in HEALTH_LEVELS:
            raise ValueError(f"Health level must be one of {HEALTH_LEVELS}: {self.health_level}")

    @property
    def analysis_disabled(self) -> bool:
        '''True when nothing would be asked of the analysis model.'''
        return self.health_level == 0 and not self.allergies and not self.suggest_vegan

    def with_changes(self, **changes) -> "Settings":
        return replace(self, **changes)

    @staticmethod
    def from_dict(data):
        '''Creates Settings from the persisted flat object; ill-typed fields fall back to defaults.'''
        d = dict(data) if isinstance(data, dict) else {}
        defaults = Settings()
        level = d.get("healthLevel")
        if isinstance(level, bool) or level not in HEALTH_LEVELS:
            level = defaults.health_level
        allergies = d.get("allergies")
        vegan = d.get("suggestVegan")
        current = d.get("currentList")
        return Settings(
            health_level=level,
            allergies=normalize_allergies(allergies) if isinstance(allergies, list) else defaults.allergies,
            suggest_vegan=vegan if isinstance(vegan, bool) else defaults.suggest_vegan,
            current_list=current if isinstance(current, str) and current else defaults.current_list,
        )

    def to_dict(self):
        return {
            "healthLevel": self.health_level,
            "allergies": list(self.allergies),
            "suggestVegan": self.suggest_vegan,
            "currentList": self.current_list,
        }
