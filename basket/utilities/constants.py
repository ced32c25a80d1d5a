from typing import Final

DISPLAY_DATE_FORMAT: Final[str] = "%d.%m.%Y"

# Reserved list: always present at startup, never removed while it is the only list
DEFAULT_SHOPPING_LIST: Final[str] = "default"
DEFAULT_LIST_NAME: Final[str] = "Default List"
RECIPE_LIST_FALLBACK_NAME: Final[str] = "Recipe List"

SETTINGS_STORAGE_KEY: Final[str] = "list-settings"
HEALTH_LEVELS: Final[tuple[int, ...]] = (0, 1, 2)
DEFAULT_HEALTH_LEVEL: Final[int] = 1

ANALYSIS_SYSTEM_PROMPT: Final[str] = (
    """You are generating hints for a shopping list app aimed at gradually improving meal planning for healthier eating.
Be concise in your responses but include your reasons.
Only suggest alternatives for clearly unhealthy items or when specifically requested. Leave the message empty for moderately healthy or neutral foods.
Focus on major dietary improvements rather than minor changes. Avoid flagging items like granola bars or occasional treats.
Use generic, non-specific names for suggestions.
Base recommendations on established nutritional science, not fad diets or myths.
Aim for a balanced approach that encourages sustainable, long-term dietary improvements."""
)

HEALTH_DIRECTIVES: Final[dict[int, str]] = {
    2: "If the item is somewhat unhealthy",
    1: "If the item is **really really** unhealthy",
    0: "do not",
}

NO_ALLERGY_MARKER: Final[str] = "user has no allergy"
VEGAN_DIRECTIVE: Final[str] = "Also suggest some vegan options if possible"

RECIPE_SYSTEM_PROMPT: Final[str] = (
    """You are generating a shopping list from data extracted for a recipe site.
Use generic names if there are any brand-specific ones and leave out amounts.
Do not translate anything, keep the same language as the provided text. Do not use punctuation"""
)

HEALTH_RESPONSE_FORMAT: Final[dict] = {
    "name": "health_response",
    "strict": True,
    "schema": {
        "additionalProperties": False,
        "type": "object",
        "properties": {
            "isAllergy": {
                "type": "boolean",
                "description": "Indicates whether the food item interferes with an allergy. "
                               "The message will be shown more prominently if set to true",
            },
            "message": {
                "type": "string",
                "description": "Explanation or reason about the suggestions given. "
                               "Displayed as gray text above the suggestions",
            },
            "alternatives": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string"},
                        "isVegan": {"type": "boolean"},
                    },
                    "additionalProperties": False,
                    "required": ["name", "isVegan"],
                },
                "description": "List of alternative food items that can be used instead.",
            },
        },
        "required": ["isAllergy", "message", "alternatives"],
    },
}

RECIPE_RESPONSE_FORMAT: Final[dict] = {
    "name": "recipe_items_response",
    "strict": True,
    "schema": {
        "additionalProperties": False,
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "items": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["name", "items"],
    },
}
