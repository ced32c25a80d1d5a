"""
Input validation and AI response schemas using Pydantic.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class AlternativeItem(BaseModel):
    """One alternative suggested by the analysis model."""
    model_config = ConfigDict(extra='forbid')

    name: str
    isVegan: bool


class HealthResponse(BaseModel):
    """Structured payload returned by the analysis model."""
    model_config = ConfigDict(extra='forbid')

    isAllergy: bool
    message: str
    alternatives: List[AlternativeItem]


class RecipeItemsResponse(BaseModel):
    """Structured payload returned by the recipe extraction model."""
    model_config = ConfigDict(extra='forbid')

    name: str
    items: List[str]


class TextInput(BaseModel):
    """Non-empty text sent to a gateway."""
    input: str = Field(..., min_length=1)

    @field_validator('input', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v


class TextBody(BaseModel):
    """Raw body of the AI endpoints; emptiness is judged by the gateways."""
    input: str = ""


class AnalyzeRequest(TextBody):
    """Body of the analysis endpoint."""
    healthLevel: int = Field(1, ge=0, le=2)
    allergies: List[str] = Field(default_factory=list)
    suggestVegan: bool = False


class ListInput(BaseModel):
    """Schema for creating an empty list."""
    name: str = Field(..., min_length=1, max_length=200)

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class TaskInput(BaseModel):
    """Schema for adding or renaming a shopping list item."""
    title: str = Field(..., min_length=1, max_length=200)

    @field_validator('title', mode='before')
    @classmethod
    def strip_title(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class SettingsUpdateInput(BaseModel):
    """Partial settings update; omitted fields are left unchanged."""
    healthLevel: Optional[int] = Field(None, ge=0, le=2)
    allergies: Optional[List[str]] = None
    suggestVegan: Optional[bool] = None
    currentList: Optional[str] = Field(None, min_length=1)
