import logging
from typing import Iterable, Optional
from openai import OpenAI
from pydantic import ValidationError
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from basket.domain.Results import (
    GatewayResult, GatewaySuccess, input_failure, provider_failure,
)
from basket.domain.Settings import normalize_allergies
from basket.utilities import config
from basket.utilities.constants import (
    ANALYSIS_SYSTEM_PROMPT, HEALTH_DIRECTIVES, HEALTH_LEVELS, HEALTH_RESPONSE_FORMAT,
    NO_ALLERGY_MARKER, RECIPE_RESPONSE_FORMAT, RECIPE_SYSTEM_PROMPT, VEGAN_DIRECTIVE,
)
from basket.utilities.validators import (
    AnalyzeRequest, HealthResponse, RecipeItemsResponse, TextBody, TextInput,
)

logger = logging.getLogger(__name__)


# === Helper: Get OpenAI Client ===
def _get_openai_client() -> Optional[OpenAI]:
    """Return an OpenAI client if OPENAI_API_KEY is set, otherwise None."""
    if not config.OPENAI_API_KEY:
        return None
    return OpenAI(api_key=config.OPENAI_API_KEY, base_url=config.OPENAI_API_PROXY)


def _validated_text(value) -> Optional[str]:
    try:
        return TextInput(input=value).input
    except ValidationError:
        return None


def _complete_json(system_prompt: str, user_prompt: str, response_format: dict) -> str:
    """Run one schema-constrained chat completion and return the raw JSON text."""
    client = _get_openai_client()
    if client is None:
        raise RuntimeError("OPENAI_API_KEY not set")
    response = client.chat.completions.create(
        model=config.OPENAI_MODEL,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        response_format={"type": "json_schema", "json_schema": response_format},
    )
    content = (response.choices[0].message.content or "").strip()
    if not content:
        raise ValueError("Model returned an empty response")
    return content


# === Prompt ===
def build_analysis_prompt(name: str, allergies: Iterable[str], health_level: int, suggest_vegan: bool) -> str:
    """Instruction for the analysis model: allergy check plus health/vegan directives."""
    allergies = list(allergies)
    lines = [f'Does "{name}" :']
    if allergies:
        lines.append("interfere with one of those allergies:")
        lines.extend(f"- {a}" for a in allergies)
    else:
        lines.append(NO_ALLERGY_MARKER)
    lines.append(
        f"Also {HEALTH_DIRECTIVES[health_level]} include suggestions for healthier "
        "alternatives that serve the same purpose"
    )
    if suggest_vegan:
        lines.append(VEGAN_DIRECTIVE)
    return "\n".join(lines)


# === Analysis Gateway ===
def analyze_food_item(item_name: str, health_level: int, allergies: Iterable[str] = (),
                      suggest_vegan: bool = False) -> GatewayResult:
    """Ask the model for hints and alternatives for one shopping list item.

    Never raises: invalid input and every provider problem come back as a
    GatewayFailure. When the user disabled every kind of analysis the neutral
    payload is returned without contacting the model.
    """
    if health_level not in HEALTH_LEVELS or isinstance(health_level, bool):
        return input_failure()

    allergies = normalize_allergies(allergies)
    if health_level == 0 and not allergies and not suggest_vegan:
        return GatewaySuccess(HealthResponse(isAllergy=False, message="", alternatives=[]))

    name = _validated_text(item_name)
    if name is None:
        return input_failure()

    logger.info("Analyzing item %r (health_level=%s, allergies=%d, vegan=%s)",
                name, health_level, len(allergies), suggest_vegan)
    try:
        content = _complete_json(
            ANALYSIS_SYSTEM_PROMPT,
            build_analysis_prompt(name, allergies, health_level, suggest_vegan),
            HEALTH_RESPONSE_FORMAT,
        )
        return GatewaySuccess(HealthResponse.model_validate_json(content))
    except Exception:
        logger.exception("OpenAI API error while analyzing %r", name)
        return provider_failure()


# === Recipe Extraction Gateway ===
def scrape_recipe(text: str) -> GatewayResult:
    """Extract a list name and generic ingredient names from recipe text or a URL."""
    recipe = _validated_text(text)
    if recipe is None:
        return input_failure()

    logger.info("Extracting recipe items from %d characters of input", len(recipe))
    try:
        content = _complete_json(RECIPE_SYSTEM_PROMPT, f"Recipe:\n{recipe}", RECIPE_RESPONSE_FORMAT)
        return GatewaySuccess(RecipeItemsResponse.model_validate_json(content))
    except Exception:
        logger.exception("OpenAI API error while extracting recipe items")
        return provider_failure()


# === FastAPI Endpoints ===
router = APIRouter(prefix="/api/ai")


def gateway_response(result: GatewayResult) -> JSONResponse:
    if result.ok:
        return JSONResponse(content={"message": result.payload.model_dump()})
    status = 400 if result.is_input_error else 502
    return JSONResponse(status_code=status, content={"error": result.message})


@router.post("/analyze")
def analyze_endpoint(body: AnalyzeRequest):
    return gateway_response(
        analyze_food_item(body.input, body.healthLevel, body.allergies, body.suggestVegan)
    )


@router.post("/recipe")
def recipe_endpoint(body: TextBody):
    return gateway_response(scrape_recipe(body.input))
