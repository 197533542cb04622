"""Data models and output contracts for recipe generation.

Defines Pydantic models for generation/improvement requests, the untrusted
shape the model is asked to return, and the canonical Recipe consumed by the
rest of the application. JSON uses camelCase aliases; Python code uses the
snake_case field names.

The contract models (RawModelRecipe, MultipleRecipeOutput, ImprovementResult)
are only validated at the model invoker boundary. Nothing downstream re-checks
model output.
"""

from enum import Enum
from typing import Any, List, Literal, Optional, Union, Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from recipe_generator.utils.config import config
from recipe_generator.utils.errors import FailureReason

Difficulty = Literal["Easy", "Medium", "Hard", "Advanced", "Expert"]


def _clean_lines(lines: List[str]) -> List[str]:
    return [line.strip() for line in lines if line and line.strip()]


def _check_instructions(value: Union[List[str], str]) -> Union[List[str], str]:
    if isinstance(value, str):
        if not value.strip():
            raise ValueError("instructions must not be empty")
        return value.strip()
    steps = _clean_lines(value)
    if not steps:
        raise ValueError("instructions must contain at least one step")
    return steps


class GenerationMode(str, Enum):
    """Whether one or several recipes are requested per call."""

    SINGLE = "single"
    MULTIPLE = "multiple"


class GenerationRequest(BaseModel):
    """Input for recipe generation.

    `ingredients` is comma-separated free text; a list of strings is joined.
    Empty ingredient text is accepted here and handled by the orchestrator,
    which degrades it to fallback synthesis instead of rejecting the request.

    `count` only matters in multiple mode. Missing or 0 (also "0") means the
    default (3); anything else is clamped into [1, MAX_RECIPE_COUNT].
    `difficulty_level` outside 1-5 is dropped.
    """

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    ingredients: Annotated[str, Field(description="Comma-separated list of available ingredients")] = ""
    mode: Annotated[GenerationMode, Field(description="Generate a single recipe or several")] = GenerationMode.SINGLE
    count: Annotated[
        int, Field(description="Number of recipes to generate in multiple mode (1-5)")
    ] = config.DEFAULT_RECIPE_COUNT
    dietary_preferences: Annotated[
        Optional[str], Field(alias="dietaryPreferences", description="e.g. vegetarian, vegan, gluten-free")
    ] = None
    allergies: Annotated[Optional[str], Field(description="Ingredients the recipe must avoid")] = None
    cuisine_type: Annotated[Optional[str], Field(alias="cuisineType", description="e.g. Italian, Mexican")] = None
    difficulty_level: Annotated[
        Optional[int], Field(alias="difficultyLevel", description="Requested difficulty (1-5)")
    ] = None
    additional_notes: Annotated[
        Optional[str], Field(alias="additionalNotes", description="Free-form extra requirements")
    ] = None

    @field_validator("ingredients", mode="before")
    @classmethod
    def join_ingredient_list(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return ", ".join(str(item).strip() for item in value if item is not None and str(item).strip())
        return value

    @field_validator("count", mode="before")
    @classmethod
    def clamp_count(cls, value: Any) -> int:
        if value is None or (isinstance(value, str) and not value.strip()):
            return config.DEFAULT_RECIPE_COUNT
        count = int(value)
        if count == 0:
            return config.DEFAULT_RECIPE_COUNT
        return max(1, min(count, config.MAX_RECIPE_COUNT))

    @field_validator("difficulty_level", mode="before")
    @classmethod
    def drop_unknown_difficulty(cls, value: Any) -> Optional[int]:
        # Only levels 1-5 mean anything to the model; anything else is left out of the prompt
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        level = int(value)
        return level if 1 <= level <= 5 else None

    @field_validator("dietary_preferences", "allergies", "cuisine_type", "additional_notes", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class RawModelRecipe(BaseModel):
    """Untrusted recipe as returned by the model.

    Accepts every field name the model has been asked for over time: the
    current `title`/`prepTime`/`cookTime`/`servings`/`difficultyLevel`/`cuisineType`
    shape and the older `recipeName`/`description`/`cookingTime`/`difficulty` shape.
    Blank ingredient and instruction entries are dropped; at least one of each
    must remain.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    title: Optional[str] = None
    recipe_name: Annotated[Optional[str], Field(alias="recipeName")] = None
    ingredients: Annotated[List[str], Field(description="Ingredients with quantities")]
    instructions: Annotated[Union[List[str], str], Field(description="Step by step instructions")]
    prep_time: Annotated[Optional[str], Field(alias="prepTime")] = None
    cook_time: Annotated[Optional[str], Field(alias="cookTime")] = None
    servings: Optional[Union[int, str]] = None
    difficulty_level: Annotated[Optional[int], Field(alias="difficultyLevel")] = None
    cuisine_type: Annotated[Optional[str], Field(alias="cuisineType")] = None
    description: Optional[str] = None
    cooking_time: Annotated[Optional[str], Field(alias="cookingTime")] = None
    difficulty: Optional[str] = None

    @field_validator("ingredients")
    @classmethod
    def require_ingredients(cls, value: List[str]) -> List[str]:
        cleaned = _clean_lines(value)
        if not cleaned:
            raise ValueError("ingredients must contain at least one entry")
        return cleaned

    @field_validator("instructions")
    @classmethod
    def require_instructions(cls, value: Union[List[str], str]) -> Union[List[str], str]:
        return _check_instructions(value)

    @field_validator("difficulty_level", mode="before")
    @classmethod
    def parse_difficulty_level(cls, value: Any) -> Optional[int]:
        # A label such as "Easy" in this slot is ignored rather than failing the whole recipe
        if isinstance(value, str):
            value = value.strip()
            return int(value) if value.isdigit() else None
        return value

    @model_validator(mode="after")
    def require_name(self) -> "RawModelRecipe":
        if not self.name:
            raise ValueError("Recipe must have a title or recipeName")
        return self

    @property
    def name(self) -> Optional[str]:
        return self.title or self.recipe_name


class MultipleRecipeOutput(BaseModel):
    """Contract for multiple-recipe generation: `{"recipes": [...]}`."""

    recipes: Annotated[List[RawModelRecipe], Field(min_length=1, description="Generated recipes")]


class Recipe(BaseModel):
    """Canonical recipe. The only recipe shape callers consume."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    recipe_name: Annotated[str, Field(alias="recipeName", min_length=1, description="Recipe name")]
    description: Optional[str] = None
    cooking_time: Annotated[Optional[str], Field(alias="cookingTime", description="e.g. 'Prep: 10 minutes, Cook: 20 minutes'")] = None
    difficulty: Optional[Difficulty] = None
    ingredients: Annotated[List[str], Field(min_length=1, description="Ingredients with quantities")]
    instructions: Annotated[Union[List[str], str], Field(description="Steps as a list or a single block of text")]

    @field_validator("instructions")
    @classmethod
    def require_instructions(cls, value: Union[List[str], str]) -> Union[List[str], str]:
        return _check_instructions(value)


class GenerationResult(BaseModel):
    """Recipes returned by a generation call. Never empty."""

    recipes: Annotated[List[Recipe], Field(min_length=1)]


class ImprovementRequest(BaseModel):
    """Existing recipe text plus a free-form instruction for refining it."""

    model_config = ConfigDict(populate_by_name=True)

    recipe_text: Annotated[str, Field(alias="recipeText", description="The recipe to refine")] = ""
    improvement_request: Annotated[
        str, Field(alias="improvementRequest", description="How to refine it, e.g. 'make it spicier'")
    ] = ""


class ImprovementResult(BaseModel):
    """Refined recipe text. Also the output contract of the improvement prompt."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    refined_recipe: Annotated[str, Field(alias="refinedRecipe", min_length=1)]


class PromptSpec(BaseModel):
    """Rendered instruction text paired with the contract the response must satisfy."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str
    text: str
    output_schema: type[BaseModel]


class InvocationResult(BaseModel):
    """Outcome of one model call: a validated output or a failure reason."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    output: Optional[Any] = None
    failure_reason: Optional[FailureReason] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure_reason is None

    @classmethod
    def success(cls, output: BaseModel) -> "InvocationResult":
        return cls(output=output)

    @classmethod
    def failure(cls, reason: FailureReason, error: str) -> "InvocationResult":
        return cls(failure_reason=reason, error=error)
