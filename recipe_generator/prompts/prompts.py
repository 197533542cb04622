"""Prompt builders for recipe generation and improvement.

Each builder is a pure function of its request and returns a PromptSpec: the
rendered instruction text plus the contract model the response must satisfy.
Optional preference lines are rendered only when the request carries them.
"""

from typing import List

from recipe_generator.models.models import (
    GenerationMode,
    GenerationRequest,
    ImprovementRequest,
    ImprovementResult,
    MultipleRecipeOutput,
    PromptSpec,
    RawModelRecipe,
)

SINGLE_RECIPE_PROMPT = "single_recipe"
MULTIPLE_RECIPES_PROMPT = "multiple_recipes"
IMPROVE_RECIPE_PROMPT = "improve_recipe"

_RECIPE_JSON_SHAPE = """{
  "title": "Recipe Title",
  "ingredients": [
    "First ingredient with quantity",
    "Second ingredient with quantity",
    ...
  ],
  "instructions": [
    "Step 1 instruction",
    "Step 2 instruction",
    ...
  ],
  "prepTime": "XX minutes",
  "cookTime": "XX minutes",
  "servings": X,
  "difficultyLevel": X (1-5),
  "cuisineType": "Type of cuisine"
}"""


def _indent(block: str, spaces: int) -> str:
    pad = " " * spaces
    return "\n".join(pad + line for line in block.splitlines())


def _get_request_lines(request: GenerationRequest) -> List[str]:
    """Render the ingredient line and whichever optional preference lines are present.

    Args:
        request: Generation request (not modified).

    Returns:
        List of "Label: value" lines, in a fixed order.
    """
    lines = [f"Ingredients: {request.ingredients}"]
    if request.mode == GenerationMode.MULTIPLE:
        lines.append(f"Number of Recipes: {request.count}")
    if request.dietary_preferences:
        lines.append(f"Dietary Preferences: {request.dietary_preferences}")
    if request.allergies:
        lines.append(f"Allergies (never include these): {request.allergies}")
    if request.cuisine_type:
        lines.append(f"Cuisine Type: {request.cuisine_type}")
    if request.difficulty_level and 1 <= request.difficulty_level <= 5:
        lines.append(f"Difficulty Level (1-5): {request.difficulty_level}")
    if request.additional_notes:
        lines.append(f"Additional Notes: {request.additional_notes}")
    return lines


def _build_single_prompt(request: GenerationRequest) -> PromptSpec:
    details = "\n".join(_get_request_lines(request))
    text = f"""You are a helpful chef assistant that suggests a single recipe based on the ingredients the user has.

{details}

Create ONE recipe that uses these ingredients. Respond with valid JSON only, using these fields:
{_RECIPE_JSON_SHAPE}"""
    return PromptSpec(name=SINGLE_RECIPE_PROMPT, text=text, output_schema=RawModelRecipe)


def _build_multiple_prompt(request: GenerationRequest) -> PromptSpec:
    details = "\n".join(_get_request_lines(request))
    text = f"""You are a helpful chef assistant that suggests multiple recipes based on the ingredients the user has.

{details}

Create exactly {request.count} different recipes that use these ingredients. Make each recipe distinct in
cooking method and style. Respond with valid JSON only, using these fields:
{{
  "recipes": [
{_indent(_RECIPE_JSON_SHAPE, 4)},
    ...
  ]
}}"""
    return PromptSpec(name=MULTIPLE_RECIPES_PROMPT, text=text, output_schema=MultipleRecipeOutput)


def build_generation_prompt(request: GenerationRequest) -> PromptSpec:
    """Build the generation prompt for the request's mode.

    Single mode asks for one recipe object; multiple mode asks for
    `{"recipes": [...]}` with an explicit count.

    Args:
        request: Validated generation request.

    Returns:
        PromptSpec with RawModelRecipe (single) or MultipleRecipeOutput (multiple) as contract.
    """
    if request.mode == GenerationMode.MULTIPLE:
        return _build_multiple_prompt(request)
    return _build_single_prompt(request)


def build_improvement_prompt(request: ImprovementRequest) -> PromptSpec:
    """Build the prompt that refines an existing recipe text.

    Args:
        request: Recipe text and the user's refinement instruction.

    Returns:
        PromptSpec with ImprovementResult (`{"refinedRecipe": "..."}`) as contract.
    """
    text = f"""You are a helpful recipe assistant. Please refine the provided recipe based on the user's instructions, including cooking time, spice level, or other details.

Recipe:
{request.recipe_text}

Instructions:
{request.improvement_request}

Respond with valid JSON only, in this form:
{{"refinedRecipe": "The complete refined recipe as text"}}"""
    return PromptSpec(name=IMPROVE_RECIPE_PROMPT, text=text, output_schema=ImprovementResult)
