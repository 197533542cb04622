"""Output normalization: map validated model output onto the canonical Recipe.

Runs once per successful model call, after the invoker has validated the
response against its contract. Mapping rules:

- recipeName: title, else recipeName
- cookingTime: "Prep: X, Cook: Y" (absent half omitted), else the older cookingTime field
- description: "<Cuisine> cuisine. Serves <N>." from the parts present, else the older description field
- difficulty: 1-5 -> Easy/Medium/Hard/Advanced/Expert, else a known label from the older
  difficulty field, else None
- ingredients/instructions: passed through

No defaults are invented here. A recipe without difficulty stays without one.
"""

from typing import List, Optional, Union

from recipe_generator.models.models import MultipleRecipeOutput, RawModelRecipe, Recipe

DIFFICULTY_LABELS = {
    1: "Easy",
    2: "Medium",
    3: "Hard",
    4: "Advanced",
    5: "Expert",
}


def _cooking_time(raw: RawModelRecipe) -> Optional[str]:
    if raw.prep_time or raw.cook_time:
        parts = []
        if raw.prep_time:
            parts.append(f"Prep: {raw.prep_time}")
        if raw.cook_time:
            parts.append(f"Cook: {raw.cook_time}")
        return ", ".join(parts)
    return raw.cooking_time or None


def _description(raw: RawModelRecipe) -> Optional[str]:
    parts = []
    if raw.cuisine_type:
        parts.append(f"{raw.cuisine_type} cuisine.")
    if raw.servings not in (None, ""):
        parts.append(f"Serves {raw.servings}.")
    if parts:
        return " ".join(parts)
    return raw.description or None


def _difficulty(raw: RawModelRecipe) -> Optional[str]:
    if raw.difficulty_level is not None:
        return DIFFICULTY_LABELS.get(raw.difficulty_level)
    if raw.difficulty:
        label = raw.difficulty.strip().capitalize()
        if label in DIFFICULTY_LABELS.values():
            return label
    return None


def normalize_recipe(raw: RawModelRecipe) -> Recipe:
    """Convert one validated model recipe into the canonical Recipe.

    Args:
        raw: Recipe that already passed the RawModelRecipe contract.

    Returns:
        Canonical Recipe.
    """
    return Recipe(
        recipe_name=raw.name,
        description=_description(raw),
        cooking_time=_cooking_time(raw),
        difficulty=_difficulty(raw),
        ingredients=list(raw.ingredients),
        instructions=list(raw.instructions) if isinstance(raw.instructions, list) else raw.instructions,
    )


def normalize_recipes(output: Union[RawModelRecipe, MultipleRecipeOutput]) -> List[Recipe]:
    """Normalize single- or multiple-recipe model output into a list of Recipes."""
    if isinstance(output, MultipleRecipeOutput):
        return [normalize_recipe(raw) for raw in output.recipes]
    return [normalize_recipe(output)]
