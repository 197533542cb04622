"""Model-free recipe synthesis.

Builds plausible recipes straight from the ingredient text whenever the model
path cannot produce a trusted result. Pure and deterministic: the same
ingredients, mode and count always give the same recipes.

Single mode yields one "Simple Recipe with <first ingredient>". Multiple mode
cycles through five cooking-method archetypes (sauté, roast, stir-fry, bake,
grill), each built around the first ingredient.
"""

from typing import List, NamedTuple

from recipe_generator.models.models import GenerationMode, Recipe
from recipe_generator.utils.config import RECIPE_COUNT_LIMIT

PLACEHOLDER_INGREDIENT = "basic ingredients"
MAX_EXTRA_INGREDIENTS = 4
MAX_FALLBACK_RECIPES = RECIPE_COUNT_LIMIT


class CookingMethod(NamedTuple):
    """Archetype used to vary fallback recipes in multiple mode."""

    name_template: str
    description_template: str
    cooking_time: str
    difficulty: str
    pantry: tuple
    steps: tuple


COOKING_METHODS = (
    CookingMethod(
        name_template="Sautéed {main}",
        description_template="Tender {main} sautéed with garlic in a hot pan.",
        cooking_time="20 minutes",
        difficulty="Easy",
        pantry=("1 tablespoon olive oil", "2 cloves garlic, minced", "Salt and pepper to taste"),
        steps=(
            "Cut the {main} into even, bite-sized pieces.",
            "Heat the olive oil in a large skillet over medium-high heat.",
            "Add the garlic and cook for 30 seconds until fragrant.",
            "Add the {main} and sauté, stirring often, until cooked through.",
            "Season with salt and pepper and serve immediately.",
        ),
    ),
    CookingMethod(
        name_template="Roasted {main}",
        description_template="Oven-roasted {main} with a golden, caramelized finish.",
        cooking_time="45 minutes",
        difficulty="Medium",
        pantry=("2 tablespoons olive oil", "1 teaspoon dried thyme", "Salt and pepper to taste"),
        steps=(
            "Preheat the oven to 425°F (220°C).",
            "Toss the {main} with olive oil, thyme, salt and pepper.",
            "Spread everything on a baking sheet in a single layer.",
            "Roast for 30-35 minutes, turning halfway, until golden.",
            "Rest for 5 minutes before serving.",
        ),
    ),
    CookingMethod(
        name_template="Stir-Fried {main}",
        description_template="A quick, high-heat stir-fry of {main} in a savory sauce.",
        cooking_time="15 minutes",
        difficulty="Easy",
        pantry=("1 tablespoon vegetable oil", "2 tablespoons soy sauce", "1 teaspoon grated ginger"),
        steps=(
            "Slice the {main} thinly so it cooks quickly.",
            "Heat the vegetable oil in a wok over high heat until shimmering.",
            "Stir-fry the {main} for 3-4 minutes, keeping it moving.",
            "Add the ginger and soy sauce and toss for another minute.",
            "Serve hot, over rice or noodles if you have them.",
        ),
    ),
    CookingMethod(
        name_template="Baked {main}",
        description_template="Comforting baked {main} with a crisp cheese topping.",
        cooking_time="35 minutes",
        difficulty="Medium",
        pantry=("1 tablespoon butter", "1/2 cup grated cheese", "Salt and pepper to taste"),
        steps=(
            "Preheat the oven to 375°F (190°C) and butter a baking dish.",
            "Arrange the {main} in the dish and season with salt and pepper.",
            "Sprinkle the grated cheese evenly over the top.",
            "Bake for 25 minutes until bubbling and golden.",
            "Cool slightly before serving.",
        ),
    ),
    CookingMethod(
        name_template="Grilled {main}",
        description_template="Smoky grilled {main} with a bright lemon marinade.",
        cooking_time="30 minutes",
        difficulty="Hard",
        pantry=("2 tablespoons olive oil", "1 lemon, juiced", "1 teaspoon paprika"),
        steps=(
            "Whisk the olive oil, lemon juice and paprika into a marinade.",
            "Coat the {main} in the marinade and rest for 10 minutes.",
            "Preheat the grill to medium-high and oil the grates.",
            "Grill the {main} for 4-6 minutes per side until charred and cooked through.",
            "Rest briefly, then serve with any remaining lemon.",
        ),
    ),
)


def split_ingredients(ingredients_text: str) -> List[str]:
    """Split comma-separated ingredient text into trimmed, non-empty tokens."""
    tokens = [token.strip() for token in (ingredients_text or "").split(",")]
    return [token for token in tokens if token]


def parse_ingredients(ingredients_text: str) -> List[str]:
    """Like split_ingredients, but returns ["basic ingredients"] when nothing usable is left."""
    return split_ingredients(ingredients_text) or [PLACEHOLDER_INGREDIENT]


def _extras_step(extras: List[str]) -> List[str]:
    if not extras:
        return []
    return [f"Stir in the {', '.join(extras)} and cook for 3-5 minutes more."]


def _simple_recipe(tokens: List[str]) -> Recipe:
    main, extras = tokens[0], tokens[1:1 + MAX_EXTRA_INGREDIENTS]
    instructions = [
        f"Prepare the {main}: wash, trim and cut into bite-sized pieces.",
        "Heat the olive oil in a large pan over medium heat.",
        f"Add the {main} and cook for 8-10 minutes, stirring occasionally.",
        *_extras_step(extras),
        "Season with salt and pepper to taste.",
        "Serve hot.",
    ]
    return Recipe(
        recipe_name=f"Simple Recipe with {main}",
        description=f"A quick and easy dish built around {main}.",
        cooking_time="25 minutes",
        difficulty="Easy",
        ingredients=[main, *extras, "1 tablespoon olive oil", "Salt and pepper to taste"],
        instructions=instructions,
    )


def _method_recipe(tokens: List[str], method: CookingMethod) -> Recipe:
    main, extras = tokens[0], tokens[1:1 + MAX_EXTRA_INGREDIENTS]
    steps = [step.format(main=main) for step in method.steps]
    # Extras join before the final serving step
    steps[-1:-1] = _extras_step(extras)
    return Recipe(
        recipe_name=method.name_template.format(main=main),
        description=method.description_template.format(main=main),
        cooking_time=method.cooking_time,
        difficulty=method.difficulty,
        ingredients=[main, *extras, *method.pantry],
        instructions=steps,
    )


def synthesize(ingredients_text: str, mode: GenerationMode, count: int = 1) -> List[Recipe]:
    """Build fallback recipes from ingredient text alone.

    Args:
        ingredients_text: Comma-separated ingredients (may be empty).
        mode: Single yields exactly one recipe; multiple yields one per archetype.
        count: Recipes wanted in multiple mode, clamped into [1, 5].

    Returns:
        Non-empty list of Recipes.
    """
    tokens = parse_ingredients(ingredients_text)
    if mode != GenerationMode.MULTIPLE:
        return [_simple_recipe(tokens)]

    total = max(1, min(count or 1, MAX_FALLBACK_RECIPES))
    return [_method_recipe(tokens, COOKING_METHODS[i % len(COOKING_METHODS)]) for i in range(total)]
