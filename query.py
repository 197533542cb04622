#!/usr/bin/env python3
"""Ad hoc query runner for the recipe generator.

Generate or improve recipes from the command line without any web server.

Usage:
    python query.py "chicken, rice, garlic"
    python query.py --multiple 3 --diet vegetarian "tomato, basil, pasta"
    python query.py --cuisine Italian --difficulty 2 --notes "no oven" "eggs, spinach"
    python query.py --debug "beef, broccoli"            # Show full JSON response
    python query.py --improve recipe.txt "make it spicier"
    python query.py --check                             # Report whether a Gemini key is configured

Features:
- Single or multiple recipe generation with optional preferences
- Recipe improvement from a text file
- Debug mode to display the full JSON result
- Markdown rendering with rich
"""

import asyncio
import sys
from pathlib import Path

from rich.console import Console
from rich.markdown import Markdown

from recipe_generator.agents.orchestrator import initialize_recipe_orchestrator
from recipe_generator.models.models import GenerationMode, GenerationRequest, ImprovementRequest, Recipe
from recipe_generator.utils.config import config
from recipe_generator.utils.errors import RecipeGenerationError
from recipe_generator.utils.logger import logger

console = Console()

USAGE = (
    'Usage: python query.py [--multiple N] [--diet X] [--allergies X] [--cuisine X] '
    '[--difficulty N] [--notes X] [--debug] "<ingredients>"\n'
    '       python query.py --improve FILE "<instruction>"\n'
    "       python query.py --check"
)

# Flags that take a value, mapped to GenerationRequest fields
VALUE_FLAGS = {
    "--multiple": "count",
    "--diet": "dietary_preferences",
    "--allergies": "allergies",
    "--cuisine": "cuisine_type",
    "--difficulty": "difficulty_level",
    "--notes": "additional_notes",
    "--improve": "improve_file",
}


def recipe_to_markdown(recipe: Recipe) -> str:
    """Render a canonical recipe as markdown."""
    lines = [f"## {recipe.recipe_name}"]
    if recipe.description:
        lines.append(f"_{recipe.description}_")
    meta = []
    if recipe.cooking_time:
        meta.append(f"**Time:** {recipe.cooking_time}")
    if recipe.difficulty:
        meta.append(f"**Difficulty:** {recipe.difficulty}")
    if meta:
        lines.append(" | ".join(meta))
    lines.append("### Ingredients")
    lines.extend(f"- {item}" for item in recipe.ingredients)
    lines.append("### Instructions")
    if isinstance(recipe.instructions, list):
        lines.extend(f"{i}. {step}" for i, step in enumerate(recipe.instructions, start=1))
    else:
        lines.append(recipe.instructions)
    return "\n\n".join(lines)


def run_check() -> None:
    if config.has_model_credential:
        console.print(f"[green]✓ Gemini API key configured (model: {config.GEMINI_MODEL})[/green]")
    else:
        console.print("[yellow]✗ No Gemini API key found. Set GEMINI_API_KEY; generation will use fallback recipes.[/yellow]")


def run_generate(ingredients: str, options: dict, debug: bool = False) -> None:
    orchestrator = initialize_recipe_orchestrator()
    if "count" in options:
        options["mode"] = GenerationMode.MULTIPLE
    request = GenerationRequest(ingredients=ingredients, **options)

    logger.info(f"Generating {request.mode.value} recipe(s) for: {request.ingredients}")
    result = asyncio.run(orchestrator.generate_combined(request))

    console.print()
    if debug:
        console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
        console.print_json(data=result.model_dump(by_alias=True))
        console.print()

    for recipe in result.recipes:
        console.print(Markdown(recipe_to_markdown(recipe)))
        console.print()


def run_improve(recipe_path: str, instruction: str, debug: bool = False) -> None:
    recipe_file = Path(recipe_path)
    if not recipe_file.exists():
        console.print(f"[red]✗ Error: Recipe file not found: {recipe_path}[/red]")
        sys.exit(1)

    orchestrator = initialize_recipe_orchestrator()
    request = ImprovementRequest(recipe_text=recipe_file.read_text(encoding="utf-8"), improvement_request=instruction)
    result = asyncio.run(orchestrator.improve(request))

    console.print()
    if debug:
        console.print_json(data=result.model_dump(by_alias=True))
    console.print(Markdown(result.refined_recipe))


def main(argv: list[str]) -> None:
    debug_mode = False
    options: dict = {}
    index = 0

    while index < len(argv) and argv[index].startswith("--"):
        flag = argv[index]
        if flag == "--debug":
            debug_mode = True
            index += 1
        elif flag == "--check":
            run_check()
            return
        elif flag in VALUE_FLAGS:
            if index + 1 >= len(argv):
                print(f"Error: {flag} flag requires a value")
                sys.exit(1)
            options[VALUE_FLAGS[flag]] = argv[index + 1]
            index += 2
        else:
            print(f"Unknown flag: {flag}")
            sys.exit(1)

    if index >= len(argv):
        print("Error: No ingredients or instruction provided")
        print(USAGE)
        sys.exit(1)

    # Join all arguments after flags (handles input with spaces)
    text = " ".join(argv[index:])

    try:
        improve_file = options.pop("improve_file", None)
        if improve_file:
            run_improve(improve_file, text, debug=debug_mode)
        else:
            run_generate(text, options, debug=debug_mode)
    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
    except RecipeGenerationError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Query execution failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)
    main(sys.argv[1:])
