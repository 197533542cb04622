"""Recipe generation orchestrator.

Sequences prompt building, the single model call, output normalization and
fallback synthesis. Each call runs one pass:

    build prompt -> invoke -> success: normalize -> return
                           -> failure: fallback  -> return

Generation entry points always return at least one recipe: missing
credentials, transport errors, malformed model output and empty ingredient
text all end in fallback synthesis. The improvement entry point has no
synthetic substitute, so its failures are raised to the caller.
"""

from typing import Any, Optional, Union

from recipe_generator.hooks.normalize_output import normalize_recipes
from recipe_generator.models.models import (
    GenerationMode,
    GenerationRequest,
    GenerationResult,
    ImprovementRequest,
    ImprovementResult,
    Recipe,
)
from recipe_generator.prompts.prompts import build_generation_prompt, build_improvement_prompt
from recipe_generator.tools.fallback import split_ingredients, synthesize
from recipe_generator.tools.gemini import ModelInvoker
from recipe_generator.utils.config import Config, config
from recipe_generator.utils.errors import ERRORS_BY_REASON, FailureReason, InputError
from recipe_generator.utils.logger import logger


class RecipeOrchestrator:
    """Entry points for recipe generation and improvement.

    Holds no per-request state; one instance serves concurrent calls.
    """

    def __init__(self, invoker: ModelInvoker) -> None:
        self.invoker = invoker

    def _fallback(self, request: GenerationRequest, reason: FailureReason, error: str) -> GenerationResult:
        logger.warning(
            f"Using fallback recipes: {error}",
            extra={"generation_mode": request.mode.value, "fallback_reason": reason.value},
        )
        count = request.count if request.mode == GenerationMode.MULTIPLE else 1
        return GenerationResult(recipes=synthesize(request.ingredients, request.mode, count))

    async def generate_combined(self, request: Union[GenerationRequest, dict]) -> GenerationResult:
        """Generate one recipe (single mode) or several (multiple mode).

        Args:
            request: GenerationRequest or a dict in its JSON shape
                (`ingredients`, `mode`, `count`, `dietaryPreferences`, ...).

        Returns:
            GenerationResult with at least one recipe. Never raises for
            model, configuration or empty-input failures.
        """
        if not isinstance(request, GenerationRequest):
            request = GenerationRequest.model_validate(request)

        if not split_ingredients(request.ingredients):
            return self._fallback(request, FailureReason.INPUT, "No ingredients provided")

        prompt_spec = build_generation_prompt(request)
        result = await self.invoker.invoke(prompt_spec)
        if not result.ok:
            return self._fallback(request, result.failure_reason, result.error)

        recipes = normalize_recipes(result.output)
        if request.mode == GenerationMode.MULTIPLE:
            recipes = recipes[: request.count]
        else:
            recipes = recipes[:1]

        logger.info(
            f"Generated {len(recipes)} recipe(s) with {self.invoker.model}",
            extra={"generation_mode": request.mode.value},
        )
        return GenerationResult(recipes=recipes)

    async def generate_single(self, ingredients: str, **extras: Any) -> Recipe:
        """Generate exactly one recipe.

        Args:
            ingredients: Comma-separated ingredients.
            **extras: Optional preferences (dietary_preferences, allergies,
                cuisine_type, difficulty_level, additional_notes).

        Raises:
            TypeError: extras try to set `mode`; this entry point is always single mode.
        """
        if "mode" in extras:
            raise TypeError("generate_single() always uses single mode; use generate_combined() to choose a mode")
        request = GenerationRequest(ingredients=ingredients, mode=GenerationMode.SINGLE, **extras)
        result = await self.generate_combined(request)
        return result.recipes[0]

    async def generate_multiple(
        self,
        ingredients: str,
        count: Optional[int] = None,
        dietary_preferences: Optional[str] = None,
    ) -> GenerationResult:
        """Generate `count` recipes (default 3, clamped into [1, 5])."""
        request = GenerationRequest(
            ingredients=ingredients,
            mode=GenerationMode.MULTIPLE,
            count=count,
            dietary_preferences=dietary_preferences,
        )
        return await self.generate_combined(request)

    async def improve(self, request: Union[ImprovementRequest, dict]) -> ImprovementResult:
        """Refine an existing recipe text according to a free-form instruction.

        Args:
            request: ImprovementRequest or a dict with `recipeText` and `improvementRequest`.

        Returns:
            ImprovementResult with the refined recipe text.

        Raises:
            InputError: Recipe text or instruction is blank.
            ConfigurationError: No model credential is configured.
            TransportError: The model call failed or timed out.
            OutputValidationError: The model response broke the contract.
        """
        if not isinstance(request, ImprovementRequest):
            request = ImprovementRequest.model_validate(request)

        if not request.recipe_text.strip():
            raise InputError("A recipe is required to improve")
        if not request.improvement_request.strip():
            raise InputError("Describe how the recipe should be improved")

        result = await self.invoker.invoke(build_improvement_prompt(request))
        if not result.ok:
            logger.error(f"Recipe improvement failed ({result.failure_reason.value}): {result.error}")
            raise ERRORS_BY_REASON[result.failure_reason](f"Failed to improve recipe: {result.error}")

        logger.info("Recipe improved successfully")
        return result.output


def initialize_recipe_orchestrator(cfg: Config = config, client: Any = None) -> RecipeOrchestrator:
    """Factory: build the model invoker from configuration and wire the orchestrator.

    Args:
        cfg: Configuration to read the model settings from.
        client: Optional pre-built google-genai client (or a stand-in with the
            same `models.generate_content` interface).

    Returns:
        Ready-to-use RecipeOrchestrator.
    """
    invoker = ModelInvoker.from_config(cfg, client=client)
    if invoker.is_configured:
        logger.info(f"Recipe orchestrator ready (model: {cfg.GEMINI_MODEL})")
    else:
        logger.warning("Recipe orchestrator ready without a Gemini API key; generation will use fallback recipes")
    if cfg.startup_delay_seconds:
        logger.info(f"Serverless mode: {cfg.COLD_START_DELAY_MS}ms delay before each model call")
    return RecipeOrchestrator(invoker)
