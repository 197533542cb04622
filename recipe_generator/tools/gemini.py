"""Gemini model invoker.

Wraps the single call to the hosted Gemini model. `ModelInvoker.invoke()`
never raises: it returns an InvocationResult that holds either the response
validated against the prompt's output contract, or one of three failure
reasons:

- configuration: no API key (and no injected client)
- transport: the client raised or the call exceeded MODEL_TIMEOUT_SECONDS
- validation: the response text is not JSON, or the JSON breaks the contract

Core Functions:
- safe_execute_sync(): run a callable, log and swallow its exception
- parse_model_response(): lenient JSON parsing + contract validation
- ModelInvoker.invoke(): optional cold-start delay, threaded call, parse
"""

import asyncio
import json
import re
from typing import Any, Optional

from google import genai
from google.genai import types
from pydantic import BaseModel

from recipe_generator.models.models import InvocationResult, PromptSpec
from recipe_generator.utils.config import Config, config
from recipe_generator.utils.errors import FailureReason
from recipe_generator.utils.logger import logger


def safe_execute_sync(
    func,
    operation_name: str,
    log_level: str = "warning",
    default_return=None,
):
    """Run func(), logging any exception and returning default_return instead.

    Args:
        func: Callable to execute (no args).
        operation_name: Description for logging.
        log_level: "debug", "warning" or "error". Default: "warning".
        default_return: Value returned when func raises.

    Returns:
        Result of func, or default_return on exception.
    """
    try:
        return func()
    except Exception as e:
        getattr(logger, log_level, logger.warning)(f"{operation_name}: {e}")
        return default_return


def parse_model_response(response_text: str, output_schema: type[BaseModel]) -> Optional[BaseModel]:
    """Parse model response text and validate it against the output contract.

    Tries a direct json.loads() first, then extracts the outermost {...} block
    (the model sometimes wraps JSON in prose or code fences).

    Args:
        response_text: Raw response text from Gemini.
        output_schema: Contract model class from the PromptSpec.

    Returns:
        Validated contract instance, or None if no JSON object was found or
        validation failed.
    """

    def _parse_json_direct():
        return json.loads(response_text)

    def _parse_json_regex():
        json_match = re.search(r"\{.*\}", response_text, re.DOTALL)
        if json_match:
            return json.loads(json_match.group())
        return None

    parsed = safe_execute_sync(_parse_json_direct, "Direct JSON parse", log_level="debug")
    if not isinstance(parsed, dict):
        parsed = safe_execute_sync(_parse_json_regex, "Regex JSON extraction", log_level="debug")

    if not isinstance(parsed, dict):
        logger.warning("Failed to parse JSON object from model response")
        return None

    return safe_execute_sync(
        lambda: output_schema.model_validate(parsed),
        f"Validate {output_schema.__name__} contract",
        log_level="warning",
    )


class ModelInvoker:
    """Single-call gateway to the Gemini model.

    The google-genai client is created once from the API key, or injected
    (tests, alternative transports). Without either, every call is a
    configuration failure.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.0-flash",
        temperature: float = 0.7,
        max_output_tokens: int = 2048,
        timeout_seconds: float = 30.0,
        startup_delay_seconds: float = 0.0,
        client: Any = None,
    ) -> None:
        self.api_key = (api_key or "").strip()
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout_seconds = timeout_seconds
        self.startup_delay_seconds = startup_delay_seconds
        self.client = client
        if self.client is None and self.api_key:
            self.client = genai.Client(api_key=self.api_key)

    @classmethod
    def from_config(cls, cfg: Config = config, client: Any = None) -> "ModelInvoker":
        return cls(
            api_key=cfg.GEMINI_API_KEY,
            model=cfg.GEMINI_MODEL,
            temperature=cfg.TEMPERATURE,
            max_output_tokens=cfg.MAX_OUTPUT_TOKENS,
            timeout_seconds=cfg.MODEL_TIMEOUT_SECONDS,
            startup_delay_seconds=cfg.startup_delay_seconds,
            client=client,
        )

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def _generate(self, prompt_text: str) -> str:
        # The sync client runs in a worker thread; the event loop stays free
        response = await asyncio.to_thread(
            self.client.models.generate_content,
            model=self.model,
            contents=prompt_text,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                temperature=self.temperature,
                max_output_tokens=self.max_output_tokens,
            ),
        )
        return response.text or ""

    async def invoke(self, prompt_spec: PromptSpec) -> InvocationResult:
        """Send one prompt to the model and validate the response.

        Args:
            prompt_spec: Rendered prompt and its output contract.

        Returns:
            InvocationResult.success(validated_output) or
            InvocationResult.failure(reason, message). Never raises.
        """
        if not self.is_configured:
            logger.warning(f"Model call skipped for '{prompt_spec.name}': no Gemini API key configured")
            return InvocationResult.failure(FailureReason.CONFIGURATION, "No Gemini API key is configured")

        if self.startup_delay_seconds > 0:
            await asyncio.sleep(self.startup_delay_seconds)

        try:
            response_text = await asyncio.wait_for(
                self._generate(prompt_spec.text), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning(f"Model call '{prompt_spec.name}' timed out after {self.timeout_seconds}s")
            return InvocationResult.failure(
                FailureReason.TRANSPORT, f"Model call timed out after {self.timeout_seconds}s"
            )
        except Exception as e:
            logger.warning(f"Model call '{prompt_spec.name}' failed: {e}")
            return InvocationResult.failure(FailureReason.TRANSPORT, f"Model call failed: {e}")

        output = parse_model_response(response_text, prompt_spec.output_schema)
        if output is None:
            logger.debug(f"Rejected model response for '{prompt_spec.name}': {response_text[:200]!r}")
            return InvocationResult.failure(
                FailureReason.VALIDATION,
                f"Model response did not match the {prompt_spec.output_schema.__name__} contract",
            )

        logger.debug(f"Model call '{prompt_spec.name}' returned a valid {prompt_spec.output_schema.__name__}")
        return InvocationResult.success(output)
