"""Typed access to the generative model.

A :class:`Capability` pairs a prompt template with pydantic input and output
models. Calling it renders the prompt, asks the model for JSON matching the
output schema and validates the answer before handing it back, so callers
only ever see a well-formed output model or a :class:`CapabilityError`.
"""

from __future__ import annotations

import logging
from typing import Generic, Protocol, TypeVar

from django.conf import settings
from google import genai
from google.genai import types as genai_types
from pydantic import BaseModel, ValidationError

from trip_planner.exceptions import ProviderError, SchemaViolationError

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)


class ModelClient(Protocol):
    async def generate_json(self, prompt: str, schema: type[BaseModel]) -> str: ...


class GeminiModelClient:
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.model = model or settings.GEMINI_MODEL
        self.api_key = api_key or settings.GEMINI_API_KEY or None
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.GEMINI_TIMEOUT_SECONDS
        )
        self._client: genai.Client | None = None

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=genai_types.HttpOptions(timeout=int(self.timeout_seconds * 1000)),
            )
        return self._client

    async def generate_json(self, prompt: str, schema: type[BaseModel]) -> str:
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=genai_types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=schema,
                ),
            )
        except Exception as exc:
            raise ProviderError(f"Model request failed: {exc}") from exc

        if not response.text:
            raise ProviderError("Model returned an empty response")
        return response.text


class Capability(Generic[InputT, OutputT]):
    def __init__(
        self,
        name: str,
        prompt_template: str,
        input_model: type[InputT],
        output_model: type[OutputT],
        client: ModelClient,
    ) -> None:
        self.name = name
        self.prompt_template = prompt_template
        self.input_model = input_model
        self.output_model = output_model
        self.client = client

    async def __call__(self, payload: InputT) -> OutputT:
        prompt = self.render(payload)
        raw = await self.client.generate_json(prompt, self.output_model)
        try:
            return self.output_model.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Capability %s returned invalid output: %s", self.name, exc)
            raise SchemaViolationError(
                f"{self.name} returned output that does not match its schema"
            ) from exc

    def render(self, payload: InputT) -> str:
        return self.prompt_template.format(
            region=settings.PLANNING_REGION,
            **payload.model_dump(),
        )
