"""Gateway to the external generative model."""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Protocol, TypeVar

from foodsafe.domain.errors import (
    FieldError,
    InferenceUnavailable,
    InvalidModelOutput,
)
from foodsafe.services.schemas import OutputSchema

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


class InferenceClient(Protocol):
    """Interface for structured-output model calls."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema_name: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> object:
        """Return the decoded JSON reply of the model."""


@dataclass
class InferenceGateway:
    """Sends prompts to the model and validates the structured reply."""

    client: InferenceClient
    model: str
    reasoning_effort: str | None
    store: bool
    timeout_seconds: float = 60.0
    max_attempts: int = 1

    async def invoke(
        self,
        prompt: str,
        output_schema: OutputSchema[ResultT],
        *,
        image_data_url: str | None = None,
    ) -> ResultT:
        """Call the model once (or up to max_attempts on transport errors)."""
        try:
            raw = await self._call_with_retry(prompt, output_schema, image_data_url)
            return output_schema.validate(raw)
        except InvalidModelOutput as exc:
            logger.warning(
                "Model reply for %s failed validation: %s",
                output_schema.name,
                ", ".join(exc.paths),
            )
            raise

    async def _call_with_retry(
        self,
        prompt: str,
        output_schema: OutputSchema[ResultT],
        image_data_url: str | None,
    ) -> object:
        attempts = max(1, self.max_attempts)
        for attempt in range(1, attempts):
            try:
                return await self._call(prompt, output_schema, image_data_url)
            except InferenceUnavailable:
                logger.warning(
                    "Model call %s failed (attempt %d/%d), retrying",
                    output_schema.name,
                    attempt,
                    attempts,
                )
        return await self._call(prompt, output_schema, image_data_url)

    async def _call(
        self,
        prompt: str,
        output_schema: OutputSchema[ResultT],
        image_data_url: str | None,
    ) -> object:
        try:
            async with asyncio.timeout(self.timeout_seconds):
                raw = await self.client.generate(
                    model=self.model,
                    reasoning_effort=self.reasoning_effort,
                    store=self.store,
                    prompt=prompt,
                    schema_name=output_schema.name,
                    schema=output_schema.json_schema,
                    image_data_url=image_data_url,
                )
        except TimeoutError as exc:
            logger.warning(
                "Model call %s timed out after %ss",
                output_schema.name,
                self.timeout_seconds,
            )
            raise InferenceUnavailable(
                f"Model call timed out after {self.timeout_seconds}s"
            ) from exc
        if isinstance(raw, str | bytes):
            return decode_reply(raw)
        return raw


def decode_reply(text: str | bytes) -> object:
    """Decode a JSON model reply, rejecting empty or malformed text."""
    if not text:
        raise InvalidModelOutput(
            [FieldError(path="<root>", message="empty response")],
            "Model returned an empty response",
        )
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidModelOutput(
            [FieldError(path="<root>", message=f"invalid JSON: {exc.msg}")],
            "Model returned malformed JSON",
        ) from exc
