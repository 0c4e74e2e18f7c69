"""Tests for the inference gateway."""

import asyncio
import logging
from dataclasses import dataclass, field

import pytest

from foodsafe.domain.assessments import AssessmentResult, Verdict
from foodsafe.domain.errors import InferenceUnavailable, InvalidModelOutput
from foodsafe.services.inference import InferenceClient, decode_reply
from foodsafe.services.schemas import ASSESSMENT_OUTPUT
from tests.conftest import SAFE_REPLY, FakeInferenceClient, make_gateway


@dataclass
class SlowInferenceClient(InferenceClient):
    """Client that never answers within the test timeout."""

    delay: float = 10.0
    started: asyncio.Event = field(default_factory=asyncio.Event)
    cancelled: bool = False

    async def generate(self, **_kwargs: object) -> object:
        self.started.set()
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return SAFE_REPLY


def test_invoke_returns_validated_result() -> None:
    client = FakeInferenceClient()
    gateway = make_gateway(client)

    result = asyncio.run(gateway.invoke("prompt", ASSESSMENT_OUTPUT))

    assert isinstance(result, AssessmentResult)
    assert result.verdict is Verdict.SAFE
    assert client.calls[0]["schema_name"] == "food_safety_assessment"
    assert client.calls[0]["model"] == "gpt-5.2"


def test_invoke_surfaces_transport_failure_after_single_attempt() -> None:
    client = FakeInferenceClient(replies=[InferenceUnavailable("503")])
    gateway = make_gateway(client)

    with pytest.raises(InferenceUnavailable):
        asyncio.run(gateway.invoke("prompt", ASSESSMENT_OUTPUT))

    assert len(client.calls) == 1


def test_invoke_retries_transport_failure_when_configured() -> None:
    client = FakeInferenceClient(replies=[InferenceUnavailable("503"), SAFE_REPLY])
    gateway = make_gateway(client, max_attempts=2)

    result = asyncio.run(gateway.invoke("prompt", ASSESSMENT_OUTPUT))

    assert result.verdict is Verdict.SAFE
    assert len(client.calls) == 2


def test_invoke_does_not_retry_invalid_output() -> None:
    client = FakeInferenceClient(replies=[{"assessment": "Maybe"}, SAFE_REPLY])
    gateway = make_gateway(client, max_attempts=3)

    with pytest.raises(InvalidModelOutput):
        asyncio.run(gateway.invoke("prompt", ASSESSMENT_OUTPUT))

    assert len(client.calls) == 1


def test_invoke_decodes_text_replies() -> None:
    client = FakeInferenceClient(
        replies=['{"assessment": "Not Safe", "explanation": "Contains milk."}']
    )
    gateway = make_gateway(client)

    result = asyncio.run(gateway.invoke("prompt", ASSESSMENT_OUTPUT))

    assert result.verdict is Verdict.NOT_SAFE


def test_invoke_rejects_malformed_text_reply() -> None:
    client = FakeInferenceClient(replies=["Safe to Eat, probably"])
    gateway = make_gateway(client)

    with pytest.raises(InvalidModelOutput):
        asyncio.run(gateway.invoke("prompt", ASSESSMENT_OUTPUT))


def test_invoke_logs_undecodable_reply(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("foodsafe.services.inference")
    logger.addHandler(caplog.handler)
    client = FakeInferenceClient(replies=[""])
    gateway = make_gateway(client)

    try:
        with pytest.raises(InvalidModelOutput):
            asyncio.run(gateway.invoke("prompt", ASSESSMENT_OUTPUT))
    finally:
        logger.removeHandler(caplog.handler)

    assert "food_safety_assessment failed validation: <root>" in caplog.text


def test_invoke_times_out_as_unavailable() -> None:
    client = SlowInferenceClient()
    gateway = make_gateway(client, timeout_seconds=0.01)

    with pytest.raises(InferenceUnavailable):
        asyncio.run(gateway.invoke("prompt", ASSESSMENT_OUTPUT))

    assert client.cancelled


def test_invoke_propagates_caller_cancellation() -> None:
    async def scenario() -> SlowInferenceClient:
        client = SlowInferenceClient()
        gateway = make_gateway(client)
        task = asyncio.create_task(gateway.invoke("prompt", ASSESSMENT_OUTPUT))
        await client.started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return client

    client = asyncio.run(scenario())

    assert client.cancelled


def test_decode_reply_rejects_empty_text() -> None:
    with pytest.raises(InvalidModelOutput):
        decode_reply("")
