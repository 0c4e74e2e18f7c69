"""Label extraction from food package photos."""

import base64
import binascii
import re
from dataclasses import dataclass

from foodsafe.domain.errors import FieldError, ValidationError
from foodsafe.domain.labels import LabelExtraction
from foodsafe.services.inference import InferenceGateway
from foodsafe.services.prompts import EXTRACTION_PROMPT
from foodsafe.services.schemas import EXTRACTION_OUTPUT

_DATA_URI_PATTERN = re.compile(r"^data:(image/[\w.+-]+);base64,(.+)$", re.DOTALL)


@dataclass
class LabelExtractionService:
    """Reads product and nutrition data from a label photo."""

    gateway: InferenceGateway

    async def extract(self, image_bytes: bytes) -> LabelExtraction:
        """Extract label data from raw image bytes."""
        if not image_bytes:
            raise ValidationError([FieldError(path="image", message="empty image")])
        return await self._invoke(_to_data_url(image_bytes))

    async def extract_data_uri(self, data_uri: str) -> LabelExtraction:
        """Extract label data from a base64 image data URI."""
        return await self._invoke(_check_data_uri(data_uri))

    async def _invoke(self, data_url: str) -> LabelExtraction:
        return await self.gateway.invoke(
            EXTRACTION_PROMPT, EXTRACTION_OUTPUT, image_data_url=data_url
        )


def _check_data_uri(data_uri: str) -> str:
    data_uri = data_uri.strip()
    match = _DATA_URI_PATTERN.match(data_uri)
    if match is None:
        raise ValidationError(
            [
                FieldError(
                    path="image_data_uri",
                    message="expected a data:image/...;base64, URI",
                )
            ]
        )
    try:
        base64.b64decode(match.group(2), validate=True)
    except binascii.Error as exc:
        raise ValidationError(
            [FieldError(path="image_data_uri", message="invalid base64 payload")]
        ) from exc
    return data_uri


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
