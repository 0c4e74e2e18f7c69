"""Pydantic models for API request bodies."""

from typing import Any

from pydantic import BaseModel


class ExtractLabelRequest(BaseModel):
    """Photo of a food label encoded as a base64 data URI."""

    image_data_uri: str


class CreateScanRequest(BaseModel):
    """Label data to assess, validated by the scan service."""

    label: dict[str, Any]
    image_url: str | None = None
