"""read_website tool definition for agent hosts."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .core.reader import WebReader
from .models.config import ReaderConfig


class ReadWebsiteParams(BaseModel):
    """Parameters accepted by the read_website tool."""

    url: str = Field(..., description="The URL of the website to fetch and convert to Markdown")

    model_config = {"extra": "forbid"}


READ_WEBSITE_TOOL: dict[str, Any] = {
    "name": "read_website",
    "label": "Read Website",
    "description": "Fetch a website URL and return raw Markdown representing the main readable content",
    "parameters": ReadWebsiteParams.model_json_schema(),
}


async def read_website(params: dict[str, Any], config: ReaderConfig | None = None) -> dict[str, Any]:
    """
    Execute the read_website tool.

    Transport failures are raised as TransportError subclasses for the
    host to report; they are never turned into partial content.

    Args:
        params: Tool call arguments ({"url": ...})
        config: Reader configuration (defaults if None)

    Returns:
        Tool result with a single text content block and read details
    """
    args = ReadWebsiteParams.model_validate(params)

    async with WebReader(config) as reader:
        result = await reader.read(args.url)

    return {
        "content": [{"type": "text", "text": result.markdown}],
        "details": {
            "url": args.url,
            "source_url": result.source_url,
            "content_type": result.content_type,
            "detection_method": result.detection_method.value,
        },
    }
