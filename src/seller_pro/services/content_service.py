"""
Content Service - AI listing copy for a short product description.

Sends one prompt to the OpenAI Chat Completions API with a JSON schema
response format and validates the returned object. Failures reach the
caller as a single opaque message; the cause goes to the log.
"""
import json
import logging
import threading
from typing import Any, Optional

from openai import OpenAI, OpenAIError
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config.settings import get_settings, Settings

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = "Failed to generate content. Please try again."

PROMPT_TEMPLATE = """
Task: Act as an expert E-commerce SEO Copywriter.
Input Product Description: "{description}"

Requirements:
1. Create an eye-catching, SEO-optimized Product Title (max 80 characters).
2. Generate 10 high-converting search keywords.
3. Write a detailed, SEO-friendly long description (approx 200 words) incorporating the keywords naturally.
4. Extract 5 key features or benefits as bullet points.

Output must be in JSON format.
""".strip()

# JSON Schema used for structured output (OpenAI response_format)
CONTENT_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {
            "type": "string",
            "description": "SEO optimized product title"
        },
        "keywords": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of 10 search keywords"
        },
        "longDescription": {
            "type": "string",
            "description": "Detailed product description"
        },
        "features": {
            "type": "array",
            "items": {"type": "string"},
            "description": "5 key product features"
        }
    },
    "required": ["title", "keywords", "longDescription", "features"],
    "additionalProperties": False
}


class ContentGenerationError(Exception):
    """Content could not be generated; the message is safe to show users."""


class GenerationInProgressError(ContentGenerationError):
    """Another generation is still running on this generator."""


class GeneratedContent(BaseModel):
    """Listing copy returned by the AI service."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    keywords: list[str]
    long_description: str = Field(alias="longDescription")
    features: list[str]


def build_prompt(short_description: str) -> str:
    """Build the copywriter prompt for a product description."""
    return PROMPT_TEMPLATE.format(description=short_description.strip())


def parse_content(raw_text: Optional[str]) -> GeneratedContent:
    """
    Parse and validate the model's JSON output.

    Raises:
        ContentGenerationError: on invalid JSON or a missing/mistyped field
    """
    try:
        data = json.loads(raw_text or '{}')
        return GeneratedContent.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Failed to parse content response: {e}")
        raise ContentGenerationError(GENERATION_FAILED_MESSAGE) from e


class ContentGenerator:
    """
    Generates listing copy, one request at a time.

    A second generate() call while one is running is rejected with
    GenerationInProgressError rather than queued.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Any = None):
        self.settings = settings or get_settings()
        self._client = client
        self._lock = threading.Lock()

    @property
    def configured(self) -> bool:
        return self._client is not None or self.settings.content_enabled

    @property
    def in_progress(self) -> bool:
        return self._lock.locked()

    def _get_client(self):
        """Create the OpenAI client on first use."""
        if self._client is None:
            if not self.settings.openai_api_key:
                raise ContentGenerationError(
                    "Content generation is not configured - set OPENAI_API_KEY"
                )
            # No retries: one attempt per user request
            self._client = OpenAI(api_key=self.settings.openai_api_key, max_retries=0)
        return self._client

    def generate(self, short_description: str) -> GeneratedContent:
        """
        Generate title, keywords, long description and features.

        Raises:
            ValueError: if the description is blank
            GenerationInProgressError: if a request is already outstanding
            ContentGenerationError: on any API, parse or schema failure
        """
        if not short_description or not short_description.strip():
            raise ValueError("Product description is required")

        if not self._lock.acquire(blocking=False):
            raise GenerationInProgressError("Content generation is already in progress")

        try:
            client = self._get_client()
            logger.info(f"Generating content with {self.settings.openai_model}")
            try:
                response = client.chat.completions.create(
                    model=self.settings.openai_model,
                    messages=[
                        {"role": "user", "content": build_prompt(short_description)}
                    ],
                    response_format={
                        "type": "json_schema",
                        "json_schema": {
                            "name": "listing_content",
                            "schema": CONTENT_JSON_SCHEMA,
                            "strict": True
                        }
                    }
                )
                raw = response.choices[0].message.content
            except (OpenAIError, IndexError, AttributeError) as e:
                logger.error(f"Content generation request failed: {e}")
                raise ContentGenerationError(GENERATION_FAILED_MESSAGE) from e

            content = parse_content(raw)
            logger.info(f"Generated content: {content.title!r}")
            return content
        finally:
            self._lock.release()
