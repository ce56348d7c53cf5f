import json
import threading
import pytest
import sys
import os
from types import SimpleNamespace

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from openai import OpenAIError

from seller_pro.config.settings import Settings
from seller_pro.services.content_service import (
    GENERATION_FAILED_MESSAGE,
    ContentGenerationError,
    ContentGenerator,
    GenerationInProgressError,
    build_prompt,
    parse_content,
)

VALID_PAYLOAD = {
    "title": "Over-Ear Noise Cancelling Headphones, 20h Battery, Matte Black",
    "keywords": ["noise cancelling headphones", "over ear headphones"],
    "longDescription": "Block out the world with these headphones.",
    "features": ["20 hour battery", "Active noise cancelling"],
}


class FakeCompletions:
    """Stands in for client.chat.completions."""

    def __init__(self, content=None, error=None, hook=None):
        self.content = content
        self.error = error
        self.hook = hook
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.hook:
            self.hook()
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_generator(tmp_path, completions):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    settings = Settings(project_root=tmp_path, openai_model="test-model")
    return ContentGenerator(settings, client=client)


def test_generate_returns_parsed_content(tmp_path):
    completions = FakeCompletions(content=json.dumps(VALID_PAYLOAD))
    generator = make_generator(tmp_path, completions)

    content = generator.generate("Noise cancelling headphones, 20h battery")

    assert content.title == VALID_PAYLOAD["title"]
    assert content.keywords == VALID_PAYLOAD["keywords"]
    assert content.long_description == VALID_PAYLOAD["longDescription"]
    assert content.features == VALID_PAYLOAD["features"]

    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert call["response_format"]["type"] == "json_schema"
    assert "Noise cancelling headphones" in call["messages"][0]["content"]
    assert not generator.in_progress


def test_content_serializes_with_wire_names(tmp_path):
    content = parse_content(json.dumps(VALID_PAYLOAD))
    dumped = content.model_dump(by_alias=True)
    assert dumped["longDescription"] == VALID_PAYLOAD["longDescription"]


def test_blank_description_is_rejected(tmp_path):
    completions = FakeCompletions(content=json.dumps(VALID_PAYLOAD))
    generator = make_generator(tmp_path, completions)

    with pytest.raises(ValueError):
        generator.generate("   ")
    assert completions.calls == []


@pytest.mark.parametrize("raw", [
    "not json at all",
    "",
    None,
    json.dumps({"title": "Only a title"}),
    json.dumps({**VALID_PAYLOAD, "keywords": "one, two"}),
])
def test_bad_responses_raise_opaque_error(tmp_path, raw):
    generator = make_generator(tmp_path, FakeCompletions(content=raw))

    with pytest.raises(ContentGenerationError) as exc_info:
        generator.generate("A lamp")

    assert str(exc_info.value) == GENERATION_FAILED_MESSAGE
    assert not generator.in_progress


def test_api_failure_raises_opaque_error_and_releases_lock(tmp_path):
    generator = make_generator(tmp_path, FakeCompletions(error=OpenAIError("connection reset")))

    with pytest.raises(ContentGenerationError) as exc_info:
        generator.generate("A lamp")

    assert str(exc_info.value) == GENERATION_FAILED_MESSAGE
    assert not generator.in_progress

    # A later request goes through once the client recovers
    generator._client.chat.completions.error = None
    generator._client.chat.completions.content = json.dumps(VALID_PAYLOAD)
    assert generator.generate("A lamp").title == VALID_PAYLOAD["title"]


def test_concurrent_generation_is_rejected(tmp_path):
    started = threading.Event()
    release = threading.Event()

    def block():
        started.set()
        release.wait(timeout=5)

    completions = FakeCompletions(content=json.dumps(VALID_PAYLOAD), hook=block)
    generator = make_generator(tmp_path, completions)

    results = []
    worker = threading.Thread(target=lambda: results.append(generator.generate("First product")))
    worker.start()
    assert started.wait(timeout=5)

    assert generator.in_progress
    with pytest.raises(GenerationInProgressError):
        generator.generate("Second product")

    release.set()
    worker.join(timeout=5)

    assert len(results) == 1
    assert len(completions.calls) == 1
    assert not generator.in_progress


def test_missing_api_key_raises(tmp_path):
    generator = ContentGenerator(Settings(project_root=tmp_path))

    assert not generator.configured
    with pytest.raises(ContentGenerationError):
        generator.generate("A lamp")
    assert not generator.in_progress


def test_prompt_carries_requirements():
    prompt = build_prompt("  Bamboo cutting board  ")
    assert 'Input Product Description: "Bamboo cutting board"' in prompt
    assert "max 80 characters" in prompt
    assert "10 high-converting search keywords" in prompt
    assert "5 key features" in prompt
