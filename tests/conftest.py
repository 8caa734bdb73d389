import base64
import io
from datetime import datetime

import pytest
from PIL import Image

from story_assembly.languages.language_registry import LanguageRegistry

FIXED_NOW = datetime(2025, 6, 6, 20, 30)


def make_png(color=(200, 120, 40)) -> bytes:
    buffered = io.BytesIO()
    Image.new("RGB", (4, 4), color).save(buffered, format="PNG")
    return buffered.getvalue()


def text_part(text: str) -> dict:
    return {"text": text}


def image_part(data: bytes, mime_type: str = "image/png") -> dict:
    return {"inlineData": {"data": base64.b64encode(data).decode('utf-8'), "mimeType": mime_type}}


def make_response(*parts: dict) -> dict:
    return {"candidates": [{"content": {"parts": list(parts), "role": "model"}}]}


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def english():
    return LanguageRegistry.get_language("english")


@pytest.fixture
def spanish():
    return LanguageRegistry.get_language("spanish")


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW
