import io

import pytest
from PIL import Image

from src.app.config import settings


@pytest.fixture
def jpeg_bytes() -> bytes:
    img = Image.new("RGB", (64, 64), color="green")
    buf = io.BytesIO()
    img.save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture
def api_key():
    original = settings.openai_api_key
    settings.openai_api_key = "sk-test"
    yield "sk-test"
    settings.openai_api_key = original


@pytest.fixture(autouse=True)
def _extended_schema():
    original = settings.schema_version
    settings.schema_version = "extended"
    yield
    settings.schema_version = original
