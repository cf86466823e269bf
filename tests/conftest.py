from __future__ import annotations

import pytest

from core.config import AppSettings
from core.domain.models import ImagePayload
from tests.support import PNG_BYTES


@pytest.fixture
def image() -> ImagePayload:
    return ImagePayload(content=PNG_BYTES, mime_type="image/png", filename="screen.png")


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, ai_api_key="test-key", ai_base_url="https://provider.test/api/v1")
