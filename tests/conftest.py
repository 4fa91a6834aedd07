from __future__ import annotations

import pytest

from pagewright.config import RenderSettings
from pagewright.context import RenderContext, reset_context, use_context


@pytest.fixture
def settings() -> RenderSettings:
    return RenderSettings()


@pytest.fixture(autouse=True)
def render_context(settings: RenderSettings):
    """A fresh render context per test, so registrations never leak between tests."""
    reset_context()
    context = RenderContext(settings=settings)
    with use_context(context):
        yield context
    reset_context()
