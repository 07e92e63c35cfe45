import asyncio
import re

import pytest
from fastapi.testclient import TestClient

from api_server import AppContext, create_app
from config import Settings

VOCAB = [
    "capital", "france", "paris",
    "tallest", "mountain", "everest",
    "square", "root", "64",
    "python", "programming", "language",
]


class FakeEncoder:
    """Keyword-count vectors plus a small bias term; deterministic and fast."""

    name = "fake"
    dimension = len(VOCAB) + 1

    def embed(self, texts):
        out = []
        for t in texts:
            words = re.findall(r"\w+", t.lower())
            out.append([float(words.count(v)) for v in VOCAB] + [0.1])
        return out


async def fake_loader(name):
    return FakeEncoder()


async def hanging_loader(name):
    await asyncio.Event().wait()


@pytest.fixture
def settings():
    return Settings(model_name="fake", load_timeout=5)


@pytest.fixture
def encoder():
    return FakeEncoder()


@pytest.fixture
def ready_context(settings):
    ctx = AppContext(settings, fake_loader)
    asyncio.run(ctx.initialize())
    assert ctx.ready
    return ctx


@pytest.fixture
def client(settings, ready_context):
    with TestClient(create_app(settings, context=ready_context)) as c:
        yield c


@pytest.fixture
def loading_client(settings):
    with TestClient(create_app(settings, loader=hanging_loader)) as c:
        yield c
