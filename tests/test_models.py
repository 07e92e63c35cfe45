import asyncio

import numpy as np

import models
from models import SentenceEncoder


class StubTransformer:
    """Has the two SentenceTransformer methods the encoder uses."""

    def __init__(self, name=None):
        self.name = name
        self.calls = []

    def get_sentence_embedding_dimension(self):
        return 3

    def encode(self, texts, **kwargs):
        self.calls.append(list(texts))
        return np.array([[float(len(t)), 1.0, 0.0] for t in texts])


def test_embed_keeps_input_order():
    enc = SentenceEncoder(StubTransformer(), "stub")
    vecs = enc.embed(["a", "abc", "ab"])
    assert [v[0] for v in vecs] == [1.0, 3.0, 2.0]
    assert all(isinstance(x, float) for v in vecs for x in v)


def test_embed_empty_skips_model():
    stub = StubTransformer()
    assert SentenceEncoder(stub).embed([]) == []
    assert stub.calls == []


def test_dimension():
    assert SentenceEncoder(StubTransformer()).dimension == 3


def test_load_builds_encoder(monkeypatch):
    monkeypatch.setattr(models, "SentenceTransformer", StubTransformer)
    enc = asyncio.run(models.load("some-model"))
    assert isinstance(enc, SentenceEncoder)
    assert enc.name == "some-model"
    assert enc.model.name == "some-model"
    assert enc.dimension == 3
