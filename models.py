# models.py
# Embedding model loading (CPU-only, local)
import asyncio
import logging
from typing import List, Sequence

import numpy as np
from sentence_transformers import SentenceTransformer

from config import DEFAULT_MODEL

logger = logging.getLogger(__name__)


class SentenceEncoder:
    """Thin wrapper exposing `embed(texts)` over a SentenceTransformer."""

    def __init__(self, model: SentenceTransformer, name: str = DEFAULT_MODEL):
        self.model = model
        self.name = name

    @property
    def dimension(self) -> int:
        return self.model.get_sentence_embedding_dimension()

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """
        texts: list[str] -> list of vectors, one per text, same order.
        """
        if not texts:
            return []
        vecs = self.model.encode(list(texts), convert_to_numpy=True, show_progress_bar=False)
        return np.asarray(vecs, dtype="float32").tolist()


async def load(model_name: str = DEFAULT_MODEL) -> SentenceEncoder:
    """
    Load the sentence-transformers model without blocking the event loop.
    """
    logger.info("Loading embedding model: %s", model_name)
    model = await asyncio.to_thread(SentenceTransformer, model_name)
    encoder = SentenceEncoder(model, model_name)
    logger.info("Model loaded. Embedding dimension: %d", encoder.dimension)
    return encoder
