"""Deterministic stand-in embeddings.

Used when the selected backend cannot produce real embeddings (the process
binary). The vector keeps the embed signature usable but carries no
meaning: identical text always maps to the identical vector, and that is all
it guarantees. Responses built from it are flagged ``synthetic``.
"""

import hashlib

import numpy as np

STAND_IN_DIMENSION = 384
STAND_IN_MODEL = "mock-embedding"


def text_hash(text: str) -> int:
    """Hash text to an unsigned 64-bit integer, stable across processes."""
    digest = hashlib.blake2b(text.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "little")


def stand_in_vector(text: str, dimension: int = STAND_IN_DIMENSION) -> list[float]:
    """Map text to a fixed-length pseudo-embedding.

    Component i is ``((h + i) mod 2**64) / 2**64 * 2 - 1`` for the text hash
    h, stored as float32.

    Args:
        text: Any string, including the empty string
        dimension: Vector length

    Returns:
        List of floats, each in [-1.0, 1.0]
    """
    # uint64 array arithmetic wraps modulo 2**64
    seeds = np.arange(dimension, dtype=np.uint64) + np.uint64(text_hash(text))
    values = seeds.astype(np.float64) / 2.0**64 * 2.0 - 1.0
    return np.clip(values, -1.0, 1.0).astype(np.float32).tolist()


class StandInEmbeddingProvider:
    """Stand-in implementation of the EmbeddingProvider protocol.

    Example:
        ```python
        provider = StandInEmbeddingProvider()
        vector = await provider.encode("hello")
        print(len(vector))  # 384
        ```
    """

    def __init__(self, dimension: int = STAND_IN_DIMENSION) -> None:
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return STAND_IN_MODEL

    @property
    def synthetic(self) -> bool:
        return True

    async def encode(self, text: str, model: str | None = None) -> list[float]:
        """Return the stand-in vector for text; model is ignored."""
        return stand_in_vector(text, self._dimension)
