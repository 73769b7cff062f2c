import secrets
import random
from typing import Optional


class TrueRNG:
    """
    A wrapper around Python's `secrets` module. Default source outside of tests.
    """

    @staticmethod
    def random_float() -> float:
        """Returns a random float in the range [0.0, 1.0)."""
        precision = 10**12
        return secrets.randbelow(precision) / precision


class SeededRNG:
    """
    Deterministic source with the same interface as TrueRNG.
    Two instances built from the same seed produce the same draws.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def random_float(self) -> float:
        return self._random.random()


def create_rng(seed: Optional[int] = None):
    """Seeded generator when a seed is given, `secrets`-backed otherwise."""
    if seed is None:
        return TrueRNG()
    return SeededRNG(seed)
