"""Randomness collaborators used to order the opening round."""

import random
from typing import Callable, Sequence

from ..models import Contestant

Shuffler = Callable[[Sequence[Contestant]], Sequence[Contestant]]


def random_shuffle(contestants: Sequence[Contestant]) -> list[Contestant]:
    """Uniform permutation from the module-level RNG"""
    return random.sample(list(contestants), len(contestants))


def seeded_shuffle(seed: int) -> Shuffler:
    """Build a shuffler that is reproducible for a given seed"""
    rng = random.Random(seed)

    def shuffle(contestants: Sequence[Contestant]) -> list[Contestant]:
        return rng.sample(list(contestants), len(contestants))

    return shuffle


def identity_shuffle(contestants: Sequence[Contestant]) -> list[Contestant]:
    """Keep roster order (deterministic tests and demos)"""
    return list(contestants)
