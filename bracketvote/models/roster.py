"""The fixed contestant roster used by the game."""

from .contestant import Contestant

# Number of entrants in the shipped bracket
ROSTER_SIZE = 8


def build_roster(size: int = ROSTER_SIZE) -> list[Contestant]:
    """Contestants 1..size with image references /1.jpeg ... /<size>.jpeg"""
    return [Contestant(id=i, image_ref=f"/{i}.jpeg") for i in range(1, size + 1)]


DEFAULT_ROSTER: list[Contestant] = build_roster()
