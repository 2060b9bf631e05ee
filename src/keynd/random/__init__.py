"""
Seeded random sampling.

Thin public facade over :mod:`keynd.infrastructure.random`.

Examples
--------
>>> from keynd import random
>>> rng = random.new(42)
>>> rng.normal(0.0, 1.0, 2, 3).shape
(2, 3)
"""

from ..infrastructure.random import Generator, SamplerStats, new

__all__ = [
    Generator.__name__,
    SamplerStats.__name__,
    new.__name__,
]
