"""
Linear-algebra primitives.

Thin public facade over :mod:`keynd.infrastructure.linalg`.
"""

from ..infrastructure.linalg import (
    det,
    dot,
    inner,
    inv,
    matmul,
    norm,
    outer,
    trace,
    transpose,
)

__all__ = [
    dot.__name__,
    matmul.__name__,
    outer.__name__,
    inner.__name__,
    norm.__name__,
    trace.__name__,
    det.__name__,
    inv.__name__,
    transpose.__name__,
]
