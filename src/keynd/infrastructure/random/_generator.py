"""
Seeded random sampling producing NDArray results.

This module defines :class:`Generator`, which owns one NumPy bit-generator
stream (``numpy.random.default_rng``) and implements the engine's samplers on
top of its uniform, standard-normal and bounded-integer primitives.

Algorithms
----------
- ``poisson``: Knuth's multiplication method. The product of uniforms is
  compared against ``exp(-lam)``, so ``lam`` large enough to underflow that
  threshold is rejected.
- ``gamma``: Marsaglia and Tsang's squeeze/rejection method for
  ``shape >= 1``; ``0 < shape < 1`` uses the boost
  ``Gamma(shape + 1) * U**(1 / shape)``.
- ``beta``: ``X / (X + Y)`` with ``X ~ Gamma(alpha)`` and
  ``Y ~ Gamma(beta)``; all ``X`` are drawn before all ``Y``.
- ``permutation`` / ``shuffle``: Fisher-Yates, iterating ``i`` from the last
  position down to 1 and swapping with ``j`` uniform in ``[0, i]``.

Rejection loops have no hard iteration cap. :attr:`Generator.stats` records
the number of loop iterations per accepted draw so callers can verify the
mean stays bounded.

Thread safety
-------------
A Generator is not thread-safe. Sharing one instance across threads without
external locking is the caller's responsibility; use one generator per
thread instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from ...domain._dtype import DType
from ...domain.utils._shape import (
    compute_size,
    normalize_shape_args,
    unravel_index,
    validate_shape,
)
from ..ndarray._ndarray import NDArray

_SEED_MASK = (1 << 64) - 1
_BINOMIAL_CHUNK = 1 << 16


def _bit_generator_seed(seed: Optional[int]) -> Optional[int]:
    # default_rng rejects negative ints; fold any int64 onto its unsigned bits.
    if seed is None:
        return None
    return int(seed) & _SEED_MASK


@dataclass
class SamplerStats:
    """
    Rejection-loop accounting for one sampler.

    Attributes
    ----------
    draws : int
        Number of accepted samples.
    iterations : int
        Number of loop iterations spent producing them.
    """

    draws: int = 0
    iterations: int = 0

    @property
    def mean_iterations(self) -> float:
        """Average iterations per accepted sample (``nan`` before any draw)."""
        return self.iterations / self.draws if self.draws else math.nan


class Generator:
    """
    Random number generator producing NDArray samples.

    Parameters
    ----------
    seed : Optional[int], optional
        Seed for the underlying stream. ``None`` seeds from operating-system
        entropy. Two generators built with the same seed produce identical
        sequences.

    Notes
    -----
    - Sample shapes are given variadically (``normal(0, 1, 2, 3)``) or as a
      single sequence (``normal(0, 1, (2, 3))``). The empty shape yields the
      degenerate empty array and consumes no randomness.
    - All outputs are FLOAT64 except :meth:`randint` and :meth:`permutation`
      (INT64).
    - Not thread-safe; see the module documentation.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = np.random.default_rng(_bit_generator_seed(seed))
        self._stats: dict[str, SamplerStats] = {
            "gamma": SamplerStats(),
            "poisson": SamplerStats(),
        }

    def seed(self, seed: Optional[int]) -> None:
        """
        Restart the stream from ``seed``.

        Sampler statistics are kept; call :meth:`reset_stats` to clear them.
        """
        self._rng = np.random.default_rng(_bit_generator_seed(seed))

    @property
    def stats(self) -> dict[str, SamplerStats]:
        """Per-sampler rejection-loop statistics (``"gamma"``, ``"poisson"``)."""
        return self._stats

    def reset_stats(self) -> None:
        """Zero all sampler statistics."""
        for name in self._stats:
            self._stats[name] = SamplerStats()

    # ----------------------------
    # Stream primitives
    # ----------------------------
    def _float64(self) -> float:
        return float(self._rng.random())

    def _norm_float64(self) -> float:
        return float(self._rng.standard_normal())

    def _intn(self, n: int) -> int:
        return int(self._rng.integers(n))

    @staticmethod
    def _shape(shape: Any) -> tuple[int, ...]:
        return validate_shape(normalize_shape_args(shape))

    @staticmethod
    def _float_result(shape: tuple[int, ...], values: Any) -> NDArray:
        return NDArray._from_values(shape, DType.FLOAT64, values)

    # ----------------------------
    # Continuous distributions
    # ----------------------------
    def uniform(self, low: float, high: float, *shape: Any) -> NDArray:
        """
        Samples from the uniform distribution on ``[low, high)``.

        Returns
        -------
        NDArray
            FLOAT64 array of the requested shape.
        """
        shape = self._shape(shape)
        u = self._rng.random(compute_size(shape))
        return self._float_result(shape, low + (high - low) * u)

    def rand(self, *shape: Any) -> NDArray:
        """Samples from the uniform distribution on ``[0, 1)``."""
        return self.uniform(0.0, 1.0, *shape)

    def normal(self, mean: float, std: float, *shape: Any) -> NDArray:
        """
        Samples from the normal distribution ``N(mean, std**2)``.

        Raises
        ------
        ValueError
            If ``std`` is negative.
        """
        if not std >= 0:
            raise ValueError(f"std must be >= 0, got {std}")
        shape = self._shape(shape)
        z = self._rng.standard_normal(compute_size(shape))
        return self._float_result(shape, mean + std * z)

    def standard_normal(self, *shape: Any) -> NDArray:
        """Samples from ``N(0, 1)``."""
        return self.normal(0.0, 1.0, *shape)

    def exponential(self, scale: float, *shape: Any) -> NDArray:
        """
        Samples from the exponential distribution with mean ``scale``.

        Computed by inversion, ``-scale * log(U)`` with ``U`` in ``(0, 1]``.

        Raises
        ------
        ValueError
            If ``scale`` is not positive.
        """
        if not scale > 0:
            raise ValueError(f"scale must be > 0, got {scale}")
        shape = self._shape(shape)
        u = 1.0 - self._rng.random(compute_size(shape))
        return self._float_result(shape, -scale * np.log(u))

    def gamma(self, shape: float, scale: float, *size: Any) -> NDArray:
        """
        Samples from the gamma distribution ``Gamma(shape, scale)``.

        Parameters
        ----------
        shape : float
            Shape parameter ``k > 0``.
        scale : float
            Scale parameter ``theta > 0``; the mean is ``shape * scale``.
        *size : int or Sequence[int]
            Output shape.

        Returns
        -------
        NDArray
            FLOAT64 array of positive samples.

        Raises
        ------
        ValueError
            If ``shape`` or ``scale`` is not positive.
        """
        if not shape > 0:
            raise ValueError(f"shape must be > 0, got {shape}")
        if not scale > 0:
            raise ValueError(f"scale must be > 0, got {scale}")
        out_shape = self._shape(size)
        values = self._gamma_values(shape, scale, compute_size(out_shape))
        return self._float_result(out_shape, values)

    def _gamma_values(self, shape: float, scale: float, n: int) -> list[float]:
        if shape < 1.0:
            boosted = self._gamma_values(shape + 1.0, scale, n)
            inv_shape = 1.0 / shape
            return [g * self._float64() ** inv_shape for g in boosted]

        stats = self._stats["gamma"]
        d = shape - 1.0 / 3.0
        c = 1.0 / math.sqrt(9.0 * d)
        values = []
        for _ in range(n):
            while True:
                stats.iterations += 1
                x = self._norm_float64()
                v = 1.0 + c * x
                if v <= 0.0:
                    continue
                v = v * v * v
                u = self._float64()
                # squeeze test first, then the exact log test
                if u < 1.0 - 0.0331 * (x * x) * (x * x):
                    break
                if u > 0.0 and math.log(u) < 0.5 * x * x + d * (1.0 - v + math.log(v)):
                    break
            stats.draws += 1
            values.append(scale * d * v)
        return values

    def beta(self, alpha: float, beta: float, *shape: Any) -> NDArray:
        """
        Samples from the beta distribution ``Beta(alpha, beta)``.

        Returns
        -------
        NDArray
            FLOAT64 array with values in ``(0, 1)``.

        Raises
        ------
        ValueError
            If ``alpha`` or ``beta`` is not positive.
        """
        if not alpha > 0:
            raise ValueError(f"alpha must be > 0, got {alpha}")
        if not beta > 0:
            raise ValueError(f"beta must be > 0, got {beta}")
        out_shape = self._shape(shape)
        n = compute_size(out_shape)
        x = np.array(self._gamma_values(alpha, 1.0, n), dtype=np.float64)
        y = np.array(self._gamma_values(beta, 1.0, n), dtype=np.float64)
        return self._float_result(out_shape, x / (x + y))

    # ----------------------------
    # Discrete distributions
    # ----------------------------
    def binomial(self, n: int, p: float, *shape: Any) -> NDArray:
        """
        Samples from the binomial distribution: successes in ``n`` Bernoulli
        trials with probability ``p``.

        Returns
        -------
        NDArray
            FLOAT64 array of integral counts.

        Raises
        ------
        ValueError
            If ``n`` is negative or ``p`` is outside ``[0, 1]``.
        """
        n = int(n)
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"p must be in [0, 1], got {p}")
        out_shape = self._shape(shape)
        counts = np.zeros(compute_size(out_shape), dtype=np.int64)
        for k in range(counts.size):
            remaining = n
            while remaining > 0:
                block = min(remaining, _BINOMIAL_CHUNK)
                counts[k] += int(np.count_nonzero(self._rng.random(block) < p))
                remaining -= block
        return self._float_result(out_shape, counts)

    def poisson(self, lam: float, *shape: Any) -> NDArray:
        """
        Samples from the Poisson distribution with rate ``lam``.

        Returns
        -------
        NDArray
            FLOAT64 array of integral counts.

        Raises
        ------
        ValueError
            If ``lam`` is negative, or so large that ``exp(-lam)`` underflows
            to zero.
        """
        if not lam >= 0:
            raise ValueError(f"lam must be >= 0, got {lam}")
        threshold = math.exp(-lam)
        if threshold == 0.0:
            raise ValueError(f"lam={lam} is too large: exp(-lam) underflows to 0")

        out_shape = self._shape(shape)
        stats = self._stats["poisson"]
        values = []
        for _ in range(compute_size(out_shape)):
            k = 0
            p = 1.0
            while True:
                k += 1
                p *= self._float64()
                if p <= threshold:
                    break
            stats.iterations += k
            stats.draws += 1
            values.append(k - 1)
        return self._float_result(out_shape, np.array(values, dtype=np.float64))

    def randint(self, low: int, high: int, *shape: Any) -> NDArray:
        """
        Uniform integers in ``[low, high)``.

        Returns
        -------
        NDArray
            INT64 array.

        Raises
        ------
        ValueError
            If ``high <= low``.
        """
        low, high = int(low), int(high)
        if high <= low:
            raise ValueError(f"high must be > low, got low={low}, high={high}")
        out_shape = self._shape(shape)
        values = low + self._rng.integers(high - low, size=compute_size(out_shape))
        return NDArray._from_values(out_shape, DType.INT64, values)

    # ----------------------------
    # Sampling from arrays
    # ----------------------------
    def choice(self, arr: NDArray, size: int) -> NDArray:
        """
        Draw ``size`` elements of ``arr`` uniformly with replacement.

        Parameters
        ----------
        arr : NDArray
            Source array of any shape; elements are addressed by row-major
            position.
        size : int
            Number of samples.

        Returns
        -------
        NDArray
            1-D FLOAT64 array of length ``size``.

        Raises
        ------
        ValueError
            If ``arr`` is empty or ``size`` is negative.
        """
        size = int(size)
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")
        if arr.size == 0:
            raise ValueError("cannot choose from an empty array")
        values = []
        for _ in range(size):
            indices = unravel_index(self._intn(arr.size), arr.shape)
            values.append(arr.get_float64(*indices))
        return self._float_result((size,), np.array(values, dtype=np.float64))

    def permutation(self, n: int) -> NDArray:
        """
        Random permutation of ``0, 1, ..., n - 1``.

        Returns
        -------
        NDArray
            1-D INT64 array of length ``n``.

        Raises
        ------
        ValueError
            If ``n`` is negative.
        """
        n = int(n)
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        data = list(range(n))
        for i in range(n - 1, 0, -1):
            j = self._intn(i + 1)
            data[i], data[j] = data[j], data[i]
        return NDArray._from_values((n,), DType.INT64, np.array(data, dtype=np.int64))

    def shuffle(self, arr: NDArray) -> None:
        """
        Shuffle the elements of ``arr`` in place.

        Elements are permuted across all positions in row-major order,
        regardless of the array's shape; values are swapped without
        conversion, so every dtype is supported.
        """
        n = arr.size
        for i in range(n - 1, 0, -1):
            j = self._intn(i + 1)
            idx_i = unravel_index(i, arr.shape)
            idx_j = unravel_index(j, arr.shape)
            val_i = arr.item(*idx_i)
            val_j = arr.item(*idx_j)
            arr.set_item(val_j, *idx_i)
            arr.set_item(val_i, *idx_j)


def new(seed: Optional[int] = None) -> Generator:
    """Create a :class:`Generator` seeded with ``seed``."""
    return Generator(seed)
