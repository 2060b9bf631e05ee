"""
Runtime configuration for the array engine.

Tunable numerical thresholds are read from environment variables carrying the
``KEYND_`` prefix:

- ``KEYND_SINGULAR_TOL``    : pivot magnitude below which ``inv`` reports a
  singular matrix (default ``1e-10``)
- ``KEYND_DET_WARN_ORDER``  : matrix order at which ``det`` warns about its
  factorial cost (default ``9``)
- ``KEYND_ALLCLOSE_RTOL``   : default relative tolerance of ``allclose``
  (default ``1e-5``)
- ``KEYND_ALLCLOSE_ATOL``   : default absolute tolerance of ``allclose``
  (default ``1e-8``)

The environment is read once, on first use. Tests and embedding applications
may replace the active configuration with :func:`set_config`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar

T = TypeVar("T")

_ENV_PREFIX = "KEYND_"


def _read_env(
    env: Mapping[str, str], name: str, parse: Callable[[str], T], default: T
) -> T:
    key = _ENV_PREFIX + name
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return parse(raw)
    except ValueError as e:
        raise ValueError(f"Invalid value for {key}: {raw!r}") from e


@dataclass(frozen=True)
class EngineConfig:
    """
    Immutable set of engine thresholds.

    Attributes
    ----------
    singular_tol : float
        ``inv`` fails when a diagonal pivot's magnitude is below this value.
    det_warn_order : int
        ``det`` emits a ``RuntimeWarning`` for matrices of at least this order.
    allclose_rtol : float
        Default relative tolerance for ``NDArray.allclose``.
    allclose_atol : float
        Default absolute tolerance for ``NDArray.allclose``.
    """

    singular_tol: float = 1e-10
    det_warn_order: int = 9
    allclose_rtol: float = 1e-5
    allclose_atol: float = 1e-8

    def __post_init__(self) -> None:
        if not self.singular_tol >= 0.0:
            raise ValueError(f"singular_tol must be >= 0, got {self.singular_tol}")
        if self.det_warn_order < 1:
            raise ValueError(
                f"det_warn_order must be >= 1, got {self.det_warn_order}"
            )
        if not (self.allclose_rtol >= 0.0 and self.allclose_atol >= 0.0):
            raise ValueError("allclose tolerances must be >= 0")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """
        Build a configuration from ``KEYND_*`` environment variables.

        Parameters
        ----------
        env : Optional[Mapping[str, str]], optional
            Mapping to read from. Defaults to ``os.environ``.

        Returns
        -------
        EngineConfig
            Configuration with unset variables falling back to defaults.

        Raises
        ------
        ValueError
            If a variable is set to an unparsable or out-of-range value.
        """
        env = os.environ if env is None else env
        return cls(
            singular_tol=_read_env(env, "SINGULAR_TOL", float, cls.singular_tol),
            det_warn_order=_read_env(env, "DET_WARN_ORDER", int, cls.det_warn_order),
            allclose_rtol=_read_env(env, "ALLCLOSE_RTOL", float, cls.allclose_rtol),
            allclose_atol=_read_env(env, "ALLCLOSE_ATOL", float, cls.allclose_atol),
        )


_active: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Return the active configuration, reading the environment on first call."""
    global _active
    if _active is None:
        _active = EngineConfig.from_env()
    return _active


def set_config(config: Optional[EngineConfig]) -> None:
    """
    Replace the active configuration.

    Passing ``None`` discards it so the next :func:`get_config` re-reads the
    environment.
    """
    global _active
    _active = config
