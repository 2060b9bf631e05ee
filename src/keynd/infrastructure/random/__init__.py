"""
Seeded random sampling.

Public API
----------
- ``Generator``    : stateful sampler over one NumPy bit-generator stream
- ``SamplerStats`` : rejection-loop accounting exposed by ``Generator.stats``
- ``new``          : construct a seeded ``Generator``
"""

from ._generator import Generator, SamplerStats, new

__all__ = [
    Generator.__name__,
    SamplerStats.__name__,
    new.__name__,
]
