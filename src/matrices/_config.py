"""
Global configuration for matrices.

Provides:
- The process-wide default random source used by Matrix.randomize()
- Seeding, either explicitly or through the MATRICES_SEED environment variable

The default source is shared, unsynchronized state. Code that randomizes
matrices from several threads should pass its own generator to
Matrix.randomize(rng=...) instead.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    from ._typing import RandomSource

logger = logging.getLogger("matrices.config")

SEED_ENV_VAR = "MATRICES_SEED"


# =============================================================================
# Global Configuration State
# =============================================================================

class _Config:
    """
    Global configuration singleton.

    Manages the lazily created default random source.
    """

    def __init__(self):
        self._random_source: Optional["RandomSource"] = None

    @property
    def random_source(self) -> "RandomSource":
        """Get the default random source, creating it on first use."""
        if self._random_source is None:
            self._random_source = self._create_random_source()
        return self._random_source

    @random_source.setter
    def random_source(self, value: "RandomSource"):
        """Install a new default random source."""
        self._random_source = value

    def seed(self, value: Optional[int]) -> None:
        """Replace the default random source with a freshly seeded one."""
        logger.debug("Reseeding default random source (seed=%r)", value)
        self._random_source = np.random.default_rng(value)

    def reset(self) -> None:
        """Drop the default source; the next use recreates it."""
        self._random_source = None

    def _create_random_source(self) -> "RandomSource":
        """Create the default source, honoring MATRICES_SEED."""
        raw = os.environ.get(SEED_ENV_VAR, "").strip()
        if raw:
            try:
                seed = int(raw)
            except ValueError:
                raise ValueError(
                    f"{SEED_ENV_VAR} must be an integer, got {raw!r}"
                ) from None
            logger.debug("Creating default random source from %s=%d", SEED_ENV_VAR, seed)
            return np.random.default_rng(seed)

        logger.debug("Creating unseeded default random source")
        return np.random.default_rng()


# Global config instance
_config = _Config()


# =============================================================================
# Public API
# =============================================================================

def get_config() -> _Config:
    """Get global configuration instance."""
    return _config


def get_random_source() -> "RandomSource":
    """
    Get the process-wide default random source.

    Returns:
        numpy.random.Generator (or whatever set_random_source installed)
    """
    return _config.random_source


def set_random_source(rng: "RandomSource") -> None:
    """
    Install a custom default random source.

    Args:
        rng: Any object with a numpy-compatible random(size, dtype=...) method
    """
    _config.random_source = rng


def seed(value: Optional[int] = None) -> None:
    """
    Reseed the default random source.

    Args:
        value: Seed for numpy.random.default_rng; None draws fresh entropy

    Example:
        >>> matrices.seed(42)
        >>> m = matrices.Matrix(3, 3)
        >>> m.randomize()  # reproducible
    """
    _config.seed(value)
