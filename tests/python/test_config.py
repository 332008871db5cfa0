"""
Tests for global configuration: the default random source.
"""

import logging

import pytest
import numpy as np

import matrices
from matrices import Matrix
from matrices._config import SEED_ENV_VAR


class TestRandomSource:
    """Test default random source management."""

    def test_lazy_creation(self, clean_config):
        """The default source is a numpy Generator created on demand."""
        rng = matrices.get_random_source()
        assert isinstance(rng, np.random.Generator)
        assert matrices.get_random_source() is rng

    def test_seed_reproducible(self, clean_config):
        """Reseeding replays the same stream."""
        matrices.seed(5)
        first = matrices.get_random_source().random(4)
        matrices.seed(5)
        second = matrices.get_random_source().random(4)
        np.testing.assert_array_equal(first, second)

    def test_set_random_source(self, clean_config):
        """A custom default source is used by randomize()."""
        class HalfSource:
            def random(self, size=None, dtype=np.float64):
                return np.full(size, 0.5, dtype=dtype)

        matrices.set_random_source(HalfSource())
        mat = Matrix(2, 2)
        mat.randomize()
        assert mat == Matrix(2, 2)

    def test_env_seed(self, clean_config, monkeypatch):
        """MATRICES_SEED seeds the lazily created source."""
        monkeypatch.setenv(SEED_ENV_VAR, "11")
        a = Matrix(3, 3)
        a.randomize()

        clean_config.reset()
        b = Matrix(3, 3)
        b.randomize()
        assert a == b

    def test_env_seed_invalid(self, clean_config, monkeypatch):
        """A malformed MATRICES_SEED is reported on first use."""
        monkeypatch.setenv(SEED_ENV_VAR, "not-a-number")
        with pytest.raises(ValueError, match=SEED_ENV_VAR):
            matrices.get_random_source()

    def test_explicit_rng_bypasses_default(self, clean_config):
        """Passing rng never touches the default source."""
        mat = Matrix(2, 2)
        mat.randomize(np.random.default_rng(0))
        assert clean_config._random_source is None


class TestLogging:
    """Test debug logging."""

    def test_seed_logged(self, clean_config, caplog):
        """Reseeding is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="matrices.config"):
            matrices.seed(3)
        assert "Reseeding" in caplog.text

    def test_in_place_reshape_logged(self, caplog):
        """In-place transpose reports the shape change."""
        mat = Matrix(2, 3)
        with caplog.at_level(logging.DEBUG, logger="matrices.matrix"):
            mat.transpose()
        assert "2x3 -> 3x2" in caplog.text
