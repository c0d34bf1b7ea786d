"""Tests for the run configuration and logging setup."""

import logging
import math

import jax.numpy as jnp
import numpy as np
import pytest

from loop_cppn import InvalidConfiguration, NetworkConfig, RenderConfig, build_cppn
from loop_cppn.features import ColorMode, FeatureMode
from loop_cppn.logging_config import setup_logging


class TestRenderConfig:
    def test_defaults(self):
        config = RenderConfig()
        assert (config.width, config.height) == (200, 200)
        assert config.sharpness == 0.07
        assert (config.depth, config.size) == (12, 24)
        assert config.num_frames == 60
        assert config.delay == 0
        assert config.partitions == 4
        assert config.feature_mode is FeatureMode.PLAIN
        assert config.color_mode is ColorMode.COLOR
        assert config.filename is None

    def test_network_config(self):
        assert RenderConfig(gray=True, depth=3, size=7).network_config() == NetworkConfig(5, 3, 7, 1)
        assert RenderConfig(depth=2, size=4).network_config() == NetworkConfig(5, 2, 4, 3)

    def test_phase_scale(self):
        assert RenderConfig(num_frames=60).phase_scale == pytest.approx(2 * math.pi / 60)
        assert RenderConfig(num_frames=10, phase_cycles=2).phase_scale == pytest.approx(2 * math.pi / 5)

    def test_filename(self):
        assert RenderConfig(name="waves").filename == "waves.gif"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 0},
            {"height": -5},
            {"sharpness": 0.0},
            {"focus": -1.0},
            {"focus": float("nan")},
            {"depth": 0},
            {"size": 0},
            {"num_frames": 0},
            {"partitions": 0},
            {"phase_cycles": 0},
            {"density": float("inf")},
            {"delay": -1},
            {"seed": 1.5},
            {"width": 10.0},
            {"width": True},
            {"seed": 2 ** 64},
            {"seed": 2 ** 63},
            {"seed": -(2 ** 63) - 1},
            {"delay": np.float64(2.0)},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(InvalidConfiguration):
            RenderConfig(**kwargs)

    @pytest.mark.parametrize("seed", [2 ** 63 - 1, -(2 ** 63), 2 ** 40])
    def test_seed_range_accepted(self, seed):
        assert RenderConfig(seed=seed).seed == seed

    def test_numpy_numbers_normalised(self):
        config = RenderConfig(
            width=np.int64(64), partitions=np.int32(2), seed=np.uint8(7), sharpness=np.float32(0.5)
        )
        assert config.width == 64 and type(config.width) is int
        assert type(config.partitions) is int
        assert config.seed == 7 and type(config.seed) is int
        assert type(config.sharpness) is float
        assert config.network_config() == NetworkConfig(5, 12, 24, 3)

    def test_numpy_ints_in_network_config(self):
        config = NetworkConfig(np.int64(5), np.int16(2), 4, 1)
        assert config == NetworkConfig(5, 2, 4, 1)
        assert type(config.num_inputs) is int

    def test_frozen(self):
        with pytest.raises(Exception):
            RenderConfig().width = 3


class TestLogging:
    def test_console_handler(self):
        logger = setup_logging(logging.DEBUG)
        assert logger.name == "loop_cppn"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_no_duplicate_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "run.log"
        logger = setup_logging(logging.INFO, str(log_file))
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_rerun_closes_file_handler_and_names_thread(self, tmp_path):
        log_file = tmp_path / "first.log"
        first = setup_logging(logging.INFO, str(log_file))
        file_handler = first.handlers[-1]
        first.info("from main")
        setup_logging(logging.INFO)
        assert file_handler not in first.handlers
        assert file_handler.stream is None
        assert "[MainThread] loop_cppn: from main" in log_file.read_text(encoding="utf-8")


class TestPrecision:
    def test_import_leaves_global_default_alone(self):
        import loop_cppn  # noqa: F401

        assert jnp.array(1.0).dtype == jnp.float32

    def test_package_calls_run_in_float64(self):
        cppn = build_cppn(NetworkConfig(5, 2, 4, 1), 0)
        assert cppn.layers[0].weights.dtype == jnp.float64
        out = cppn.feed_forward(np.zeros(5))
        assert out.dtype == jnp.float64
        assert jnp.array(1.0).dtype == jnp.float32

    def test_large_seed_builds(self):
        config = RenderConfig(seed=2 ** 63 - 1, gray=True, depth=1, size=2)
        cppn = build_cppn(config.network_config(), config.seed)
        assert cppn.num_outputs == 1
