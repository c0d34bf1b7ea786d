import os
import sys

import matplotlib

matplotlib.use("Agg")

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import jax  # noqa: E402
import pytest  # noqa: E402

from loop_cppn import NetworkConfig, RenderConfig, build_cppn  # noqa: E402


@pytest.fixture
def x64():
    """64-bit floats for tests that call jax code outside the package entry points."""
    with jax.enable_x64(True):
        yield


@pytest.fixture
def small_config():
    return RenderConfig(width=24, height=18, depth=3, size=8, seed=3, num_frames=12)


@pytest.fixture
def small_cppn(small_config):
    return build_cppn(small_config.network_config(), small_config.seed)


@pytest.fixture
def gray_net():
    return build_cppn(NetworkConfig(5, 2, 6, 1), 0)
