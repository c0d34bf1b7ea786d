"""Run configuration for network construction and frame rendering.

Both dataclasses are frozen and validate themselves on construction, so an
invalid run fails before any weight is drawn or any pixel is rendered.
"""
import math
import numbers
import operator
from dataclasses import dataclass
from typing import Optional

import numpy as np

from loop_cppn.errors import InvalidConfiguration
from loop_cppn.features import ColorMode, FeatureMode

NUM_FEATURES = 5  # x', y', r, phase1, phase2

# Seeds become `jax.random.PRNGKey(seed)` with 64-bit integers enabled.
SEED_MIN = -(2 ** 63)
SEED_MAX = 2 ** 63 - 1

_POSITIVE_INTS = (
    "width", "height", "depth", "size", "num_frames", "partitions", "phase_cycles",
)


def _as_int(name: str, value) -> int:
    """Returns `value` as a plain int; numpy integers are accepted, bools are not."""
    if isinstance(value, (bool, np.bool_)):
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    try:
        return operator.index(value)
    except TypeError:
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}") from None


def _as_positive_int(name: str, value) -> int:
    value = _as_int(name, value)
    if value < 1:
        raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")
    return value


def _as_finite_float(name: str, value) -> float:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise InvalidConfiguration(f"{name} must be a finite number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidConfiguration(f"{name} must be a finite number, got {value!r}")
    return value


def _as_positive_float(name: str, value) -> float:
    value = _as_finite_float(name, value)
    if value <= 0:
        raise InvalidConfiguration(f"{name} must be a positive number, got {value!r}")
    return value


@dataclass(frozen=True)
class NetworkConfig:
    """Shape of a fixed-topology CPPN.

    Attributes:
        num_inputs (int): Size of the feature vector fed to the network.
        num_hidden_layers (int): Number of tanh layers.
        num_hidden_neurons (int): Width of every tanh layer.
        num_outputs (int): Number of sigmoid outputs (1 for gray, 3 for color).
    """
    num_inputs: int
    num_hidden_layers: int
    num_hidden_neurons: int
    num_outputs: int

    def __post_init__(self):
        for name in ("num_inputs", "num_hidden_layers", "num_hidden_neurons", "num_outputs"):
            object.__setattr__(self, name, _as_positive_int(name, getattr(self, name)))


@dataclass(frozen=True)
class RenderConfig:
    """Everything a caller can configure about one animation run.

    Defaults reproduce the classic 200x200, 60 frame, depth 12 animation.
    `delay` is the per-frame delay in hundredths of a second, as stored in
    GIF files. `phase_cycles` is how many times the phase goes round the
    circle over the whole animation.
    """
    name: Optional[str] = None
    width: int = 200
    height: int = 200
    sharpness: float = 0.07
    focus: float = 1.0
    seed: int = 0
    depth: int = 12
    size: int = 24
    pattern: bool = False
    density: float = 1.0
    gray: bool = False
    num_frames: int = 60
    delay: int = 0
    partitions: int = 4
    phase_cycles: int = 1

    def __post_init__(self):
        for name in _POSITIVE_INTS:
            object.__setattr__(self, name, _as_positive_int(name, getattr(self, name)))
        for name in ("sharpness", "focus"):
            object.__setattr__(self, name, _as_positive_float(name, getattr(self, name)))
        object.__setattr__(self, "density", _as_finite_float("density", self.density))

        seed = _as_int("seed", self.seed)
        if not SEED_MIN <= seed <= SEED_MAX:
            raise InvalidConfiguration(
                f"seed must fit in a signed 64-bit integer, got {seed!r}"
            )
        object.__setattr__(self, "seed", seed)

        delay = _as_int("delay", self.delay)
        if delay < 0:
            raise InvalidConfiguration(f"delay must be a non-negative integer, got {delay!r}")
        object.__setattr__(self, "delay", delay)

    @property
    def feature_mode(self) -> FeatureMode:
        return FeatureMode.PATTERN if self.pattern else FeatureMode.PLAIN

    @property
    def color_mode(self) -> ColorMode:
        return ColorMode.GRAY if self.gray else ColorMode.COLOR

    @property
    def phase_scale(self) -> float:
        """Radians of phase per frame; `num_frames` frames span whole cycles."""
        return 2.0 * math.pi * self.phase_cycles / self.num_frames

    @property
    def filename(self) -> Optional[str]:
        return None if self.name is None else f"{self.name}.gif"

    def network_config(self) -> NetworkConfig:
        return NetworkConfig(
            num_inputs=NUM_FEATURES,
            num_hidden_layers=self.depth,
            num_hidden_neurons=self.size,
            num_outputs=self.color_mode.channels,
        )
