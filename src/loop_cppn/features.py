"""Per-pixel feature mapping and output-to-color mapping.

A CPPN sees every pixel as a 5-element feature vector
`(x', y', r, phase1, phase2)`. The spatial part depends on the
`FeatureMode`; the phase part is the same for every pixel of a frame and
goes once around the unit circle per animation loop, which is what makes
the last frame flow back into the first.
"""
import enum
import math

import jax
import jax.numpy as jnp


class FeatureMode(enum.Enum):
    """How pixel coordinates are turned into the x'/y' features."""
    PLAIN = "plain"
    PATTERN = "pattern"


class ColorMode(enum.Enum):
    """How network outputs are turned into pixel values."""
    GRAY = "gray"
    COLOR = "color"

    @property
    def channels(self) -> int:
        return 1 if self is ColorMode.GRAY else 3


def phase_features(theta: int, phase_scale: float) -> tuple[float, float]:
    """Returns `(cos(theta * k), sin(theta * k))` for phase sample `theta`.

    With `k = 2 * pi * cycles / num_frames` the pair repeats exactly every
    `num_frames` samples.
    """
    angle = theta * phase_scale
    return math.cos(angle), math.sin(angle)


def spatial_features(
    xs: jnp.ndarray,
    ys: jnp.ndarray,
    mode: FeatureMode,
    sharpness: float,
    density: float,
) -> tuple[jnp.ndarray, jnp.ndarray]:
    """Maps pixel coordinate grids to the x'/y' features."""
    if mode is FeatureMode.PATTERN:
        return jnp.sin(xs * density) * sharpness, jnp.cos(ys * density) * sharpness
    return xs * sharpness, ys * sharpness


@jax.enable_x64(True)
def feature_grid(config, theta: int, x0: int, x1: int, y0: int, y1: int) -> jnp.ndarray:
    """Builds the feature vectors for every pixel of the region [x0, x1) x [y0, y1).

    Every feature is an elementwise function of the pixel's absolute
    coordinates, so a pixel gets the same vector whichever region it is
    computed in.

    Args:
        config: A `RenderConfig`.
        theta: Index of the phase sample (frame index).
        x0, x1, y0, y1: Region bounds in pixels, end-exclusive.

    Returns:
        An array of shape `(y1 - y0, x1 - x0, 5)`.
    """
    xs = jnp.arange(x0, x1, dtype=jnp.float64)
    ys = jnp.arange(y0, y1, dtype=jnp.float64)
    XX, YY = jnp.meshgrid(xs, ys)

    sx, sy = spatial_features(XX, YY, config.feature_mode, config.sharpness, config.density)
    # integer centre, as in the original renderer
    dx = XX - float(config.width // 2)
    dy = YY - float(config.height // 2)
    RR = jnp.sqrt(dx**2 + dy**2) * config.sharpness * config.focus

    z1, z2 = phase_features(theta, config.phase_scale)
    Z1 = jnp.full_like(XX, z1)
    Z2 = jnp.full_like(XX, z2)
    return jnp.stack([sx, sy, RR, Z1, Z2], axis=-1)


@jax.enable_x64(True)
def to_pixels(outputs: jnp.ndarray, mode: ColorMode) -> jnp.ndarray:
    """Scales network outputs in (0, 1) to 8-bit channel values.

    Gray mode keeps output 0 and returns shape `(...)`; color mode keeps
    outputs 0..2 and returns shape `(..., 3)`. Each channel is truncated and
    clamped to [0, 255] independently.
    """
    if mode is ColorMode.GRAY:
        values = outputs[..., 0]
    else:
        values = outputs[..., :3]
    return jnp.clip(jnp.floor(255.0 * values), 0.0, 255.0).astype(jnp.uint8)
