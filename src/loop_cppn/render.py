"""Parallel rendering of single animation frames.

A frame is split into disjoint rectangular partitions. Each partition is
rendered by its own task, which reads the shared, immutable CPPN and writes
only into its own slice of the frame buffer, so the buffer needs no lock.
The frame is finished once every task has been joined.
"""
import logging
import math
import operator
from concurrent.futures import Executor, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import jax
import numpy as np

from loop_cppn.cppn import CPPN
from loop_cppn.errors import InvalidConfiguration
from loop_cppn.features import ColorMode, feature_grid, to_pixels
from loop_cppn.palette import nearest_index

logger = logging.getLogger(__name__)


class Partition(NamedTuple):
    """Pixel region `[x0, x1) x [y0, y1)` of a frame."""
    x0: int
    x1: int
    y0: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


def partition_grid(width: int, height: int, count: int) -> List[Partition]:
    """Splits a `width` x `height` grid into `count` disjoint rectangles.

    `count` is factored into `rows * cols` with `rows` the largest factor not
    above its square root, so 4 gives quadrants and 8 gives 2 rows of 4.
    Partitions are returned row-major and cover the grid exactly; some may be
    empty when the grid is smaller than the factorisation.

    Raises:
        InvalidConfiguration: If `count` is not a positive integer.
    """
    if isinstance(count, (bool, np.bool_)):
        raise InvalidConfiguration(f"partition count must be a positive integer, got {count!r}")
    try:
        count = operator.index(count)
    except TypeError:
        raise InvalidConfiguration(
            f"partition count must be a positive integer, got {count!r}"
        ) from None
    if count < 1:
        raise InvalidConfiguration(f"partition count must be a positive integer, got {count!r}")
    rows = math.isqrt(count)
    while count % rows:
        rows -= 1
    cols = count // rows
    xb = [c * width // cols for c in range(cols + 1)]
    yb = [r * height // rows for r in range(rows + 1)]
    return [
        Partition(xb[c], xb[c + 1], yb[r], yb[r + 1])
        for r in range(rows)
        for c in range(cols)
    ]


@dataclass(frozen=True, eq=False)
class Frame:
    """A finished frame.

    Attributes:
        pixels (np.ndarray): Read-only uint8 array, `(height, width)` for gray
            frames and `(height, width, 3)` for color frames.
        color_mode (ColorMode): Which of the two layouts `pixels` uses.
    """
    pixels: np.ndarray
    color_mode: ColorMode

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def channels(self) -> int:
        return self.color_mode.channels

    def rgb(self) -> np.ndarray:
        """The frame as a `(height, width, 3)` uint8 array."""
        if self.color_mode is ColorMode.GRAY:
            return np.repeat(self.pixels[:, :, None], 3, axis=2)
        return self.pixels

    def to_indexed(self, palette: np.ndarray) -> np.ndarray:
        """Palette indices of every pixel, shape `(height, width)`."""
        return nearest_index(self.rgb(), palette)


@jax.enable_x64(True)
def render_region(cppn: CPPN, config, theta: int, part: Partition) -> np.ndarray:
    """Evaluates the network on every pixel of one partition.

    Returns:
        A uint8 block of shape `(part.height, part.width)` or
        `(part.height, part.width, 3)`.
    """
    features = feature_grid(config, theta, part.x0, part.x1, part.y0, part.y1)
    outputs = cppn.feed_forward(features)
    return np.asarray(to_pixels(outputs, config.color_mode))


def _fork_join(pool: Executor, fn, parts: List[Partition]) -> None:
    futures = [pool.submit(fn, part) for part in parts]
    wait(futures)
    for future in futures:
        future.result()  # re-raises the first failure


def render_frame(
    cppn: CPPN, config, theta: int, executor: Optional[Executor] = None
) -> Frame:
    """Renders phase sample `theta` of the animation described by `config`.

    One task per non-empty partition of `config.partitions` is submitted to
    `executor` (a private thread pool if none is given) and all of them are
    awaited before the frame is returned. Any task failure is re-raised and
    no frame is produced.

    Args:
        cppn: The network to evaluate; never modified.
        config: A `RenderConfig`.
        theta: Index of the phase sample.
        executor: Optional executor shared across frames.

    Returns:
        A read-only `Frame`.
    """
    mode = config.color_mode
    if cppn.num_outputs < mode.channels:
        raise InvalidConfiguration(
            f"{mode.value} frames need {mode.channels} outputs, network has {cppn.num_outputs}"
        )
    if mode is ColorMode.GRAY:
        shape = (config.height, config.width)
    else:
        shape = (config.height, config.width, 3)
    buffer = np.zeros(shape, dtype=np.uint8)

    parts = [p for p in partition_grid(config.width, config.height, config.partitions) if not p.is_empty]

    def draw_part(part: Partition) -> None:
        buffer[part.y0:part.y1, part.x0:part.x1] = render_region(cppn, config, theta, part)

    if executor is None:
        with ThreadPoolExecutor(max_workers=len(parts)) as pool:
            _fork_join(pool, draw_part, parts)
    else:
        _fork_join(executor, draw_part, parts)

    buffer.setflags(write=False)
    logger.debug("rendered frame %d over %d partitions", theta, len(parts))
    return Frame(pixels=buffer, color_mode=mode)
