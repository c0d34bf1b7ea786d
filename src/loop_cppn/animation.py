"""Assembly of whole looping animations.

Frames are rendered strictly one after another, in phase order, each one
through the fork-join renderer in `loop_cppn.render`. The finished
`Animation` is handed, complete, to an encoder such as
`loop_cppn.export.save_gif`.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from loop_cppn.config import RenderConfig
from loop_cppn.cppn import CPPN, build_cppn
from loop_cppn.features import ColorMode
from loop_cppn.palette import gray_palette, plan9_palette
from loop_cppn.render import Frame, render_frame

logger = logging.getLogger(__name__)


def palette_for(mode: ColorMode) -> np.ndarray:
    return gray_palette() if mode is ColorMode.GRAY else plan9_palette()


@dataclass
class Animation:
    """Ordered frames with their delays (hundredths of a second) and palette."""
    palette: np.ndarray
    frames: List[Frame] = field(default_factory=list)
    delays: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.frames)

    def append(self, frame: Frame, delay: int = 0) -> None:
        self.frames.append(frame)
        self.delays.append(delay)

    def indexed_frames(self) -> List[np.ndarray]:
        """Palette indices of every frame, in order."""
        return [frame.to_indexed(self.palette) for frame in self.frames]


def phase_samples(num_frames: int) -> range:
    """Phase sample indices of one loop: `0` up to, not including, `num_frames`."""
    return range(num_frames)


def assemble_animation(
    cppn: CPPN,
    config: RenderConfig,
    executor: Optional[ThreadPoolExecutor] = None,
    on_frame: Optional[Callable[[int, Frame], None]] = None,
) -> Animation:
    """Renders one full loop of frames.

    Args:
        cppn: The network shared by all frames.
        config: The render configuration.
        executor: Optional pool for partition tasks; by default one pool with a
            worker per partition is created and reused for every frame.
        on_frame: Called with `(index, frame)` after each frame is appended.

    Returns:
        An `Animation` holding exactly `config.num_frames` frames.
    """
    animation = Animation(palette=palette_for(config.color_mode))

    def run(pool) -> None:
        for theta in phase_samples(config.num_frames):
            frame = render_frame(cppn, config, theta, executor=pool)
            animation.append(frame, config.delay)
            if on_frame is not None:
                on_frame(theta, frame)

    if executor is None:
        with ThreadPoolExecutor(max_workers=config.partitions) as pool:
            run(pool)
    else:
        run(executor)
    return animation


def generate(
    config: RenderConfig,
    encoder: Optional[Callable[[Animation], object]] = None,
    on_frame: Optional[Callable[[int, Frame], None]] = None,
) -> Animation:
    """Builds the network for `config.seed` and renders the whole animation.

    The seed is turned into a `jax.random` key once, consumed by network
    construction, and not used again; rendering itself is deterministic.
    If an `encoder` is given it receives the finished animation.
    """
    net_config = config.network_config()
    cppn = build_cppn(net_config, config.seed)
    logger.info(
        "built CPPN seed=%d layers=%s", config.seed, cppn.layer_shapes()
    )

    animation = assemble_animation(cppn, config, on_frame=on_frame)
    logger.info(
        "rendered %d frames of %dx%d (%s, %s)",
        len(animation),
        config.width,
        config.height,
        config.feature_mode.value,
        config.color_mode.value,
    )

    if encoder is not None:
        encoder(animation)
    return animation
