"""Writing animations to looping GIF files."""
import logging
from pathlib import Path
from typing import Union

import imageio.v3 as iio
import numpy as np

from loop_cppn.animation import Animation

logger = logging.getLogger(__name__)


def save_gif(animation: Animation, path: Union[str, Path]) -> Path:
    """Saves `animation` as an endlessly looping GIF.

    Every frame is snapped to the animation's palette first, so the file
    only ever contains palette colors. Delays are stored in hundredths of a
    second on the animation and converted to milliseconds for the writer.

    Pillow's GIF writer merges a frame that is identical to the one before
    it into that frame. With a nonzero delay the merged frame's duration is
    added to the previous one, so the total playing time is kept; with a
    delay of 0 the frame is dropped. The file may therefore hold fewer
    frames than the animation, and a warning is logged when that happens.

    Returns:
        The path written to.
    """
    if not animation.frames:
        raise ValueError("cannot save an animation without frames")
    path = Path(path)
    indexed = animation.indexed_frames()
    repeats = sum(
        1 for prev, cur in zip(indexed, indexed[1:]) if np.array_equal(prev, cur)
    )
    if repeats:
        logger.warning(
            "%d of %d frames repeat the frame before them and will be merged in %s",
            repeats,
            len(indexed),
            path,
        )
    frames = [animation.palette[indices] for indices in indexed]
    durations = [delay * 10 for delay in animation.delays]
    iio.imwrite(path, frames, extension=".gif", duration=durations, loop=0)
    logger.info("saved %d frames to %s", len(frames) - repeats, path)
    return path
