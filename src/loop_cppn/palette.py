"""Indexed-color palettes for GIF frames.

Gray animations use a 256-level gray ramp, so an 8-bit intensity is its own
palette index. Color animations use the 256-color Plan 9 palette and every
RGB pixel is snapped to its nearest entry.
"""
import numpy as np

_CHUNK = 8192


def gray_palette() -> np.ndarray:
    """Returns a `(256, 3)` uint8 array where entry `i` is `(i, i, i)`."""
    levels = np.arange(256, dtype=np.uint8)
    return np.repeat(levels[:, None], 3, axis=1)


def plan9_palette() -> np.ndarray:
    """Returns the Plan 9 color map as a `(256, 3)` uint8 array.

    The map is a 4x4x4 RGB cube, each cell split into 4 brightness
    levels, with the gray axis folded in where `r == g == b == 0`.
    """
    colors = np.zeros((256, 3), dtype=np.uint8)
    i = 0
    for r in range(4):
        for v in range(4):
            j = v - r
            for g in range(4):
                for b in range(4):
                    den = max(r, g, b)
                    if den == 0:
                        c = (17 * v, 17 * v, 17 * v)
                    else:
                        num = 17 * (4 * den + v)
                        c = (r * num // den, g * num // den, b * num // den)
                    colors[i + (j & 0x0F)] = c
                    j += 1
            i += 16
    return colors


def nearest_index(pixels: np.ndarray, palette: np.ndarray) -> np.ndarray:
    """Maps RGB pixels to the index of the closest palette entry.

    Distance is the squared euclidean distance in RGB; ties go to the lowest
    index.

    Args:
        pixels: uint8 array of shape `(..., 3)`.
        palette: uint8 array of shape `(P, 3)`, `P <= 256`.

    Returns:
        A uint8 array of shape `pixels.shape[:-1]`.
    """
    flat = pixels.reshape(-1, 3).astype(np.int32)
    pal = palette.astype(np.int32)
    out = np.empty(flat.shape[0], dtype=np.uint8)
    for start in range(0, flat.shape[0], _CHUNK):
        block = flat[start:start + _CHUNK]
        dist = ((block[:, None, :] - pal[None, :, :]) ** 2).sum(axis=-1)
        out[start:start + _CHUNK] = np.argmin(dist, axis=1)
    return out.reshape(pixels.shape[:-1])
