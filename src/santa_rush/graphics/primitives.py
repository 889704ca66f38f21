"""Basic drawing primitives on RGB numpy buffers."""

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    """Black (height, width, 3) frame buffer."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def vertical_gradient(buffer: Buffer, top: Color, bottom: Color) -> None:
    """Fill with a linear top-to-bottom gradient."""
    h = buffer.shape[0]
    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None]
    rows = (1.0 - t) * np.asarray(top, dtype=np.float32) + t * np.asarray(bottom, dtype=np.float32)
    buffer[:, :] = rows[:, None, :].astype(np.uint8)


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
) -> None:
    """Draw a rectangle, clipped to the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
    """
    h, w = buffer.shape[:2]

    x1 = max(0, min(int(x), w))
    y1 = max(0, min(int(y), h))
    x2 = max(0, min(int(x + width), w))
    y2 = max(0, min(int(y + height), h))

    if x1 >= x2 or y1 >= y2:
        return

    buffer[y1:y2, x1:x2] = color


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
) -> None:
    """Draw a filled circle (distance mask over its bounding box)."""
    h, w = buffer.shape[:2]

    x1 = max(0, int(cx - radius))
    y1 = max(0, int(cy - radius))
    x2 = min(w, int(cx + radius) + 1)
    y2 = min(h, int(cy + radius) + 1)
    if x1 >= x2 or y1 >= y2:
        return

    ys, xs = np.ogrid[y1:y2, x1:x2]
    mask = (xs - cx) ** 2 + (ys - cy) ** 2 <= radius ** 2
    buffer[y1:y2, x1:x2][mask] = color


def blend(buffer: Buffer, color: Color, alpha: float) -> None:
    """Mix a flat color over the whole buffer."""
    mixed = buffer.astype(np.float32) * (1.0 - alpha) + np.asarray(color, dtype=np.float32) * alpha
    buffer[:, :] = mixed.astype(np.uint8)
