"""Basic drawing primitives on numpy frame buffers.

Buffers are (height, width, 3) uint8 arrays. Coordinates may be floats and
may fall partly or wholly outside the buffer; everything is clipped.
"""

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
) -> None:
    """Draw a filled rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
    """
    h, w = buffer.shape[:2]

    # Clamp to buffer bounds
    x1 = max(0, min(int(round(x)), w))
    y1 = max(0, min(int(round(y)), h))
    x2 = max(0, min(int(round(x + width)), w))
    y2 = max(0, min(int(round(y + height)), h))

    buffer[y1:y2, x1:x2] = color


def draw_image(
    buffer: Buffer,
    image: NDArray,
    x: int,
    y: int,
    alpha: float = 1.0,
) -> None:
    """Draw an image onto the buffer with optional alpha blending.

    Args:
        buffer: Target numpy array (height, width, 3)
        image: Source image array (height, width, 3 or 4)
        x: Top-left x coordinate
        y: Top-left y coordinate
        alpha: Global alpha multiplier (0.0 to 1.0)
    """
    buf_h, buf_w = buffer.shape[:2]
    img_h, img_w = image.shape[:2]

    # Visible region
    src_x1 = max(0, -x)
    src_y1 = max(0, -y)
    src_x2 = min(img_w, buf_w - x)
    src_y2 = min(img_h, buf_h - y)

    dst_x1 = max(0, x)
    dst_y1 = max(0, y)
    dst_x2 = dst_x1 + (src_x2 - src_x1)
    dst_y2 = dst_y1 + (src_y2 - src_y1)

    if src_x2 <= src_x1 or src_y2 <= src_y1:
        return

    src_region = image[src_y1:src_y2, src_x1:src_x2]

    if alpha >= 1.0 and image.shape[2] == 3:
        buffer[dst_y1:dst_y2, dst_x1:dst_x2] = src_region
        return

    dst_region = buffer[dst_y1:dst_y2, dst_x1:dst_x2]
    if image.shape[2] == 4:
        img_alpha = (src_region[:, :, 3:4] / 255.0) * alpha
        src_rgb = src_region[:, :, :3]
    else:
        img_alpha = alpha
        src_rgb = src_region

    blended = (src_rgb * img_alpha + dst_region * (1 - img_alpha)).astype(np.uint8)
    buffer[dst_y1:dst_y2, dst_x1:dst_x2] = blended


def tile_cover(tile: NDArray, width: int, height: int) -> NDArray:
    """Repeat tile to cover width x height plus one extra tile column for scrolling."""
    tile_h, tile_w = tile.shape[:2]
    reps_y = -(-height // tile_h)
    reps_x = -(-width // tile_w) + 1
    return np.tile(tile, (reps_y, reps_x, 1))[:height]


def draw_scrolled(buffer: Buffer, tiled: NDArray, tile_width: int, offset_x: float = 0.0, alpha: float = 1.0) -> None:
    """Draw a tile_cover() array scrolled left by offset_x pixels."""
    buf_w = buffer.shape[1]
    shift = int(offset_x) % tile_width
    draw_image(buffer, tiled[:, shift:shift + buf_w], 0, 0, alpha=alpha)
