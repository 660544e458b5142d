"""Packed monochrome framebuffer and sprite blitter.

The display is stored as 256 bytes: 64 columns by 32 rows, row-major, one bit
per pixel with the leftmost pixel in the most significant bit of each byte.
"""

import jax.numpy as jnp

from chix8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, DISPLAY_BYTES

MAX_SPRITE_HEIGHT = 15
SPRITE_WIDTH = 8

# Pre-computed coordinate grids for sprite placement, shape (rows, cols)
rows, cols = jnp.meshgrid(jnp.arange(SCREEN_HEIGHT), jnp.arange(SCREEN_WIDTH), indexing='ij')


def clear_display() -> jnp.ndarray:
    """Return a blank packed display."""
    return jnp.zeros(DISPLAY_BYTES, dtype=jnp.uint8)


def unpack_display(display: jnp.ndarray) -> jnp.ndarray:
    """Expand a packed display into a (32, 64) boolean grid."""
    bits = jnp.unpackbits(jnp.asarray(display, dtype=jnp.uint8))
    return bits.reshape(SCREEN_HEIGHT, SCREEN_WIDTH).astype(jnp.bool_)


def pack_display(pixels: jnp.ndarray) -> jnp.ndarray:
    """Pack a (32, 64) boolean grid into 256 bytes."""
    return jnp.packbits(jnp.asarray(pixels, dtype=jnp.bool_).reshape(-1))


def get_pixel(display: jnp.ndarray, x: int, y: int) -> jnp.ndarray:
    """Read the pixel at column ``x``, row ``y`` (both wrap)."""
    bit_index = (y % SCREEN_HEIGHT) * SCREEN_WIDTH + (x % SCREEN_WIDTH)
    return (display[bit_index // 8] >> (7 - bit_index % 8)) & 1


def draw_sprite(display: jnp.ndarray, x0, y0, sprite: jnp.ndarray, height) -> tuple[jnp.ndarray, jnp.ndarray]:
    """XOR ``height`` sprite rows onto the display at (x0, y0).

    Each pixel wraps independently on both axes, so a sprite crossing the
    right edge continues on the left edge of the same row.

    Args:
        display: Packed display bytes.
        x0: Column of the sprite's left edge.
        y0: Row of the sprite's top edge.
        sprite: Sprite rows, one byte per row. Only the first ``height`` are drawn.
        height: Number of rows to draw (0-15).

    Returns:
        The new packed display and 1 if any lit pixel was turned off, else 0.
    """
    sprite = jnp.asarray(sprite, dtype=jnp.uint8)[:MAX_SPRITE_HEIGHT]
    sprite = jnp.zeros(MAX_SPRITE_HEIGHT, dtype=jnp.uint8).at[:sprite.shape[0]].set(sprite)

    row_offset = (rows - jnp.asarray(y0, dtype=jnp.int32)) % SCREEN_HEIGHT
    col_offset = (cols - jnp.asarray(x0, dtype=jnp.int32)) % SCREEN_WIDTH
    in_sprite = (row_offset < height) & (col_offset < SPRITE_WIDTH)

    sprite_bytes = sprite[jnp.minimum(row_offset, MAX_SPRITE_HEIGHT - 1)]
    shift = jnp.clip(SPRITE_WIDTH - 1 - col_offset, 0, SPRITE_WIDTH - 1)
    sprite_pixels = (((sprite_bytes >> shift) & 1) == 1) & in_sprite

    pixels = unpack_display(display)
    collision = jnp.any(pixels & sprite_pixels)
    return pack_display(pixels ^ sprite_pixels), jnp.astype(collision, jnp.uint8)
