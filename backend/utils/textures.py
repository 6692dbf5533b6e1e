# utils/textures.py
import io
import base64
import random

from PIL import Image


def generate_noise_texture(size, opacity, seed=None):
    """
    Rasterize a square grayscale noise tile and return it as a PNG data URI.

    Args:
        size (int): Tile edge in pixels (the pattern spacing)
        opacity (float): 0-100, applied to every pixel's alpha channel
        seed (int, optional): Seed for reproducible tiles

    Returns:
        str: ``data:image/png;base64,...``
    """
    size = max(1, int(size))
    alpha = max(0, min(255, round(opacity * 2.55)))
    rng = random.Random(seed)

    image = Image.new("RGBA", (size, size))
    pixels = []
    for _ in range(size * size):
        value = int(rng.random() * 255)
        pixels.append((value, value, value, alpha))
    image.putdata(pixels)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
