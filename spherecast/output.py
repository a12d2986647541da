"""
Image output.

Plain-text PPM (P3) is written directly; every other format goes through
Pillow, which picks the encoder from the file extension.
"""

from __future__ import annotations
from pathlib import Path
from typing import TextIO, Union

import numpy as np
from PIL import Image as PILImage

from .renderer import to_ldr


def write_ppm(stream: TextIO, image: np.ndarray) -> None:
    """Write an 8-bit RGB image as plain-text PPM.

    Args:
        stream: Text stream to write to
        image: uint8 array of shape (height, width, 3), first row at the top
    """
    height, width = image.shape[:2]
    stream.write(f"P3\n{width} {height}\n255\n")
    for row in image:
        stream.write("".join(f"{r} {g} {b}\n" for r, g, b in row.tolist()))


def save_image(image: np.ndarray, filename: Union[str, Path]) -> None:
    """Save image to file.

    Args:
        image: Linear float image or uint8 image, shape (height, width, 3)
        filename: Output filename (extension determines format)
    """
    if image.dtype == np.float64 or image.dtype == np.float32:
        image = to_ldr(image)

    path = Path(filename)
    if path.suffix.lower() == '.ppm':
        with path.open('w', encoding='ascii') as f:
            write_ppm(f, image)
    else:
        PILImage.fromarray(image, 'RGB').save(path)
