"""Raster serialization.

The primary output is plain-text PGM (``P2``, see
https://en.wikipedia.org/wiki/Netpbm_format#PGM_example): magic, ``width
height``, max value ``255``, then one line of space-separated samples per
row, top row first. Binary PGM and PNG are written through Pillow.
"""

from __future__ import annotations

from io import StringIO
from pathlib import Path
from typing import TextIO

from PIL import Image

from text2pgm.exceptions import CanvasError
from text2pgm.raster.canvas import Canvas

PGM_MAGIC = "P2"
MAX_VALUE = 255

# image_format -> Pillow format name
IMAGE_FORMATS = {"p5": "PPM", "png": "PNG"}


def write_pgm(canvas: Canvas, stream: TextIO) -> None:
    """Write ``canvas`` to ``stream`` as plain-text PGM."""
    stream.write(f"{PGM_MAGIC}\n")
    stream.write(f"{canvas.width} {canvas.height}\n")
    stream.write(f"{MAX_VALUE}\n")
    for row in canvas.rows():
        stream.write(" ".join(str(v) for v in row.tolist()))
        stream.write("\n")


def serialize_pgm(canvas: Canvas) -> str:
    """Return ``canvas`` as plain-text PGM."""
    buffer = StringIO()
    write_pgm(canvas, buffer)
    return buffer.getvalue()


def parse_pgm(text: str) -> Canvas:
    """Parse plain-text PGM produced by ``serialize_pgm`` back into a Canvas.

    Raises:
        ValueError: On a bad magic, header or sample count.
    """
    tokens = text.split()
    if len(tokens) < 4 or tokens[0] != PGM_MAGIC:
        raise ValueError("Not a plain-text PGM image")
    width, height, max_value = int(tokens[1]), int(tokens[2]), int(tokens[3])
    if max_value != MAX_VALUE:
        raise ValueError(f"Unsupported max value {max_value}")
    samples = tokens[4:]
    if len(samples) != width * height:
        raise ValueError(f"Expected {width * height} samples, got {len(samples)}")

    canvas = Canvas(width, height)
    if samples:
        canvas.pixels[:, :] = [
            [int(v) for v in samples[r * width : (r + 1) * width]] for r in range(height)
        ]
    return canvas


def save_image(canvas: Canvas, path: str | Path, image_format: str = "png") -> Path:
    """Save ``canvas`` as a binary image through Pillow.

    Args:
        canvas: Canvas to save.
        path: Output file.
        image_format: ``p5`` (binary PGM) or ``png``.

    Raises:
        CanvasError: For an empty canvas or an unknown format.
    """
    if image_format not in IMAGE_FORMATS:
        raise CanvasError(
            f"Unknown image format {image_format!r}",
            details={"allowed": ", ".join(IMAGE_FORMATS)},
        )
    if canvas.is_empty:
        raise CanvasError(
            "Cannot save an empty canvas as an image",
            details={"width": canvas.width, "height": canvas.height},
        )

    path = Path(path)
    Image.fromarray(canvas.pixels).save(path, format=IMAGE_FORMATS[image_format])
    return path
