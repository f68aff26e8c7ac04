"""RGBA pixel buffer shared by every preprocessing stage.

Samples live in a ``(height, width, 4)`` numpy ``uint8`` array, channel order
R, G, B, A.  Stages never modify a buffer they are given; each returns a new
one, so a failure half-way through a run leaves the caller's input untouched.
"""

import io
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from PIL import Image, UnidentifiedImageError

from handwriting_ocr.errors import DecodeFailure, InvalidDimensions

CHANNELS = 4


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    samples: np.ndarray

    def __post_init__(self) -> None:
        arr = self.samples
        if arr.ndim != 3 or arr.shape[2] != CHANNELS:
            raise InvalidDimensions(
                "buffer", f"expected a (height, width, 4) array, got shape {arr.shape}"
            )
        if arr.shape[0] <= 0 or arr.shape[1] <= 0:
            raise InvalidDimensions(
                "buffer", f"image must be at least 1x1, got {arr.shape[1]}x{arr.shape[0]}"
            )
        if arr.dtype != np.uint8:
            raise InvalidDimensions("buffer", f"samples must be uint8, got {arr.dtype}")

    @property
    def width(self) -> int:
        return self.samples.shape[1]

    @property
    def height(self) -> int:
        return self.samples.shape[0]

    @property
    def rgb(self) -> np.ndarray:
        return self.samples[:, :, :3]

    @property
    def alpha(self) -> np.ndarray:
        return self.samples[:, :, 3]

    def with_rgb(self, rgb: np.ndarray) -> "PixelBuffer":
        """Return a new buffer with *rgb* as its colour channels and this buffer's alpha."""
        out = np.empty_like(self.samples)
        out[:, :, :3] = rgb
        out[:, :, 3] = self.alpha
        return PixelBuffer(out)

    def tobytes(self) -> bytes:
        """Flat R,G,B,A samples, row-major."""
        return self.samples.tobytes()

    # ── Constructors ──────────────────────────────────────────────────────

    @classmethod
    def from_samples(cls, width: int, height: int, samples: Sequence[int]) -> "PixelBuffer":
        if width <= 0 or height <= 0:
            raise InvalidDimensions(
                "buffer", f"image must be at least 1x1, got {width}x{height}"
            )
        flat = np.asarray(samples)
        if flat.size != CHANNELS * width * height:
            raise InvalidDimensions(
                "buffer",
                f"expected {CHANNELS * width * height} samples for {width}x{height}, "
                f"got {flat.size}",
            )
        if flat.dtype.kind not in "iu":
            raise InvalidDimensions("buffer", f"samples must be integers, got {flat.dtype}")
        if flat.min() < 0 or flat.max() > 255:
            raise InvalidDimensions("buffer", "sample values must lie in [0, 255]")
        return cls(flat.astype(np.uint8).reshape(height, width, CHANNELS))

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        if img.width <= 0 or img.height <= 0:
            raise InvalidDimensions(
                "decode", f"image must be at least 1x1, got {img.width}x{img.height}"
            )
        if img.mode == "RGBA":
            return cls(np.array(img, dtype=np.uint8))
        rgba = img.convert("RGBA")
        try:
            return cls(np.array(rgba, dtype=np.uint8))
        finally:
            rgba.close()

    @classmethod
    def from_bytes(cls, data: bytes) -> "PixelBuffer":
        """Decode any raster format Pillow understands."""
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                return cls.from_image(img)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise DecodeFailure("decode", f"could not read image: {e}") from e

    # ── Encoding ──────────────────────────────────────────────────────────

    def to_image(self) -> Image.Image:
        # (h, w, 4) uint8 is inferred as RGBA
        return Image.fromarray(self.samples)

    def to_png(self) -> bytes:
        buf = io.BytesIO()
        with self.to_image() as img:
            img.save(buf, format="PNG")
        return buf.getvalue()


def round_to_uint8(values: np.ndarray) -> np.ndarray:
    """Store fractional channel values the way an 8-bit clamped array does.

    Round half to even, then clamp to [0, 255].
    """
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)
