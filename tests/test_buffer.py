"""Tests for handwriting_ocr.preprocessing.buffer — PixelBuffer."""

import io

import numpy as np
import pytest
from PIL import Image

from handwriting_ocr.errors import DecodeFailure, InvalidDimensions, PreprocessingError
from handwriting_ocr.preprocessing.buffer import PixelBuffer, round_to_uint8

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


class TestConstruction:
    def test_from_samples_lays_out_rows(self):
        buf = PixelBuffer.from_samples(2, 1, [1, 2, 3, 4, 5, 6, 7, 8])
        assert (buf.width, buf.height) == (2, 1)
        assert buf.samples[0, 1].tolist() == [5, 6, 7, 8]

    def test_tobytes_returns_flat_rgba(self):
        buf = PixelBuffer.from_samples(2, 1, [1, 2, 3, 4, 5, 6, 7, 8])
        assert buf.tobytes() == bytes([1, 2, 3, 4, 5, 6, 7, 8])

    def test_wrong_sample_count_is_rejected(self):
        with pytest.raises(InvalidDimensions):
            PixelBuffer.from_samples(2, 2, [0] * 15)

    @pytest.mark.parametrize("width, height", [(0, 3), (3, 0), (-1, 2)])
    def test_non_positive_dimensions_are_rejected(self, width, height):
        with pytest.raises(InvalidDimensions):
            PixelBuffer.from_samples(width, height, [])

    def test_out_of_range_samples_are_rejected(self):
        with pytest.raises(InvalidDimensions):
            PixelBuffer.from_samples(1, 1, [0, 0, 256, 255])

    def test_fractional_samples_are_rejected(self):
        with pytest.raises(InvalidDimensions, match="integers"):
            PixelBuffer.from_samples(1, 1, [12.7, 0, 0, 255])

    def test_three_channel_array_is_rejected(self):
        with pytest.raises(InvalidDimensions):
            PixelBuffer(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_dimension_errors_are_tagged_preprocessing_errors(self):
        with pytest.raises(PreprocessingError) as info:
            PixelBuffer(np.zeros((0, 2, 4), dtype=np.uint8))
        assert info.value.stage == "buffer"
        assert info.value.kind == "invalid_dimensions"
        assert str(info.value).startswith("[buffer]")


class TestDecodeEncode:
    def test_rgb_png_gets_opaque_alpha(self, png_bytes):
        buf = PixelBuffer.from_bytes(png_bytes)
        assert (buf.width, buf.height) == (40, 20)
        assert (buf.alpha == 255).all()

    def test_grayscale_png_is_expanded_to_rgba(self):
        out = io.BytesIO()
        Image.new("L", (3, 2), color=77).save(out, format="PNG")
        buf = PixelBuffer.from_bytes(out.getvalue())
        assert buf.samples[1, 2].tolist() == [77, 77, 77, 255]

    def test_garbage_bytes_raise_decode_failure(self):
        with pytest.raises(DecodeFailure) as info:
            PixelBuffer.from_bytes(b"not an image")
        assert info.value.stage == "decode"

    def test_oversized_image_raises_decode_failure(self, png_bytes, monkeypatch):
        # Pillow refuses images over twice this pixel count.
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        with pytest.raises(DecodeFailure):
            PixelBuffer.from_bytes(png_bytes)

    def test_converted_copy_is_closed(self):
        src = Image.new("L", (3, 2), color=9)
        converted = src.convert("RGBA")
        closed = []
        converted.close = lambda: closed.append(True)
        src.convert = lambda mode: converted

        buf = PixelBuffer.from_image(src)
        assert buf.samples[0, 0].tolist() == [9, 9, 9, 255]
        assert closed == [True]

    def test_to_png_preserves_samples(self):
        buf = PixelBuffer.from_samples(2, 2, list(range(16)))
        png = buf.to_png()
        assert png[:8] == PNG_MAGIC
        assert PixelBuffer.from_bytes(png).tobytes() == buf.tobytes()


class TestRounding:
    def test_rounds_half_to_even_and_clamps(self):
        values = np.array([-3.0, 0.5, 1.5, 2.4, 254.6, 300.0])
        assert round_to_uint8(values).tolist() == [0, 0, 2, 2, 255, 255]
