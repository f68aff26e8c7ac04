"""Shared fixtures for the test suite.

All fixtures here produce real images / real PDFs so tests exercise actual
decode and encode paths rather than hand-crafted stubs.
"""

import io
from pathlib import Path

import fitz  # PyMuPDF
import numpy as np
import pytest
from click.testing import CliRunner
from PIL import Image, ImageDraw

from handwriting_ocr.preprocessing.buffer import PixelBuffer


def make_buffer(width: int, height: int, rgba=(128, 128, 128, 255)) -> PixelBuffer:
    """A solid-colour buffer."""
    samples = np.empty((height, width, 4), dtype=np.uint8)
    samples[:, :] = rgba
    return PixelBuffer(samples)


def random_buffer(width: int, height: int, seed: int = 0) -> PixelBuffer:
    rng = np.random.default_rng(seed)
    return PixelBuffer(rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8))


# ── CLI runner ─────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# ── Image fixtures ─────────────────────────────────────────────────────────


@pytest.fixture
def png_bytes() -> bytes:
    """A 40×20 'page': light paper with a dark pen stroke across the middle."""
    img = Image.new("RGB", (40, 20), color=(235, 230, 215))
    ImageDraw.Draw(img).line([(4, 10), (36, 10)], fill=(30, 30, 60), width=3)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_file(tmp_path: Path, png_bytes: bytes) -> Path:
    """The PNG written to a temporary file on disk."""
    path = tmp_path / "note.png"
    path.write_bytes(png_bytes)
    return path


# ── PDF fixtures ───────────────────────────────────────────────────────────


@pytest.fixture
def single_page_pdf(tmp_path: Path) -> Path:
    """A real single-page PDF containing a text line."""
    path = tmp_path / "single.pdf"
    doc = fitz.open()
    page = doc.new_page(width=595, height=842)  # A4
    page.insert_text((72, 100), "Hello, OCR world!")
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def multi_page_pdf(tmp_path: Path) -> Path:
    """A real 3-page PDF with distinct text on each page."""
    path = tmp_path / "multi.pdf"
    doc = fitz.open()
    for i in range(3):
        page = doc.new_page(width=595, height=842)
        page.insert_text((72, 100), f"Page {i + 1} content")
    doc.save(str(path))
    doc.close()
    return path
