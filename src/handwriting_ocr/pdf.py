"""PDF to image conversion using PyMuPDF."""

from pathlib import Path

import fitz  # PyMuPDF


def pdf_to_images(pdf_path: Path, dpi: int = 150) -> list[bytes]:
    """Render each page of a PDF (a scanned notebook, say) to PNG bytes.

    150 DPI keeps pen strokes several pixels wide, which the 3×3 sharpen
    step needs.  Preprocessing is left to the recognition workflow.
    """
    results = []
    matrix = fitz.Matrix(dpi / 72, dpi / 72)  # 72 is the base DPI in the PDF spec

    with fitz.open(str(pdf_path)) as doc:
        for page in doc:
            pixmap = page.get_pixmap(matrix=matrix, colorspace=fitz.csRGB)
            results.append(pixmap.tobytes("png"))

    return results
