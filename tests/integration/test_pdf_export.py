"""Integration tests: real PDFs from bitmaps, and a real browser capture when available."""

import io

import pdfplumber
import pytest
from PIL import Image

import exporter
from exporter import ExportPipeline, MissingElementError, build_pdf, capture_preview
from preview import render_preview_html

A4_POINTS = (595.28, 841.89)


def _pages(pdf_bytes: bytes):
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        return [(round(p.width, 2), round(p.height, 2), len(p.images)) for p in pdf.pages]


def _chromium_available() -> bool:
    if exporter.sync_playwright is None:
        return False
    try:
        with exporter.sync_playwright() as p:
            p.chromium.launch().close()
    except Exception:
        return False
    return True


needs_chromium = pytest.mark.skipif(not _chromium_available(),
                                    reason="Playwright Chromium not installed")


@pytest.mark.integration
@pytest.mark.parametrize("height_px,pages", [
    (300, 1),
    (1188, 2),   # exactly two A4 pages at 2 px/mm
    (1300, 3),
])
def test_build_pdf_page_count(make_image, height_px, pages):
    """Test the PDF has one A4 page per strip, each carrying one image."""
    pdf_bytes, count = build_pdf(make_image(420, height_px))

    assert count == pages
    layout = _pages(pdf_bytes)
    assert len(layout) == pages
    for width, height, images in layout:
        assert (width, height) == pytest.approx(A4_POINTS, abs=0.5)
        assert images == 1


@pytest.mark.integration
def test_build_pdf_strip_sits_at_page_top(make_image):
    """Test a short last strip is drawn from the top edge of its page."""
    pdf_bytes, _ = build_pdf(make_image(420, 800))
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        last = pdf.pages[-1].images[0]
        assert last["top"] == pytest.approx(0, abs=0.5)
        assert last["bottom"] == pytest.approx(206 / 2 * 72 / 25.4, abs=0.5)


@pytest.mark.integration
def test_build_pdf_accepts_rgba(make_image):
    """Test screenshots with an alpha channel are flattened."""
    image = Image.new("RGBA", (210, 100), (0, 0, 0, 0))
    _, count = build_pdf(image)
    assert count == 1


@needs_chromium
@pytest.mark.integration
def test_capture_preview_renders_element(filled_builder):
    """Test the preview element is captured at the configured scale."""
    image = capture_preview(render_preview_html(filled_builder.resume_data), scale=2)
    assert image.mode == "RGB"
    assert image.width == 794 * 2
    assert image.height > 0


@needs_chromium
@pytest.mark.integration
def test_capture_preview_missing_element():
    """Test HTML without the preview element raises MissingElementError."""
    with pytest.raises(MissingElementError):
        capture_preview("<html><body><p>nothing here</p></body></html>")


@needs_chromium
@pytest.mark.integration
def test_full_export(filled_builder, deferred_scheduler, tmp_path):
    """Test model → browser capture → PDF file on disk."""
    pipeline = ExportPipeline(schedule=deferred_scheduler, export_dir=tmp_path)
    result = pipeline.run(filled_builder)

    assert result.ok, result.error
    assert result.path.exists()
    assert len(_pages(result.pdf)) == result.pages
    with pdfplumber.open(result.path) as pdf:
        assert len(pdf.pages) >= 1
