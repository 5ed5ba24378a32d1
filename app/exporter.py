"""
Preview ➜ PDF export.

– renders the preview HTML and screenshots #resume-preview in headless
  Chromium (Playwright) at EXPORT_SCALE device pixels
– scales the bitmap to the page width and cuts it into page-height strips
  (Pillow), one strip per PDF page (reportlab)
– ExportPipeline drives the trigger/busy-indicator state around one export
"""
from __future__ import annotations
import io
import logging
import math
import threading
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

try:
    from PIL import Image
except ImportError:
    Image = None

from cleaner import sanitize_file_stem
from preview import render_preview_html
import config

try:
    from playwright.sync_api import sync_playwright, Error as PlaywrightError
except ImportError:
    sync_playwright = None
    PlaywrightError = None

try:
    from reportlab.lib.units import mm
    from reportlab.lib.utils import ImageReader
    from reportlab.pdfgen import canvas
except ImportError:
    canvas = None

log = logging.getLogger(__name__)

READY_LABEL = "📄 Download PDF"
BUSY_LABEL = "Generating..."
DONE_LABEL = "✅ Downloaded!"
RETRY_LABEL = "❌ Try Again"

LIBRARIES_MESSAGE = "PDF libraries are not loaded. Please refresh the page and try again."
GENERIC_MESSAGE = "Failed to generate PDF. Please check your resume content and try again."

# overshoot (device px) past a page boundary that does not start a new page
PAGE_TOLERANCE_PX = 1


class ExportError(Exception):
    """Base class for export failures."""


class MissingCapabilityError(ExportError):
    """The capture browser or the PDF library is unavailable."""


class MissingElementError(ExportError):
    """The preview element to capture is not on the page."""


class ExportBusyError(ExportError):
    """An export is already running."""


class ExportState(Enum):
    IDLE = "idle"
    EXPORTING = "exporting"


@dataclass
class ExportResult:
    filename: str = ""
    pdf: bytes = b""
    pages: int = 0
    path: Optional[Path] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


# ───────────────────────────────────────── pure helpers ──
def export_filename(name: str, today: date | None = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"{sanitize_file_stem(name)}_Resume_{today.isoformat()}.pdf"


def page_count(image_height_px: int, page_height_px: float,
               tolerance_px: float = PAGE_TOLERANCE_PX) -> int:
    """Pages needed for an image of the given height; never less than one.

    An image exactly N pages tall fills N pages, with no trailing blank page,
    also when the page height is not a whole number of pixels.
    """
    return max(1, math.ceil((image_height_px - tolerance_px) / page_height_px))


def slice_pages(image: Image.Image, page_size: tuple[float, float] | None = None) -> List[Image.Image]:
    """Cut a page-width-scaled image into page-height strips, top to bottom."""
    if image.width == 0 or image.height == 0:
        raise ExportError("Captured preview is empty")
    page_w, page_h = page_size or config.get_page_size()
    page_px = page_h * image.width / page_w
    pages = page_count(image.height, page_px)
    strips = []
    for i in range(pages):
        top = round(i * page_px)
        if top >= image.height:
            break
        # the last strip keeps whatever the tolerance folded into it
        bottom = image.height if i == pages - 1 else min(round((i + 1) * page_px), image.height)
        strips.append(image.crop((0, top, image.width, bottom)))
    return strips


def build_pdf(image: Image.Image, page_size: tuple[float, float] | None = None) -> tuple[bytes, int]:
    """Lay the strips of image out one per page. Returns (pdf bytes, page count)."""
    if canvas is None:
        raise MissingCapabilityError("reportlab library not loaded")
    if Image is None:
        raise MissingCapabilityError("Pillow library not loaded")
    page_w, page_h = page_size or config.get_page_size()
    image = image.convert("RGB")
    strips = slice_pages(image, (page_w, page_h))
    px_per_mm = image.width / page_w

    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(page_w * mm, page_h * mm))
    for strip in strips:
        strip_h = strip.height / px_per_mm
        pdf.drawImage(ImageReader(strip), 0, (page_h - strip_h) * mm,
                      width=page_w * mm, height=strip_h * mm)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue(), len(strips)


def capture_preview(html: str, scale: float | None = None, element_id: str | None = None,
                    timeout_ms: int | None = None) -> Image.Image:
    """Screenshot the preview element of html in headless Chromium."""
    if sync_playwright is None:
        raise MissingCapabilityError(
            "Playwright library not loaded. Run: pip install playwright && playwright install chromium")
    if Image is None:
        raise MissingCapabilityError("Pillow library not loaded")
    scale = scale or config.EXPORT_SCALE
    element_id = element_id or config.PREVIEW_ELEMENT_ID
    timeout_ms = timeout_ms or config.BROWSER_TIMEOUT_MS

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch()
            try:
                page = browser.new_page(device_scale_factor=scale,
                                        viewport={"width": 900, "height": 1200})
                page.set_content(html, wait_until="load", timeout=timeout_ms)
                element = page.query_selector(f"#{element_id}")
                if element is None:
                    raise MissingElementError("Resume preview element not found")
                png = element.screenshot(type="png", timeout=timeout_ms)
            finally:
                browser.close()
    except PlaywrightError as e:
        err_str = str(e)
        if "Executable doesn't exist" in err_str or "browserType.launch" in err_str:
            raise MissingCapabilityError("Chromium not installed. Run: playwright install chromium") from e
        raise ExportError(f"Preview capture failed: {e}") from e

    return Image.open(io.BytesIO(png)).convert("RGB")


def user_message(error: Exception) -> str:
    if isinstance(error, MissingCapabilityError):
        return LIBRARIES_MESSAGE
    return GENERIC_MESSAGE


def _start_timer(delay: float, func: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, func)
    timer.daemon = True
    timer.start()
    return timer


# ───────────────────────────────────────── pipeline ──
class ExportPipeline:
    """Idle → Exporting → Idle around a single capture-and-generate run.

    The trigger stays disabled for the whole run; feedback labels and the busy
    indicator are reset by timers afterwards, whatever the outcome.
    """

    def __init__(self, capture: Callable[[str], Image.Image] = capture_preview,
                 schedule: Callable[[float, Callable[[], None]], object] = _start_timer,
                 export_dir: Path | None = config.EXPORT_DIR,
                 today: Callable[[], date] | None = None):
        self.capture = capture
        self.schedule = schedule
        self.export_dir = export_dir
        self.today = today
        self.state = ExportState.IDLE
        self.trigger_label = READY_LABEL
        self.trigger_disabled = False
        self.busy = False
        self._lock = threading.Lock()

    def run(self, builder) -> ExportResult:
        with self._lock:
            if self.state is ExportState.EXPORTING:
                raise ExportBusyError("An export is already in progress")
            self.state = ExportState.EXPORTING
            self.busy = True
            self.trigger_disabled = True
            self.trigger_label = BUSY_LABEL

        try:
            result = self._export(builder)
        except Exception as e:
            log.exception("PDF generation error: %s", e)
            result = ExportResult(error=user_message(e))
        finally:
            self.state = ExportState.IDLE

        if result.ok:
            log.info("Exported %s (%d page(s))", result.filename, result.pages)
            self.schedule(config.SUCCESS_LABEL_DELAY, self._show_done)
        else:
            self.trigger_label = RETRY_LABEL
            self.trigger_disabled = False
            self.schedule(config.FAILURE_RESET_DELAY, self._reset_label)
        self.schedule(config.BUSY_HIDE_DELAY, self._hide_busy)
        return result

    def _export(self, builder) -> ExportResult:
        builder.flush()
        data = builder.snapshot()
        image = self.capture(render_preview_html(data))
        pdf_bytes, pages = build_pdf(image)
        today = self.today() if self.today else None
        result = ExportResult(filename=export_filename(data["personalInfo"]["name"], today),
                              pdf=pdf_bytes, pages=pages)
        if self.export_dir:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            result.path = self.export_dir / result.filename
            result.path.write_bytes(pdf_bytes)
        return result

    # timer callbacks; a newer export owns the trigger while it runs
    def _show_done(self) -> None:
        if self.state is ExportState.EXPORTING:
            return
        self.trigger_label = DONE_LABEL
        self.schedule(config.SUCCESS_RESET_DELAY, self._reset_trigger)

    def _reset_trigger(self) -> None:
        if self.state is ExportState.EXPORTING:
            return
        self.trigger_label = READY_LABEL
        self.trigger_disabled = False

    def _reset_label(self) -> None:
        if self.state is ExportState.EXPORTING:
            return
        self.trigger_label = READY_LABEL

    def _hide_busy(self) -> None:
        if self.state is ExportState.EXPORTING:
            return
        self.busy = False
