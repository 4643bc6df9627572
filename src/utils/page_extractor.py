import fitz  # PyMuPDF
import logging
import math

from src.errors import UnsupportedFileType
from src.utils.io import SlideFile

logger = logging.getLogger(__name__)

# PPTX is not parsed: roughly ten slides per megabyte
PPTX_SLIDES_PER_MB = 10


def _kind(file: SlideFile) -> str:
    name = file.name.lower()
    if name.endswith(".pdf"):
        return "pdf"
    if name.endswith(".pptx"):
        return "pptx"
    raise UnsupportedFileType(file.name)


def _open_pdf(file: SlideFile) -> fitz.Document:
    return fitz.open(stream=file.read(), filetype="pdf")


# Page count
def page_count(file: SlideFile) -> int:

    kind = _kind(file)

    if kind == "pptx":
        size_mb = file.size / (1024 * 1024)
        return max(1, math.floor(size_mb * PPTX_SLIDES_PER_MB + 0.5))

    with _open_pdf(file) as doc:
        return doc.page_count


# Raw text for one page (1-based), words joined by single spaces
def page_text(file: SlideFile, page_number: int) -> str:

    kind = _kind(file)

    if kind == "pptx":
        return (
            f"[This is placeholder content for slide {page_number} of PowerPoint file {file.name}. "
            "In a production environment, we would extract real text content from the PPTX file.]"
        )

    with _open_pdf(file) as doc:
        if page_number < 1 or page_number > doc.page_count:
            raise ValueError(f"Page {page_number} out of range for {file.name} ({doc.page_count} pages)")

        page = doc.load_page(page_number - 1)
        words = page.get_text("words")

    logger.debug("%s p.%d: %d words", file.name, page_number, len(words))

    return " ".join(w[4] for w in words)
