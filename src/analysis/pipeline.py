from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence
import logging

from openai import OpenAI

from src.models.classifier import classify_page
from src.models.llm_client import is_well_formed_credential, make_client
from src.models.variants import Analysis, Variant, get_variant
from src.utils.config import DEFAULT_MODEL, DEFAULT_VARIANT, OPENAI_BASE_URL
from src.utils.filter_slides import has_enough_text
from src.utils.io import SlideFile
from src.utils.page_extractor import page_count, page_text

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


@dataclass
class SessionConfig:
    """Everything one batch needs besides the files themselves."""

    api_key: str
    model: str = DEFAULT_MODEL
    variant: str = DEFAULT_VARIANT
    base_url: Optional[str] = OPENAI_BASE_URL


@dataclass
class SlideRecord:
    file_index: int
    file_name: str
    page_number: int
    analysis: Analysis
    error: bool = False

    @property
    def title(self) -> str:
        return self.analysis.title

    @property
    def summary(self) -> str:
        return self.analysis.summary

    @property
    def variant(self) -> str:
        return self.analysis.variant

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["variant"] = self.variant
        return data


class ProgressTracker:
    """Pages done over pages counted, reported as a clamped percentage.

    The denominator comes from the counting pass. A file that failed to count
    but is processed later would push the raw ratio past 100, so reports are
    capped at 100 and never go backwards.
    """

    def __init__(self, total_pages: int, on_progress: Optional[ProgressCallback] = None):
        self.total_pages = total_pages
        self.processed_pages = 0
        self.last_reported = 0.0
        self._on_progress = on_progress

    def _percent(self) -> float:
        if self.total_pages <= 0:
            return 100.0
        return min(100.0, self.processed_pages / self.total_pages * 100)

    def _report(self, value: float):
        self.last_reported = max(self.last_reported, value)
        if self._on_progress:
            self._on_progress(self.last_reported)

    def advance(self):
        self.processed_pages += 1
        self._report(self._percent())

    def finish(self):
        if self.last_reported < 100.0:
            self._report(100.0)


def _error_record(variant: Variant, file_index: int, file_name: str, page_number: int, title: str, summary: str) -> SlideRecord:
    return SlideRecord(
        file_index=file_index,
        file_name=file_name,
        page_number=page_number,
        analysis=variant.placeholder(title, summary),
        error=True,
    )


def count_pages(files: Sequence[SlideFile]) -> int:
    total = 0
    for file in files:
        try:
            total += page_count(file)
        except Exception as e:
            # Continue with other files even if one fails
            logger.error("Error counting pages in %s: %s", file.name, e)
    return total


# Main batch entry point
def process_files(
    files: Sequence[SlideFile],
    session: SessionConfig,
    on_progress: Optional[ProgressCallback] = None,
    client: Optional[OpenAI] = None,
) -> List[SlideRecord]:
    """Analyze every page of every file, in order.

    Page and file failures become error-flagged records; the batch always
    runs to the end. A malformed credential fails each page before any
    request is sent.
    """

    variant = get_variant(session.variant)

    if client is None and is_well_formed_credential(session.api_key):
        client = make_client(session.api_key, base_url=session.base_url)

    # 1. Count pages for the progress denominator
    progress = ProgressTracker(count_pages(files), on_progress)
    logger.info("Batch: %d file(s), %d page(s), model=%s, variant=%s",
                len(files), progress.total_pages, session.model, variant.name)

    records: List[SlideRecord] = []

    # 2. Process files -> pages
    for file_index, file in enumerate(files):

        try:
            n_pages = page_count(file)
        except Exception as e:
            logger.error("Error processing file %s: %s", file.name, e)
            records.append(_error_record(
                variant, file_index, file.name, 1,
                "Error Processing File",
                f"Could not process this file: {e}",
            ))
            continue

        for page_number in range(1, n_pages + 1):
            try:
                text = page_text(file, page_number)

                if not has_enough_text(text):
                    logger.info("Skipping %s p.%d: too little text", file.name, page_number)
                else:
                    analysis = classify_page(
                        text,
                        api_key=session.api_key,
                        model=session.model,
                        variant=variant,
                        client=client,
                    )
                    records.append(SlideRecord(
                        file_index=file_index,
                        file_name=file.name,
                        page_number=page_number,
                        analysis=analysis,
                    ))

            except Exception as e:
                logger.error("Error processing page %d of %s: %s", page_number, file.name, e)
                records.append(_error_record(
                    variant, file_index, file.name, page_number,
                    "Error Processing Page",
                    f"An error occurred: {e}",
                ))

            progress.advance()

    progress.finish()
    logger.info("Batch done: %d record(s) from %d page(s)", len(records), progress.processed_pages)

    return records
