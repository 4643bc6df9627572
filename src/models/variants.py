from dataclasses import dataclass, field
import re
from typing import Any, Callable, ClassVar, Dict, List, Tuple, Union

from src.models.taxonomy import (
    CONTENT_TAXONOMY,
    MEDICAL_AFFAIRS_TAXONOMY,
    category_label,
    category_terms,
    repair_terms,
)

TITLE_SENTINEL = "Unable to extract title"
SUMMARY_SENTINEL = "Unable to extract summary"
ERROR_TERM = "Error"
ERROR_NARRATIVE = "Unable to process"


# Full content + seven-category medical affairs classification
@dataclass
class MedicalAffairsAnalysis:
    title: str
    summary: str
    content_taxonomy: List[str]
    medical_affairs_taxonomy: Dict[str, List[str]] = field(default_factory=dict)

    variant: ClassVar[str] = "medical_affairs"

    def taxonomy_columns(self) -> Dict[str, List[str]]:
        cols = {"Content Taxonomy": self.content_taxonomy}
        for key in MEDICAL_AFFAIRS_TAXONOMY:
            cols[category_label(key)] = self.medical_affairs_taxonomy.get(key, [])
        return cols

    def narrative_columns(self) -> Dict[str, str]:
        return {}


# Reduced variant: content terms, audience, and how to talk about the slide
@dataclass
class AudienceAnalysis:
    title: str
    summary: str
    taxonomy: List[str]
    intended_audience: List[str]
    msl_usage: str
    hcp_message: str

    variant: ClassVar[str] = "audience"

    def taxonomy_columns(self) -> Dict[str, List[str]]:
        return {
            "Content Taxonomy": self.taxonomy,
            "Intended Audience": self.intended_audience,
        }

    def narrative_columns(self) -> Dict[str, str]:
        return {
            "MSL Usage": self.msl_usage,
            "HCP Message": self.hcp_message,
        }


Analysis = Union[MedicalAffairsAnalysis, AudienceAnalysis]


def _text(value: Any, sentinel: str) -> str:
    if value is None:
        return sentinel
    text = str(value).strip()
    return text if text else sentinel


def _medical_affairs_from_payload(payload: Dict[str, Any]) -> MedicalAffairsAnalysis:
    categories = payload.get("medical_affairs_taxonomy")
    if not isinstance(categories, dict):
        categories = {}

    return MedicalAffairsAnalysis(
        title=_text(payload.get("title"), TITLE_SENTINEL),
        summary=_text(payload.get("summary"), SUMMARY_SENTINEL),
        content_taxonomy=repair_terms(payload.get("content_taxonomy"), CONTENT_TAXONOMY),
        medical_affairs_taxonomy={
            key: repair_terms(categories.get(key), category_terms(key))
            for key in MEDICAL_AFFAIRS_TAXONOMY
        },
    )


def _medical_affairs_placeholder(title: str, summary: str) -> MedicalAffairsAnalysis:
    return MedicalAffairsAnalysis(
        title=title,
        summary=summary,
        content_taxonomy=[ERROR_TERM],
        medical_affairs_taxonomy={key: [ERROR_TERM] for key in MEDICAL_AFFAIRS_TAXONOMY},
    )


def _audience_from_payload(payload: Dict[str, Any]) -> AudienceAnalysis:
    return AudienceAnalysis(
        title=_text(payload.get("title"), TITLE_SENTINEL),
        summary=_text(payload.get("summary"), SUMMARY_SENTINEL),
        taxonomy=repair_terms(payload.get("taxonomy"), CONTENT_TAXONOMY),
        intended_audience=repair_terms(payload.get("intended_audience"), category_terms("IntendedAudience")),
        msl_usage=_text(payload.get("msl_usage"), "Unable to extract MSL usage"),
        hcp_message=_text(payload.get("hcp_message"), "Unable to extract HCP message"),
    )


def _audience_placeholder(title: str, summary: str) -> AudienceAnalysis:
    return AudienceAnalysis(
        title=title,
        summary=summary,
        taxonomy=[ERROR_TERM],
        intended_audience=[ERROR_TERM],
        msl_usage=ERROR_NARRATIVE,
        hcp_message=ERROR_NARRATIVE,
    )


def _label_pattern(*names: str) -> str:
    # "Content Type" also matches "ContentType" and "Content_Type"
    return "|".join(r"[ _]?".join(re.escape(w) for w in name.split()) for name in names)


@dataclass(frozen=True)
class Variant:
    """One response shape: generation parameters, decoder hints and mappers."""

    name: str
    label: str
    temperature: float
    max_tokens: int
    # payload path -> regex alternation of line labels for the fallback decoder
    line_fields: Tuple[Tuple[Tuple[str, ...], str], ...]
    from_payload: Callable[[Dict[str, Any]], Any]
    placeholder: Callable[[str, str], Any]

    def taxonomy_headers(self) -> List[str]:
        return list(self.placeholder("", "").taxonomy_columns())

    def column_headers(self) -> List[str]:
        sample = self.placeholder("", "")
        return list(sample.taxonomy_columns()) + list(sample.narrative_columns())


MEDICAL_AFFAIRS = Variant(
    name="medical_affairs",
    label="Medical affairs taxonomy",
    temperature=0.3,
    max_tokens=800,
    line_fields=(
        (("title",), _label_pattern("Title")),
        (("summary",), _label_pattern("Summary")),
        (("content_taxonomy",), _label_pattern("Content Taxonomy", "Taxonomy")),
    ) + tuple(
        (("medical_affairs_taxonomy", key), _label_pattern(category_label(key).replace("&", "and"), category_label(key), key))
        for key in MEDICAL_AFFAIRS_TAXONOMY
    ),
    from_payload=_medical_affairs_from_payload,
    placeholder=_medical_affairs_placeholder,
)

AUDIENCE = Variant(
    name="audience",
    label="Audience communication",
    temperature=0.2,
    max_tokens=600,
    line_fields=(
        (("title",), _label_pattern("Title")),
        (("summary",), _label_pattern("Summary")),
        (("taxonomy",), _label_pattern("Content Taxonomy", "Taxonomy")),
        (("intended_audience",), _label_pattern("Intended Audience", "Audience")),
        (("msl_usage",), _label_pattern("MSL Usage")),
        (("hcp_message",), _label_pattern("HCP Message")),
    ),
    from_payload=_audience_from_payload,
    placeholder=_audience_placeholder,
)

VARIANTS = {v.name: v for v in (MEDICAL_AFFAIRS, AUDIENCE)}


def get_variant(name: Union[str, Variant]) -> Variant:
    if isinstance(name, Variant):
        return name
    if name not in VARIANTS:
        raise ValueError(f"Unknown taxonomy variant: {name} (expected one of {sorted(VARIANTS)})")
    return VARIANTS[name]
