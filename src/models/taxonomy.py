from typing import Any, List
import logging
import re

from src.errors import EmptyOrInvalidTaxonomy

logger = logging.getLogger(__name__)

NBSP = "\u00a0"


# Controlled vocabularies the classifier must pick from.
# The first term of each list is the default used when nothing valid comes back.

CONTENT_TAXONOMY = [
    "Access",
    "Availability",
    "Brand Awareness and News",
    "Brand Experience",
    "Clinical Trial and Study Info",
    "Clinical Trial Diversity",
    "Clinical Trial Enrollment",
    "Colloquialism",
    "Confirmation",
    "Contractual Terms",
    "Corporate News",
    "Diagnosis",
    "Disease Awareness",
    "Dispense As Written",
    "Dosing",
    "Efficacy",
    "ePermission or Consent or Unsubscribe",
    "Epidemiology",
    "Invitation to Other MCM",
    "Mechanism of Action",
    "Notations",
    "Pathology",
    "Patient Stories",
    "Patient Type",
    "Pfizer Internal Use Only",
    "Product Form Strength Function",
    "Product Label Info",
    "Real World Evidence",
    "Resources HCP",
    "Resources Patient",
    "Safety",
    "Sample",
    "Special Offers and Discounts",
    "Storage and Handling",
    "Summary Messages",
    "Treatment Options",
    "Unmet Need",
]


# key -> (label, hint for the prompt, allowed terms)
MEDICAL_AFFAIRS_TAXONOMY = {
    "ContentType": (
        "Content Type",
        "Select based on all purposes the slide serves",
        [
            "Scientific Platform",
            "Key Scientific Messages (KSMs)",
            "Medical Information Response (MIRs)",
            "Plain Language Summary (PLS)",
            "Clinical Trial Results Deck",
            "Mechanism of Action (MOA) Deck",
            "Real-World Evidence (RWE) Deck",
            "Health Economics & Outcomes Research (HEOR) Deck",
            "Advisory Board Deck",
            "Regulatory & Labeling Deck",
        ],
    ),
    "ClinicalTrialRelevance": (
        "Clinical Trial Relevance",
        "Select all types of clinical evidence presented",
        [
            "Phase 1 Clinical Trial Data",
            "Phase 2 Clinical Trial Data",
            "Phase 3 Clinical Trial Data",
            "Phase 4/Post-Marketing Surveillance Data",
            "Head-to-Head Trials",
            "Biomarker/Companion Diagnostics Evidence",
            "Meta-Analyses & Systematic Reviews",
        ],
    ),
    "DiseaseAndTherapeuticArea": (
        "Disease & Therapeutic Area",
        "Select all relevant medical conditions",
        [
            "Oncology",
            "Cardiology",
            "Immunology",
            "Neurology",
            "Rare Diseases",
            "Non-Small Cell Lung Cancer",
            "Crohn's Disease",
            "Multiple Sclerosis",
        ],
    ),
    "IntendedAudience": (
        "Intended Audience",
        "Select all target audiences",
        [
            "Internal Medical Affairs",
            "Healthcare Professionals (HCPs)",
            "Payers & Market Access Teams",
            "Regulatory & Compliance Teams",
            "Patients & Advocacy Groups",
        ],
    ),
    "KeyScientificMessaging": (
        "Key Scientific Messaging",
        "Select all scientific messages present",
        [
            "Efficacy Data",
            "Safety & Tolerability Profile",
            "Dosing & Administration Guidelines",
            "Real-World Clinical Outcomes",
            "Unmet Medical Need & Differentiation",
        ],
    ),
    "DistributionAndAccessControl": (
        "Distribution & Access Control",
        "Select all appropriate distribution channels",
        [
            "Veeva CRM & MSL Tools",
            "Medical Affairs Internal Repository",
            "Congress Presentations",
            "HCP Portals & Educational Websites",
            "Advisory Board Meetings",
        ],
    ),
    "ComplianceAndRegulatoryConsiderations": (
        "Compliance & Regulatory",
        "Select all applicable compliance statuses",
        [
            "Medical Affairs Approved",
            "Internal Use Only",
            "Market-Specific Adaptations (Regional Variations)",
            "Fair Balance Statement",
            "Pre-Approval vs. Post-Approval Use",
        ],
    ),
}


def category_terms(key: str) -> List[str]:
    return MEDICAL_AFFAIRS_TAXONOMY[key][2]


def category_label(key: str) -> str:
    return MEDICAL_AFFAIRS_TAXONOMY[key][0]


def normalize_term(term: str) -> str:
    return term.replace(NBSP, " ").strip()


# Candidate terms from whatever the model sent. List elements are taken
# whole; a single string (line-decoder output) is split on ";" and ",".
def split_terms(values: Any) -> List[str]:
    if values is None:
        return []
    if isinstance(values, (list, tuple)):
        return [str(v) for v in values if v is not None and normalize_term(str(v))]
    return [part for part in re.split(r"[;,]", str(values)) if normalize_term(part)]


def repair_terms(values: Any, allowed: List[str]) -> List[str]:
    """Keep only allowed terms; fall back to the first allowed term.

    Matching is exact after NBSP/whitespace normalization on both sides and
    returns the canonical spelling from ``allowed``, de-duplicated in order.
    The result is never empty.
    """
    candidates = split_terms(values)
    if not candidates:
        return [allowed[0]]

    canonical = {normalize_term(t): t for t in allowed}
    kept: List[str] = []
    for c in candidates:
        term = canonical.get(normalize_term(c))
        if term is not None and term not in kept:
            kept.append(term)

    if not kept:
        logger.debug("%s", EmptyOrInvalidTaxonomy(f"No allowed terms in {candidates!r}; defaulting to {allowed[0]!r}"))
        return [allowed[0]]

    return kept
