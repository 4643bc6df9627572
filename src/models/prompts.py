from typing import Dict, List

from src.models.taxonomy import CONTENT_TAXONOMY, MEDICAL_AFFAIRS_TAXONOMY


#prompts
MEDICAL_AFFAIRS_PROMPT = """You are a medical content analyzer specializing in precise information extraction and classification from medical slides. Your task is to analyze each slide and STRICTLY use only the provided taxonomy terms.

1. TITLE: Extract the exact title as it appears on the slide. If no clear title exists, use the first prominent text or heading.

2. SUMMARY: Create a single-line, plain language summary that captures the main point of the slide. Use simple, clear language.

3. CONTENT_TAXONOMY: Select ALL applicable terms from this list that describe the content types present in the slide. You MUST use only terms from this list:
{content_terms}

4. MEDICAL_AFFAIRS_TAXONOMY: For each category below, select ALL applicable terms from the provided options that apply to the slide. You MUST only use terms from these lists:

{categories}

IMPORTANT:
- You MUST select at least one term for each category
- You MAY select multiple terms when appropriate
- Only use terms from the provided lists
- Never return "Unable to determine" or create new terms
- Consider all aspects of the slide's content when selecting terms
- If uncertain about a category, select the most relevant term(s) based on available content

Format your response as a valid JSON object with these exact keys: "title", "summary", "content_taxonomy", "medical_affairs_taxonomy".
For each taxonomy field, return an array of terms. Even when only one term applies, it should be in an array format.
Example format:
{{
  "title": "Example Title",
  "summary": "Example summary",
  "content_taxonomy": ["Term1", "Term2"],
  "medical_affairs_taxonomy": {{
    "ContentType": ["Term1", "Term2"],
    "ClinicalTrialRelevance": ["Term1"],
    ...
  }}
}}
Return ONLY JSON."""


AUDIENCE_PROMPT = """You are a medical affairs communication assistant. Analyze the slide and describe how it should be used with different audiences. STRICTLY use only the provided taxonomy terms.

1. TITLE: Extract the exact title as it appears on the slide. If no clear title exists, use the first prominent text or heading.

2. SUMMARY: Create a single-line, plain language summary of the main point of the slide.

3. TAXONOMY: Select ALL applicable terms from this list. You MUST use only terms from this list:
{content_terms}

4. INTENDED_AUDIENCE: Select ALL target audiences from this list:
{audience_terms}

5. MSL_USAGE: One sentence describing how a Medical Science Liaison (MSL) should use this slide in a scientific exchange.

6. HCP_MESSAGE: One sentence stating the key message a Healthcare Professional should take away.

IMPORTANT:
- Select at least one term for TAXONOMY and INTENDED_AUDIENCE
- Only use terms from the provided lists
- Keep MSL_USAGE and HCP_MESSAGE to a single sentence each

Return ONLY valid JSON:
{{
  "title": "...",
  "summary": "...",
  "taxonomy": ["Term1", "Term2"],
  "intended_audience": ["Term1"],
  "msl_usage": "...",
  "hcp_message": "..."
}}"""


def _term_list(terms: List[str]) -> str:
    return "[" + ", ".join(terms) + "]"


def medical_affairs_system_prompt() -> str:
    categories = []
    for key, (_, hint, terms) in MEDICAL_AFFAIRS_TAXONOMY.items():
        categories.append(f"{key} - {hint}:\n{_term_list(terms)}")

    return MEDICAL_AFFAIRS_PROMPT.format(
        content_terms=_term_list(CONTENT_TAXONOMY),
        categories="\n\n".join(categories),
    )


def audience_system_prompt() -> str:
    return AUDIENCE_PROMPT.format(
        content_terms=_term_list(CONTENT_TAXONOMY),
        audience_terms=_term_list(MEDICAL_AFFAIRS_TAXONOMY["IntendedAudience"][2]),
    )


SYSTEM_PROMPTS = {
    "medical_affairs": medical_affairs_system_prompt,
    "audience": audience_system_prompt,
}


# System instructions + the page text as the user turn
def build_messages(page_text: str, variant: str) -> List[Dict[str, str]]:

    if variant not in SYSTEM_PROMPTS:
        raise ValueError(f"Unknown prompt variant: {variant}")

    return [
        {"role": "system", "content": SYSTEM_PROMPTS[variant]()},
        {"role": "user", "content": page_text},
    ]
