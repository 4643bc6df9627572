# Top-level package for the Medical Slide Analyzer.

# This project implements:
# - PDF / PPTX → per-page text extraction
# - Per-page LLM classification against fixed medical taxonomies
# - Response validation and taxonomy repair
# - Sequential batch pipeline with progress reporting
# - CSV export and a Streamlit front end

# Subpackages:
#     utils/         → Page extraction, IO, CSV export, config, credentials
#     models/        → LLM client, prompts, taxonomy variants, validator
#     analysis/      → Batch pipeline, grouping and term statistics
#     experiments/   → Runner scripts (batch CLI, model listing)
#     visualization/ → Streamlit app
