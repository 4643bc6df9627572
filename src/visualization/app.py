import streamlit as st
import plotly.express as px

from src.analysis.grouping import batch_stats, group_by_file, term_counts
from src.analysis.pipeline import SessionConfig, process_files
from src.errors import SlideAnalyzerError
from src.models.llm_client import PREFERRED_MODELS, ModelDescriptor, is_well_formed_credential, list_models
from src.models.variants import VARIANTS, get_variant
from src.utils.config import DEFAULT_MODEL, DEFAULT_VARIANT, LOG_LEVEL, OPENAI_BASE_URL, get_api_key
from src.utils.credentials import load_api_key, save_api_key
from src.utils.csv_export import csv_filename, records_to_csv
from src.utils.io import SlideFile
from src.utils.logging_config import configure_logging

configure_logging(LOG_LEVEL)


@st.cache_data(show_spinner=False, ttl=600)
def fetch_models(api_key: str):
    models = list_models(api_key, base_url=OPENAI_BASE_URL)
    return [(m.id, m.name) for m in models]


def available_models(api_key: str):
    if not is_well_formed_credential(api_key):
        return [ModelDescriptor(**m) for m in PREFERRED_MODELS]
    try:
        return [ModelDescriptor(id=i, name=n) for i, n in fetch_models(api_key)]
    except SlideAnalyzerError as e:
        st.sidebar.warning(f"Could not fetch available models: {e}")
        return [ModelDescriptor(**m) for m in PREFERRED_MODELS]


st.set_page_config(page_title="Medical Slide Analyzer", layout="wide")

st.title("🩺 Medical Slide Analyzer")
st.caption("Extract insights from medical presentations with AI")
st.markdown("---")

if "results" not in st.session_state:
    st.session_state.results = []
    st.session_state.result_variant = DEFAULT_VARIANT


# API configuration
st.sidebar.header("API Configuration")

api_key = st.sidebar.text_input(
    "OpenAI API Key",
    value=load_api_key() or get_api_key(),
    type="password",
    help="Stored locally and only used to process your files.",
)

models = available_models(api_key)
model_ids = [m.id for m in models]
model_names = {m.id: m.name for m in models}

model = st.sidebar.selectbox(
    "OpenAI Model",
    model_ids,
    index=model_ids.index(DEFAULT_MODEL) if DEFAULT_MODEL in model_ids else 0,
    format_func=lambda i: model_names.get(i, i),
)

variant_names = sorted(VARIANTS)
variant = st.sidebar.selectbox(
    "Taxonomy",
    variant_names,
    index=variant_names.index(DEFAULT_VARIANT) if DEFAULT_VARIANT in variant_names else 0,
    format_func=lambda v: VARIANTS[v].label,
)


# Upload & process
st.subheader("📂 Upload & Process")

uploads = st.file_uploader("PDF or PPTX slide decks", type=["pdf", "pptx"], accept_multiple_files=True)

if st.button("Process", type="primary"):
    if not uploads:
        st.error("Please select at least one file to process")
    elif not api_key.strip():
        st.error("Please enter your OpenAI API key")
    elif not model:
        st.error("Please select an OpenAI model")
    else:
        files = [SlideFile(name=u.name, data=u.getvalue()) for u in uploads]
        session = SessionConfig(api_key=api_key.strip(), model=model, variant=variant, base_url=OPENAI_BASE_URL)

        bar = st.progress(0, text="Analyzing slides...")

        def on_progress(pct: float):
            bar.progress(int(pct), text=f"Analyzing slides... {pct:.0f}%")

        st.session_state.results = []
        try:
            records = process_files(files, session, on_progress=on_progress)
            if is_well_formed_credential(session.api_key):
                save_api_key(session.api_key)
        except SlideAnalyzerError as e:
            st.error(f"An error occurred while processing files: {e}")
            records = []
        finally:
            bar.empty()

        if records:
            st.session_state.results = records
            st.session_state.result_variant = variant
            st.success(f"Successfully processed {len(files)} file(s)")
        else:
            st.error("No results were generated from the files")


# Results
results = st.session_state.results

if results:
    result_variant = get_variant(st.session_state.result_variant)

    st.markdown("---")
    stats = batch_stats(results)
    col1, col2, col3 = st.columns(3)
    col1.metric("Files", stats["files"])
    col2.metric("Slides analyzed", stats["records"] - stats["errors"])
    col3.metric("Errors", stats["errors"])

    st.download_button(
        "⬇️ Download CSV",
        data=records_to_csv(results, result_variant),
        file_name=csv_filename(),
        mime="text/csv",
    )

    # Term distribution
    st.subheader("📊 Taxonomy Terms")
    column = st.selectbox("Field", result_variant.taxonomy_headers())
    counts = term_counts(results, column)
    if counts:
        fig = px.bar(
            x=list(counts.values()),
            y=list(counts.keys()),
            orientation="h",
            labels={"x": "Slides", "y": "Term"},
        )
        fig.update_layout(yaxis=dict(autorange="reversed"))
        st.plotly_chart(fig, width="stretch")

    # Cards per file
    st.subheader("📄 Results")
    for _, name, items in group_by_file(results):
        st.markdown(f"#### {name}")
        for r in items:
            label = f"Page {r.page_number}: {r.title}"
            with st.expander(("⚠️ " if r.error else "") + label):
                st.write(r.summary)
                for field_label, terms in r.analysis.taxonomy_columns().items():
                    st.markdown(f"**{field_label}:** {', '.join(terms)}")
                for field_label, text in r.analysis.narrative_columns().items():
                    st.markdown(f"**{field_label}:** {text}")
