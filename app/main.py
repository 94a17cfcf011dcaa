from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.helpers import (
    cache_caption,
    count_verified_fields,
    history_label,
    results_caption,
    results_table,
)
from src.config import Settings, configure_logging
from src.io.export import (
    CSV_MIME_TYPE,
    SPREADSHEET_MIME_TYPE,
    encode_csv,
    encode_spreadsheet_xml,
    export_filename,
)
from src.lookup.pipeline import LookupPipeline, SharedResources, build_pipeline, build_resources


@st.cache_resource(show_spinner=False)
def _get_resources() -> SharedResources:
    settings = Settings.from_env()
    configure_logging(settings)
    return build_resources(settings)


def _get_pipeline() -> LookupPipeline:
    if "pipeline" not in st.session_state:
        st.session_state.pipeline = build_pipeline(_get_resources())
    return st.session_state.pipeline


def _run_lookup(pipeline: LookupPipeline, region: str) -> None:
    with st.spinner(f"Searching 2024-2025 programs in {region.strip()}..."):
        pipeline.lookup(region)


def _render_sidebar(pipeline: LookupPipeline) -> None:
    with st.sidebar:
        st.header("Target District")
        with st.form("lookup_form", clear_on_submit=False):
            region = st.text_input("District", placeholder="e.g. Bangalore, SF...")
            submitted = st.form_submit_button("Search", type="primary", use_container_width=True)
        st.caption("Strictly filtering for 2024 and 2025 programs only.")
        if submitted:
            _run_lookup(pipeline, region)

        st.divider()
        st.header("History")
        entries = pipeline.history_entries
        if not entries:
            st.caption("No districts searched yet.")
        for index, entry in enumerate(entries):
            label = history_label(entry, cached=pipeline.is_cached(entry))
            if st.button(label, key=f"history_{index}", use_container_width=True):
                _run_lookup(pipeline, entry)


def _render_results(pipeline: LookupPipeline) -> None:
    state = pipeline.state
    if state.error:
        st.error(state.error)

    if state.viewing_region is None or not state.records:
        st.info("Enter a district to find hackathon and community programs from 2024-2025.")
        return

    st.subheader(state.viewing_region)
    st.caption(results_caption(state.viewing_region, state.records))
    cached_note = cache_caption(pipeline.cached_at(state.viewing_region))
    if cached_note:
        st.caption(cached_note)
    st.dataframe(results_table(state.records), use_container_width=True)
    st.caption(f"Verified fields: {count_verified_fields(state.records)}")

    csv_col, xls_col = st.columns(2)
    csv_col.download_button(
        "Export CSV",
        data=encode_csv(state.records),
        file_name=export_filename(state.viewing_region, "csv"),
        mime=CSV_MIME_TYPE,
        use_container_width=True,
    )
    xls_col.download_button(
        "Export Excel",
        data=encode_spreadsheet_xml(state.records),
        file_name=export_filename(state.viewing_region, "xls"),
        mime=SPREADSHEET_MIME_TYPE,
        use_container_width=True,
    )


def main() -> None:
    st.set_page_config(page_title="Hackathon Finder", layout="wide")
    st.title("Hackathon Finder")
    st.caption("District -> Search-grounded lookup -> Cache + History -> Export")

    pipeline = _get_pipeline()
    _render_sidebar(pipeline)
    _render_results(pipeline)


if __name__ == "__main__":
    main()
