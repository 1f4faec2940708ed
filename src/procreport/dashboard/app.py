from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Tuple

import pandas as pd
import streamlit as st

from procreport.analysis.view_model import ViewModel
from procreport.config import DEFAULT_CONFIG_PATH, configure_logging, load_config
from procreport.report.state import ReportSession, ReportStatus, load_report_from_config

SESSION_KEY = "report_session"
# Charts per row in the per-procedure grid
GRID_COLUMNS = 3


def load_resources(config_path: Path = DEFAULT_CONFIG_PATH) -> Tuple[Dict[str, Any], ReportSession]:
    cfg = load_config(config_path)
    configure_logging(cfg)
    session = load_report_from_config(cfg)
    return cfg, session


def render_procedure_grid(view_model: ViewModel) -> None:
    names = view_model.procedure_names
    for start in range(0, len(names), GRID_COLUMNS):
        columns = st.columns(GRID_COLUMNS)
        for col, name in zip(columns, names[start : start + GRID_COLUMNS]):
            frame = pd.DataFrame(view_model.per_procedure_series[name]).set_index("name")
            with col:
                st.markdown(f"**{name} per year**")
                st.bar_chart(frame["conteo"], height=200)


def render_detail_tables(view_model: ViewModel) -> None:
    st.subheader("Procedure detail")
    for name, points in view_model.per_procedure_series.items():
        table = pd.DataFrame(points).rename(columns={"name": "Year", "conteo": "Count"})
        st.markdown(f"Procedure: **{name}**")
        st.dataframe(table, hide_index=True, use_container_width=True)


def render_report(session: ReportSession) -> None:
    if session.status is ReportStatus.LOADING:
        st.status("Loading data...", state="running")
        return
    if session.status is ReportStatus.ERROR:
        st.error("Error loading the data:")
        st.write(session.message)
        return
    if session.status is ReportStatus.EMPTY or session.view_model is None:
        st.info("No procedure data found to display.")
        return

    vm = session.view_model
    st.metric("Total procedures", vm.grand_total)
    render_procedure_grid(vm)

    st.subheader("Procedure totals")
    st.bar_chart(vm.totals_frame().set_index("name")["value"], height=400)

    render_detail_tables(vm)


def main() -> None:
    st.set_page_config(page_title="Procedures per Year", layout="wide")
    st.title("Procedures per Year")
    st.caption("Charts of the procedures performed, built from the CSV data.")

    if st.sidebar.button("Reload data"):
        st.session_state.pop(SESSION_KEY, None)

    if SESSION_KEY not in st.session_state:
        with st.spinner("Loading data..."):
            _, session = load_resources()
        st.session_state[SESSION_KEY] = session

    render_report(st.session_state[SESSION_KEY])


if __name__ == "__main__":
    main()
