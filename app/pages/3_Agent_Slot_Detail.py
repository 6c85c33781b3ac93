from __future__ import annotations

from datetime import date
from typing import Optional

import streamlit as st

from callplan import session_from_state
from callplan.io import agent_details_workbook_bytes, agent_matrix_csv, export_filename
from callplan.reports import agent_slot_matrix, filter_matrix, render_matrix


st.set_page_config(page_title="Agent x Slot Detail", layout="wide")
st.title("Agent x Time Slot Detail")
st.caption("Calls per agent per slot. `-` marks slots outside the agent's shift.")

session = session_from_state(st.session_state)
snap = session.snapshot()

with st.sidebar:
    st.header("Filters")
    agent_choice = st.selectbox("Agent", options=["all", *[a.agent_id for a in snap.agents]], index=0)
    shift_choice = st.selectbox("Shift", options=["all", *snap.registry.shift_ids], index=0)

agent_id: Optional[str] = None if agent_choice == "all" else agent_choice
shift_id: Optional[str] = None if shift_choice == "all" else shift_choice

matrix = filter_matrix(agent_slot_matrix(snap), agent_id=agent_id, shift_id=shift_id)
st.dataframe(render_matrix(matrix), hide_index=True, use_container_width=True)

today = date.today()
st.download_button(
    "Download agent details (Excel)",
    data=agent_details_workbook_bytes(snap),
    file_name=export_filename("agent_details", today),
    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
)
st.download_button(
    "Download agent details (CSV)",
    data=agent_matrix_csv(snap).encode("utf-8"),
    file_name=export_filename("agent_details", today, ext="csv"),
    mime="text/csv",
)
