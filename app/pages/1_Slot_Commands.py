from __future__ import annotations

from datetime import date
from pathlib import Path

import streamlit as st

from callplan import session_from_state
from callplan.capacity import status_color
from callplan.io import export_filename, planning_workbook_bytes, read_commands_csv, slot_summary_csv
from callplan.reports import slot_summary_table, slot_summary_totals
from callplan.validation import parse_command_value

EDITOR_KEY = "commands_editor"
SAMPLE_PATH = Path(__file__).resolve().parents[2] / "data" / "sample_commands.csv"


# -----------------------------
# Page config
# -----------------------------
st.set_page_config(page_title="Slot Commands", layout="wide")
st.title("Commands per Time Slot")
st.caption("Enter the director's command per slot, compare it to capacity, then distribute calls to agents.")

session = session_from_state(st.session_state)


# -----------------------------
# Actions
# -----------------------------
with st.sidebar:
    st.header("Actions")

    if st.button("Auto-distribute daily target"):
        session.auto_distribute()
        st.session_state.pop(EDITOR_KEY, None)
        st.success("Commands auto-distributed successfully!")

    if st.button("Calculate (distribute to agents)", type="primary"):
        session.recompute_all()
        st.success("All calculations completed successfully!")

    st.divider()
    confirm = st.checkbox("I want to clear all commands")
    if st.button("Clear all commands"):
        if session.clear_commands(confirm=confirm):
            st.session_state.pop(EDITOR_KEY, None)
            st.info("All commands cleared!")
        else:
            st.warning("Tick the confirmation box first.")

    st.divider()
    st.header("Import")
    st.caption("CSV columns: slot (e.g. 12h30-13h00), command.")
    with open(SAMPLE_PATH, "rb") as f:
        st.download_button("Download sample_commands.csv", data=f, file_name="sample_commands.csv", mime="text/csv")
    uploaded = st.file_uploader("Commands CSV", type=["csv"])
    if uploaded is not None and st.button("Load commands"):
        try:
            session.set_commands(read_commands_csv(uploaded, session.slots))
            st.session_state.pop(EDITOR_KEY, None)
            st.success("Commands imported.")
        except Exception as e:
            st.error(f"Could not read CSV: {e}")


# -----------------------------
# Editable table
# -----------------------------
table = slot_summary_table(session)

edited = st.data_editor(
    table,
    column_config={
        "command": st.column_config.NumberColumn("command", min_value=0, step=1),
    },
    disabled=["slot", "agents_present", "capacity", "difference", "status"],
    hide_index=True,
    use_container_width=True,
    key=EDITOR_KEY,
)

changed = edited["command"].to_numpy() != table["command"].to_numpy()
if changed.any():
    for idx in table.index[changed]:
        session.set_command(int(idx), parse_command_value(edited.loc[idx, "command"]))
    st.session_state.pop(EDITOR_KEY, None)
    st.rerun()

totals = slot_summary_totals(session)
c1, c2, c3, c4, c5 = st.columns(5)
c1.metric("Agent-slots", f"{totals['agents_present']}")
c2.metric("Commands", f"{totals['command']}")
c3.metric("Capacity", f"{totals['capacity']}")
c4.metric("Difference", f"{totals['difference']:+d}")
c5.metric("Status", totals["coverage_status"], f"{totals['coverage_pct']}% of capacity")

with st.expander("Status legend", expanded=False):
    for status in ["Pending", "Excellent", "Good", "Warning", "Critical"]:
        st.write(f"- **{status}** ({status_color(status)})")


# -----------------------------
# Export
# -----------------------------
today = date.today()
st.download_button(
    "Download planning workbook (Excel)",
    data=planning_workbook_bytes(session, today=today),
    file_name=export_filename("call_center_planning", today),
    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
)
st.download_button(
    "Download slot summary (CSV)",
    data=slot_summary_csv(session).encode("utf-8"),
    file_name=export_filename("slot_summary", today, ext="csv"),
    mime="text/csv",
)
