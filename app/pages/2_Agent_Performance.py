import streamlit as st

from callplan import session_from_state
from callplan.reports import agent_performance_averages, agent_performance_table


st.set_page_config(page_title="Agent Performance", layout="wide")
st.title("Agent Performance")
st.caption("Calls treated per agent after the last calculation. Achievement is relative to an even share of the daily target.")

session = session_from_state(st.session_state)
snap = session.snapshot()

shift_filter = st.selectbox("Shift", options=["all", *snap.registry.shift_ids], index=0)

table = agent_performance_table(snap)
if shift_filter != "all":
    table = table[table["shift"] == shift_filter].reset_index(drop=True)

st.dataframe(
    table,
    column_config={
        "achievement_pct": st.column_config.ProgressColumn(
            "achievement_pct", format="%d%%", min_value=0, max_value=100
        ),
    },
    hide_index=True,
    use_container_width=True,
)

averages = agent_performance_averages(snap)
c1, c2, c3 = st.columns(3)
c1.metric("Avg calls / agent", f"{averages['avg_calls']}")
c2.metric("Avg productivity", f"{averages['avg_productivity']} calls/h")
c3.metric("Overall achievement", f"{averages['achievement_pct']}%")
