import logging

import streamlit as st

from callplan import parse_configuration_update, session_from_state
from callplan.presence import presence_table
from callplan.reports import agent_performance_averages, slot_summary_totals

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="Call Center Shift Planner", layout="wide")

st.title("Call Center Shift Planner")
st.write(
    """
This app plans the workload of a shift roster, **per half-hour slot**:

- Agents present per slot (from shift schedules + headcounts)
- Handling capacity per slot (AHT + occupancy)
- Director commands per slot (manual, CSV import, or auto-distributed from the daily target)
- Fair distribution of each slot's calls across the agents on duty
- Excel / CSV exports of the slot summary and the agent x slot matrix
"""
)

session = session_from_state(st.session_state)

with st.sidebar:
    st.header("Shifts")
    counts = {}
    for shift in session.registry:
        counts[f"shift{shift.shift_id}Count"] = st.number_input(
            f"Shift {shift.shift_id} agents ({shift.start_hour:g}h - {shift.end_hour:g}h)",
            min_value=0,
            value=int(shift.headcount),
            step=1,
        )

    st.divider()
    st.header("Capacity")
    aht = st.number_input(
        "AHT (minutes)", min_value=1.0, value=float(session.config.average_handle_time_minutes), step=1.0
    )
    daily_target = st.number_input(
        "Daily target (calls)", min_value=0, value=int(session.config.daily_call_target), step=50
    )
    st.caption(f"Occupancy rate: {session.config.occupancy_rate:.0%} | Overlap policy: `{session.policy}`")

    if st.button("Apply configuration", type="primary"):
        update = parse_configuration_update(
            {**counts, "averageHandleTime": aht, "dailyTarget": daily_target},
            session.registry.shift_ids,
        )
        session.update_configuration(update)
        st.success("Configuration updated successfully!")

snap = session.snapshot()
totals = slot_summary_totals(snap)
averages = agent_performance_averages(snap)

c1, c2, c3, c4 = st.columns(4)
c1.metric("Total agents", f"{snap.registry.total_headcount()}")
c2.metric("Daily target", f"{snap.config.daily_call_target}")
c3.metric("Total capacity", f"{totals['capacity']}")
c4.metric("Coverage", f"{min(totals['coverage_pct'], 100)}%", totals["coverage_status"])

c5, c6, c7 = st.columns(3)
c5.metric("Avg calls / agent", f"{averages['avg_calls']}")
c6.metric("Avg productivity", f"{averages['avg_productivity']} calls/h")
c7.metric("Achievement", f"{averages['achievement_pct']}%")

with st.expander("Agents present per slot and shift", expanded=False):
    st.dataframe(presence_table(snap.slots, snap.registry, snap.policy), hide_index=True, use_container_width=True)

st.info("Use the left sidebar to navigate to commands, agent performance, or the agent x slot detail.")
