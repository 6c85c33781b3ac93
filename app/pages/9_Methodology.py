import streamlit as st

st.set_page_config(page_title="Methodology", layout="wide")
st.title("Methodology")

st.markdown(
    r"""
### Agents present

A shift's headcount counts toward a slot when the slot **starts** inside the shift
(half-open test):
  \[
  \text{shift\_start} \le \text{slot\_start} < \text{shift\_end}
  \]

Sessions can opt into the *bidirectional* test instead (slot start or end inside the
shift, or the slot straddling it). The chosen test is used everywhere: presence,
capacity, per-agent distribution and the agent x slot matrix.

### Capacity

  \[
  \text{capacity} = \left\lfloor \text{agents} \cdot \frac{30}{\text{AHT}} \cdot \text{occupancy} \right\rfloor
  \]

Floor, so capacity never overstates what the slot can handle.

### Status

With difference \(d = \text{capacity} - \text{command}\):

- Pending: command is 0
- Excellent: \(d \ge 0.3 \cdot \text{command}\)
- Good: \(d \ge 0\)
- Warning: \(d \ge -0.3 \cdot \text{command}\)
- Critical: otherwise

### Distribution to agents

For a slot with \(n\) agents present and command \(v\):
  \[
  \text{base} = \lfloor v / n \rfloor, \quad r = v \bmod n
  \]
The first \(r\) agents in roster order get \(\text{base}+1\), the others \(\text{base}\).
Slot totals always equal the command.

### Auto-distribution

  \[
  \text{command}_{slot} = \operatorname{round}\left(\text{daily\_target}\cdot\frac{\text{agents present}}{\text{total agents}}\right)
  \]
Each slot is seeded on its own; the per-slot commands are not rescaled to add up to the daily target.
"""
)
