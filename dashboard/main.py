from pathlib import Path
import sys

import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from analytics.evaluation import box_plot_values, evaluate
from analytics.metrics import load_events, session_profile, session_results, split_by_session
from config.settings import EvaluationConfig
from game.errors import InvalidProfileError
from game.runtime.paths import app_data_path

st.set_page_config(page_title="Go / No-Go Results", layout="wide")
st.title("Go / No-Go Results")

events_path = st.text_input("Events file", value=str(app_data_path("events.jsonl")))
sessions = split_by_session(load_events(events_path))

if not sessions:
    st.warning("No recorded sessions yet.")
    st.stop()

session_id = st.selectbox("Session", sorted(sessions.keys(), reverse=True))
events = sessions[session_id]
profile = session_profile(events)
if profile is None:
    st.error("Session has no age/sex recorded.")
    st.stop()

cfg = EvaluationConfig()
results = session_results(events)
try:
    evaluation = evaluate(results, profile, cfg)
except InvalidProfileError as e:
    st.error(f"Recorded profile is not usable: {e}")
    st.stop()

col1, col2, col3 = st.columns(3)
col1.metric("Accuracy", f"{round(evaluation.accuracy * 100)}%")
if evaluation.inhibition_rate is not None:
    col2.metric("Inhibition rate", f"{round(evaluation.inhibition_rate * 100)}%")
if evaluation.sufficient:
    col3.metric("Median reaction", f"{round(evaluation.filtered_median_ms)}ms")
    sign = "+" if evaluation.diff_ms > 0 else ""
    st.subheader(f"{evaluation.rating} ({profile.sex}, {evaluation.age_bracket})")
    st.caption(
        f"Avg for your group: {round(evaluation.group_mean_ms)}ms, "
        f"difference: {sign}{round(evaluation.diff_ms)}ms"
    )
    box = box_plot_values(evaluation.reaction_times_ms, cfg.box_plot_min_samples)
    if box is not None:
        st.dataframe(
            [dict(zip(("min", "q1", "median", "q3", "max"), (round(v) for v in box)))],
            hide_index=True,
        )
else:
    st.info(f"Insufficient data for a rating ({evaluation.reason}).")

st.dataframe([r.to_record() for r in results], use_container_width=True, hide_index=True)
st.caption(f"Source: {events_path}")
