import json
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional, Union

from analytics.evaluation import box_plot_values
from data.models import EvaluationSummary, InsufficientData, SessionProfile, TrialResult


def load_events(path: str) -> List[dict]:
    p = Path(path)
    if not p.exists():
        print(f"No events file found at {path}")
        return []
    records = []
    with p.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                records.append(json.loads(line))
    return records


def split_by_session(events: List[dict]) -> Dict[str, List[dict]]:
    sessions = defaultdict(list)
    for e in events:
        sessions[e.get("session_id", "unknown")].append(e)
    return sessions


def trial_result_from_record(record: dict) -> TrialResult:
    rt = record.get("reaction_time_ms")
    return TrialResult(
        round_index=int(record["round_index"]),
        category=str(record["category"]),
        action=str(record["action"]),
        reaction_time_ms=None if rt is None else float(rt),
        correct=bool(int(record.get("correct", 0))),
    )


def session_results(events: List[dict]) -> List[TrialResult]:
    results = [trial_result_from_record(e) for e in events]
    results.sort(key=lambda r: r.round_index)
    return results


def session_profile(events: List[dict]) -> Optional[SessionProfile]:
    for e in events:
        if e.get("age") is not None and e.get("sex"):
            return SessionProfile(age=int(e["age"]), sex=str(e["sex"]))
    return None


def _pct(value: Optional[float]) -> str:
    if value is None:
        return "n/a"
    return f"{round(value * 100)}%"


def format_report(
    evaluation: Union[EvaluationSummary, InsufficientData],
    profile: SessionProfile,
    box_plot_min_samples: int = 5,
) -> List[str]:
    lines = [
        f"Profile: {profile.sex}, {profile.age}",
        f"Accuracy: {_pct(evaluation.accuracy)}",
        f"Inhibition rate: {_pct(evaluation.inhibition_rate)}",
    ]
    if not evaluation.sufficient:
        lines.append(f"Rating: insufficient data ({evaluation.reason})")
        return lines

    sign = "+" if evaluation.diff_ms > 0 else ""
    lines.extend(
        [
            f"Median reaction: {round(evaluation.filtered_median_ms)}ms "
            f"(Q1 {round(evaluation.q1_ms)}ms, Q3 {round(evaluation.q3_ms)}ms, "
            f"n={len(evaluation.reaction_times_ms)})",
            f"Rating: {evaluation.rating} (z={evaluation.z_score:.2f})",
            f"Avg for your group ({profile.sex}, {evaluation.age_bracket}): "
            f"{round(evaluation.group_mean_ms)}ms",
            f"Difference: {sign}{round(evaluation.diff_ms)}ms",
        ]
    )
    box = box_plot_values(evaluation.reaction_times_ms, box_plot_min_samples)
    if box is not None:
        lines.append("Box plot (min/q1/median/q3/max): " + " / ".join(str(round(v)) for v in box))
    return lines


def print_report(
    evaluation: Union[EvaluationSummary, InsufficientData],
    profile: SessionProfile,
    box_plot_min_samples: int = 5,
) -> None:
    print("=== Go / No-Go results ===")
    for line in format_report(evaluation, profile, box_plot_min_samples):
        print(line)
