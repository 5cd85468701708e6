import argparse

from analytics.evaluation import evaluate
from analytics.metrics import load_events, print_report, session_profile, session_results, split_by_session
from config.settings import EvaluationConfig
from data.models import parse_profile
from game.errors import InvalidProfileError
from game.runtime.paths import app_data_path


def main() -> None:
    parser = argparse.ArgumentParser(description="Re-evaluate recorded Go/No-Go sessions")
    parser.add_argument("--events", default=str(app_data_path("events.jsonl")))
    parser.add_argument("--session", default="", help="session id (default: every session)")
    parser.add_argument("--age", default=None, help="override the recorded age")
    parser.add_argument("--sex", default=None, help="override the recorded sex")
    args = parser.parse_args()

    sessions = split_by_session(load_events(args.events))
    if args.session:
        sessions = {k: v for k, v in sessions.items() if k == args.session}
    if not sessions:
        print("No sessions to evaluate")
        return

    cfg = EvaluationConfig()
    for session_id, events in sessions.items():
        recorded = session_profile(events)
        age = args.age if args.age is not None else (recorded.age if recorded else None)
        sex = args.sex if args.sex is not None else (recorded.sex if recorded else None)
        print(f"\nSession {session_id}")
        try:
            profile = parse_profile(age, sex)
        except InvalidProfileError as e:
            print(f"Skipped: {e}")
            continue
        print_report(evaluate(session_results(events), profile, cfg), profile, cfg.box_plot_min_samples)


if __name__ == "__main__":
    main()
