import argparse
import logging
import sys
from pathlib import Path

from config.settings import WindowConfig
from data.models import parse_profile
from game.errors import InvalidConfigError, InvalidProfileError
from game.runtime.paths import app_data_path
from game.runtime.task_settings import load_task_config


def main() -> int:
    parser = argparse.ArgumentParser(description="Go / No-Go reaction task")
    parser.add_argument("--age", required=True)
    parser.add_argument("--sex", required=True, choices=["male", "female"])
    parser.add_argument("--settings", default=None, help="JSON file overriding the task config")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        profile = parse_profile(args.age, args.sex)
        settings_path = Path(args.settings) if args.settings else app_data_path("task_settings.json")
        task = load_task_config(settings_path)
    except (InvalidProfileError, InvalidConfigError) as exc:
        print(f"Cannot start: {exc}", file=sys.stderr)
        return 2

    # pygame тянем только когда реально открываем окно
    from game.app import GoNoGoApp

    GoNoGoApp(WindowConfig(), task, profile).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
