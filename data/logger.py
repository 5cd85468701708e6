import json
from pathlib import Path
from typing import Any, Dict


class JsonlLogger:
    """Append-only JSON-lines file: one record per line."""

    def __init__(self, path) -> None:
        self.path = Path(path)

    def write(self, record: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
