import json
import unicodedata

from pathlib import Path
from typing import List, Sequence


def normalize_answer(text: object) -> str:
    """Trim and lowercase an answer for comparison."""
    if text is None:
        return ""
    return unicodedata.normalize("NFC", str(text)).strip().lower()


def answers_match(given: object, expected: object) -> bool:
    return normalize_answer(given) == normalize_answer(expected)


def capitalize_first(text: str) -> str:
    """Upper-case the first character only; ``"zu Hause"`` -> ``"Zu Hause"``."""
    return text[:1].upper() + text[1:]


def read_jsonl(path: Path) -> List[dict]:
    data: List[dict] = []
    with Path(path).open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            data.append(json.loads(line))
    return data


def write_jsonl(path: Path, records: Sequence[dict]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as fh:
        for rec in records:
            fh.write(json.dumps(rec, ensure_ascii=False))
            fh.write("\n")


def append_jsonl(path: Path, record: dict) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, ensure_ascii=False))
        fh.write("\n")
