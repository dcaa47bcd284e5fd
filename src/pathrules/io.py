"""Input/output helpers for the pathrules CLI."""
import csv
import json
import os
import sys
from collections.abc import Iterable
from typing import TextIO

_ITEM_KEYS = ("path", "item")


def _read_text_lines(handle: TextIO) -> list[str]:
    return [line.rstrip("\n\r") for line in handle if line.strip()]


def _read_jsonl(handle: TextIO) -> list[str]:
    data: list[str] = []
    for raw in handle:
        raw = raw.strip()
        if not raw:
            continue
        obj = json.loads(raw)
        if isinstance(obj, dict):
            key = next((name for name in _ITEM_KEYS if name in obj), None)
            if key is None:
                raise ValueError(f"JSON line has no 'path' or 'item' key: {raw}")
            value = obj[key]
        else:
            value = obj
        data.append(str(value))
    return data


def _read_csv(handle: TextIO) -> list[str]:
    reader = csv.DictReader(handle)
    fieldnames = reader.fieldnames or []
    column = next((name for name in _ITEM_KEYS if name in fieldnames), None)
    if column is None:
        raise ValueError("CSV missing required column 'path' (or 'item')")
    return [row[column] for row in reader if row.get(column)]


def _open_path(path: str) -> Iterable[str]:
    _, ext = os.path.splitext(path)
    ext = ext.lower()
    if ext in {".json", ".jsonl"}:
        with open(path, encoding="utf-8") as handle:
            yield from _read_jsonl(handle)
    elif ext in {".csv"}:
        with open(path, encoding="utf-8", newline="") as handle:
            yield from _read_csv(handle)
    else:
        with open(path, encoding="utf-8") as handle:
            yield from _read_text_lines(handle)


def read_items(path: str) -> list[str]:
    """Read one path per entry from a text, JSON Lines or CSV file (``-`` is stdin)."""
    if path == "-":
        return _read_text_lines(sys.stdin)
    return list(_open_path(path))


def write_json(obj: object, path: str) -> None:
    if path == "-":
        json.dump(obj, sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(obj, handle, indent=2, sort_keys=True)
        handle.write("\n")


def write_text(text: str, path: str) -> None:
    if path == "-":
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)
