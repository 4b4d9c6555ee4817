from __future__ import annotations

import json
from pathlib import Path
from typing import List

import yaml

from storage.description_io import DescriptionStore


def comments_to_records(store: DescriptionStore) -> List[dict]:
    return [{"name": name, "comment": comment} for name, comment in store.entries.items()]


def export_comments_json(store: DescriptionStore, out_path: Path) -> None:
    data = {
        "directory": str(store.directory),
        "format": store.format.resolved().value,
        "encoding": store.encoding.value,
        "comments": comments_to_records(store),
    }
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def export_comments_yaml(store: DescriptionStore, out_path: Path) -> None:
    data = {
        "directory": str(store.directory),
        "format": store.format.resolved().value,
        "encoding": store.encoding.value,
        "comments": comments_to_records(store),
    }
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(yaml.safe_dump(data, allow_unicode=True, sort_keys=False), encoding="utf-8")
