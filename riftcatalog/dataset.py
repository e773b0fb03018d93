"""Read back the artifacts written by the transformer."""
from __future__ import annotations

import json
import pathlib
from typing import Any, Dict, List

from .utils import DatasetError


def _read_json(path: pathlib.Path) -> Any:
    if not path.exists():
        raise DatasetError(f"Unable to locate {path}")
    try:
        with path.open("r", encoding="utf8") as handle:
            return json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise DatasetError(f"Unable to read {path}: {exc}") from exc


def load_cards(path: str | pathlib.Path) -> List[Dict[str, Any]]:
    """Return the ``cards`` list of an enriched dataset file.

    Cards stay plain dictionaries so that datasets written by older runs, with
    fewer derived fields, can still be published.
    """
    dataset_path = pathlib.Path(path)
    payload = _read_json(dataset_path)
    cards = payload.get("cards") if isinstance(payload, dict) else None
    if not isinstance(cards, list):
        raise DatasetError(f"{dataset_path.name} does not contain a cards array")
    return cards


def load_manifest(path: str | pathlib.Path) -> List[Dict[str, Any]]:
    manifest_path = pathlib.Path(path)
    payload = _read_json(manifest_path)
    if not isinstance(payload, list):
        raise DatasetError(f"{manifest_path.name} does not contain a list of image entries")
    return payload
