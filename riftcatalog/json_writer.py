"""Persist pipeline artifacts as JSON files."""
from __future__ import annotations

import json
import pathlib
from typing import Any

from .utils import ensure_directory, get_logger

LOGGER = get_logger(__name__)

ENRICHED_FILENAME = "cards.enriched.json"
IMAGE_MANIFEST_FILENAME = "card-images.json"
EFFECT_TAXONOMY_FILENAME = "effect-taxonomy.json"


class JsonWriter:
    """Write whole-file JSON artifacts into ``output_dir``.

    Each write replaces the target file; nothing is merged with what was
    there before.
    """

    def __init__(self, output_dir: str | pathlib.Path) -> None:
        self.output_dir = ensure_directory(output_dir)

    def write(self, filename: str, payload: Any) -> pathlib.Path:
        output_path = self.output_dir / filename
        with output_path.open("w", encoding="utf8") as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
            handle.write("\n")
        LOGGER.info("Wrote %s", output_path)
        return output_path
