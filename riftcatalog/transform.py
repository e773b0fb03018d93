"""Turn a raw columnar card dump into enriched catalog records."""
from __future__ import annotations

import json
import pathlib
import posixpath
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .effect_parser import build_activation, build_effect_profile, derive_clauses, derive_keywords
from .json_writer import ENRICHED_FILENAME, IMAGE_MANIFEST_FILENAME, JsonWriter
from .models import (
    CardAssets,
    CardPricing,
    CardReferences,
    EnrichedCardRecord,
    EnrichedDataset,
    ImageManifestEntry,
    RawCardDump,
)
from .normalizer import listify, normalize, optional_text, parse_cost, reshape_row, to_number
from .utils import DumpNotFoundError, MalformedDumpError, get_logger, utc_timestamp

LOGGER = get_logger(__name__)

RAW_DUMP_FILENAME = "champion-dump.json"
ASSET_DIRECTORY = "assets/card-images"
SOURCE_TAG = "champion-dump.json"


def load_dump(path: str | pathlib.Path) -> RawCardDump:
    """Read and validate the raw dump at ``path``."""
    dump_path = pathlib.Path(path)
    if not dump_path.exists():
        raise DumpNotFoundError(f"Cannot find champion dump at {dump_path}")

    try:
        with dump_path.open("r", encoding="utf8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise MalformedDumpError(f"{dump_path} is not valid JSON: {exc}") from exc

    try:
        return RawCardDump.model_validate(payload)
    except ValidationError as exc:
        raise MalformedDumpError(
            f"{dump_path} must contain a 'names' list and a 'data' row list"
        ) from exc


def asset_path(slug: str, card_id: str) -> str:
    return posixpath.join(ASSET_DIRECTORY, f"{slug or card_id}.webp")


def enrich_record(record: Dict[str, Any]) -> EnrichedCardRecord:
    """Build one enriched card from a field-keyed raw record."""
    card_id = normalize(record.get("id"))
    slug = normalize(record.get("slug")) or card_id
    effect = normalize(record.get("effect"))
    colors = listify(record.get("color"))
    tags = listify(record.get("tags"))
    activation = build_activation(effect)

    return EnrichedCardRecord(
        id=card_id,
        slug=slug,
        name=normalize(record.get("name")),
        type=optional_text(record.get("type")),
        rarity=optional_text(record.get("rarity")),
        set_name=optional_text(record.get("set_name")),
        colors=colors,
        cost=parse_cost(record.get("cost")),
        might=to_number(record.get("might")),
        tags=tags,
        effect=effect,
        flavor=optional_text(record.get("flavor")),
        keywords=derive_keywords(effect, [*colors, *tags]),
        activation=activation,
        effect_profile=build_effect_profile(effect, activation),
        rules=derive_clauses(card_id, effect),
        assets=CardAssets(
            remote=optional_text(record.get("image")),
            local_path=asset_path(slug, card_id),
        ),
        pricing=CardPricing(
            price=to_number(record.get("price")),
            foil_price=to_number(record.get("foilPrice")),
        ),
        references=CardReferences(
            market_url=optional_text(record.get("cmurl")),
            source=SOURCE_TAG,
        ),
    )


def enrich_dump(dump: RawCardDump) -> List[EnrichedCardRecord]:
    """Enrich every row of ``dump``; rows are independent of each other."""
    return [enrich_record(reshape_row(dump.names, row)) for row in dump.data]


def build_image_manifest(cards: List[EnrichedCardRecord]) -> List[ImageManifestEntry]:
    return [
        ImageManifestEntry(
            id=card.id,
            name=card.name,
            remote=card.assets.remote,
            local_path=card.assets.local_path,
        )
        for card in cards
    ]


def build_dataset(
    cards: List[EnrichedCardRecord], generated_at: Optional[str] = None
) -> EnrichedDataset:
    return EnrichedDataset(
        generated_at=generated_at or utc_timestamp(),
        total_cards=len(cards),
        cards=cards,
    )


@dataclass
class TransformResult:
    dataset_path: pathlib.Path
    manifest_path: pathlib.Path
    total_cards: int


class EnrichmentTransformer:
    """Read a raw dump, enrich it and write the dataset and image manifest."""

    def __init__(self, writer: JsonWriter) -> None:
        self.writer = writer

    def run(self, dump_path: str | pathlib.Path) -> TransformResult:
        dump = load_dump(dump_path)
        LOGGER.info("Enriching %s rows from %s", len(dump.data), dump_path)
        cards = enrich_dump(dump)

        dataset = build_dataset(cards)
        manifest = build_image_manifest(cards)

        dataset_path = self.writer.write(ENRICHED_FILENAME, dataset.to_payload())
        manifest_path = self.writer.write(
            IMAGE_MANIFEST_FILENAME, [entry.to_payload() for entry in manifest]
        )
        LOGGER.info("Wrote %s cards and %s image entries", len(cards), len(manifest))
        return TransformResult(dataset_path, manifest_path, len(cards))
