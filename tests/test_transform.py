import json

import pytest

from riftcatalog.json_writer import JsonWriter
from riftcatalog.models import EnrichedDataset, RawCardDump
from riftcatalog.transform import (
    EnrichmentTransformer,
    build_dataset,
    build_image_manifest,
    enrich_dump,
    load_dump,
)
from riftcatalog.utils import DumpNotFoundError, MalformedDumpError


def _enrich(names, row):
    return enrich_dump(RawCardDump(names=names, data=[row]))[0]


def test_end_to_end_single_card():
    card = _enrich(
        ["id", "slug", "name", "effect", "cost"],
        ["c1", "c1", "Test Card", "ACTION: Kill target unit. Heal 2.", "3[F]"],
    )

    assert card.activation.timing == "action"
    assert "kill" in card.activation.actions
    assert "heal" in card.activation.actions
    assert card.activation.requires_target is True
    assert card.cost.to_payload() == {"energy": 3, "powerSymbols": ["F"], "raw": "3[F]"}
    assert [clause.id for clause in card.rules] == ["c1-clause-1", "c1-clause-2"]
    assert [clause.tags for clause in card.rules] == [["action", "removal"], ["healing"]]
    assert {"Action", "Kill", "Heal"} <= set(card.keywords)


def test_enrich_fills_defaults_for_missing_fields():
    card = _enrich(["id", "name"], ["c2"])

    assert card.slug == "c2"
    assert card.name == ""
    assert card.type is None
    assert card.set_name is None
    assert card.colors == []
    assert card.tags == []
    assert card.effect == ""
    assert card.rules == []
    assert card.might is None
    assert card.cost.energy is None
    assert card.activation.timing == "passive"
    assert card.assets.local_path == "assets/card-images/c2.webp"
    assert card.pricing.currency == "USD"
    assert card.references.source == "champion-dump.json"


def test_enrich_sample_rows(sample_dump):
    cards = enrich_dump(RawCardDump.model_validate(sample_dump))
    scorcher, stormcall, truncated = cards

    assert scorcher.slug == "blazing-scorcher"
    assert scorcher.colors == ["Fury"]
    assert scorcher.tags == ["Yordle", "Scout"]
    assert scorcher.keywords == ["Fury", "Yordle", "Scout"]
    assert scorcher.might == 5
    assert scorcher.flavor == "Hot off the forge."
    assert scorcher.activation.timing == "triggered"
    assert scorcher.activation.triggers == ["Whenyou play me, deal 2 damage to an enemy unit"]
    assert scorcher.assets.remote == "https://cdn.example.com/ogn-001.png"
    assert scorcher.assets.local_path == "assets/card-images/blazing-scorcher.webp"
    assert scorcher.pricing.price == 0.25
    assert scorcher.pricing.foil_price == 1.5
    assert scorcher.references.market_url == "https://market.example.com/ogn-001"

    assert stormcall.slug == "OGN-045"
    assert stormcall.colors == ["Mind", "Chaos"]
    assert stormcall.cost.power_symbols == ["M", "C"]
    assert stormcall.activation.timing == "reaction"
    assert stormcall.activation.reaction_windows == ["showdown"]
    assert stormcall.keywords == ["Mind", "Chaos", "Reaction", "Showdown", "Buff"]
    assert stormcall.pricing.price is None
    assert stormcall.assets.local_path == "assets/card-images/OGN-045.webp"

    assert truncated.name == "Truncated"
    assert truncated.effect == ""


def test_dataset_payload_uses_camel_case_keys(sample_dump):
    cards = enrich_dump(RawCardDump.model_validate(sample_dump))
    payload = build_dataset(cards, generated_at="2026-01-01T00:00:00.000Z").to_payload()

    assert payload["generatedAt"] == "2026-01-01T00:00:00.000Z"
    assert payload["totalCards"] == 3
    first = payload["cards"][0]
    assert first["setName"] == "Origins"
    assert first["assets"]["localPath"] == "assets/card-images/blazing-scorcher.webp"
    assert first["pricing"]["foilPrice"] == 1.5
    assert first["references"]["marketUrl"] == "https://market.example.com/ogn-001"
    assert first["activation"]["requiresTarget"] is False
    assert first["effectProfile"]["primaryClass"] == "damage"
    assert first["might"] == 5


def test_image_manifest_projects_asset_fields(sample_dump):
    cards = enrich_dump(RawCardDump.model_validate(sample_dump))
    manifest = [entry.to_payload() for entry in build_image_manifest(cards)]

    assert manifest[0] == {
        "id": "OGN-001",
        "name": "Blazing Scorcher",
        "remote": "https://cdn.example.com/ogn-001.png",
        "localPath": "assets/card-images/blazing-scorcher.webp",
    }
    assert manifest[1]["remote"] is None


def test_transformer_writes_dataset_and_manifest(tmp_path, dump_file):
    result = EnrichmentTransformer(JsonWriter(tmp_path / "data")).run(dump_file)

    assert result.total_cards == 3
    dataset = json.loads(result.dataset_path.read_text(encoding="utf8"))
    manifest = json.loads(result.manifest_path.read_text(encoding="utf8"))
    assert result.dataset_path.name == "cards.enriched.json"
    assert result.manifest_path.name == "card-images.json"
    assert dataset["totalCards"] == 3
    assert len(dataset["cards"]) == 3
    assert dataset["generatedAt"].endswith("Z")
    assert [entry["id"] for entry in manifest] == ["OGN-001", "OGN-045", "OGN-099"]
    EnrichedDataset.model_validate(dataset)


def test_transformer_is_idempotent_apart_from_timestamp(tmp_path, dump_file):
    first = EnrichmentTransformer(JsonWriter(tmp_path / "a")).run(dump_file)
    second = EnrichmentTransformer(JsonWriter(tmp_path / "b")).run(dump_file)

    first_payload = json.loads(first.dataset_path.read_text(encoding="utf8"))
    second_payload = json.loads(second.dataset_path.read_text(encoding="utf8"))
    first_payload.pop("generatedAt")
    second_payload.pop("generatedAt")

    assert first_payload == second_payload
    assert first.manifest_path.read_bytes() == second.manifest_path.read_bytes()


def test_transformer_overwrites_previous_output(tmp_path, dump_file):
    out_dir = tmp_path / "data"
    out_dir.mkdir()
    (out_dir / "card-images.json").write_text('[{"id": "stale"}]', encoding="utf8")

    EnrichmentTransformer(JsonWriter(out_dir)).run(dump_file)

    manifest = json.loads((out_dir / "card-images.json").read_text(encoding="utf8"))
    assert "stale" not in [entry["id"] for entry in manifest]


def test_load_dump_requires_existing_file(tmp_path):
    with pytest.raises(DumpNotFoundError):
        load_dump(tmp_path / "missing.json")


@pytest.mark.parametrize(
    "payload",
    ['{"names": ["id"]}', '{"names": ["id"], "data": "rows"}', "[1, 2, 3]", "{not json"],
)
def test_load_dump_rejects_malformed_structure(tmp_path, payload):
    path = tmp_path / "champion-dump.json"
    path.write_text(payload, encoding="utf8")

    with pytest.raises(MalformedDumpError):
        load_dump(path)
