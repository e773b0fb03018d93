import json
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))


SAMPLE_NAMES = [
    "id",
    "slug",
    "name",
    "type",
    "rarity",
    "set_name",
    "color",
    "cost",
    "might",
    "tags",
    "effect",
    "flavor",
    "image",
    "price",
    "foilPrice",
    "cmurl",
]

SAMPLE_ROWS = [
    [
        "OGN-001",
        "blazing-scorcher",
        "Blazing Scorcher",
        "Unit",
        "Common",
        "Origins",
        "Fury",
        "5[F]",
        5,
        "Yordle/Scout",
        "When you play me, deal 2 damage to an enemy unit.",
        "  Hot off the forge.  ",
        "https://cdn.example.com/ogn-001.png",
        "0.25",
        1.5,
        "https://market.example.com/ogn-001",
    ],
    [
        "OGN-045",
        None,
        "Stormcall",
        "Spell",
        "Rare",
        "Origins",
        ["Mind", "Chaos"],
        "3[M][C][M]",
        None,
        "",
        "REACTION: Choose a unit. Buff it during a showdown.",
        None,
        None,
        "n/a",
        None,
        None,
    ],
    ["OGN-099", "short-row", "Truncated"],
]


@pytest.fixture
def sample_dump():
    return {"names": list(SAMPLE_NAMES), "data": [list(row) for row in SAMPLE_ROWS]}


@pytest.fixture
def dump_file(tmp_path, sample_dump):
    path = tmp_path / "champion-dump.json"
    path.write_text(json.dumps(sample_dump), encoding="utf8")
    return path
