"""Summarise the effect classes found across the enriched catalog."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from .effect_schemas import EFFECT_CLASSES
from .utils import utc_timestamp


def _card_entry(card: Dict[str, Any]) -> Dict[str, Any]:
    profile = card.get("effectProfile") or {}
    return {
        "id": card.get("id"),
        "slug": card.get("slug"),
        "name": card.get("name"),
        "classes": profile.get("classes") or [],
        "operations": [operation.get("type") for operation in profile.get("operations") or []],
        "priority": profile.get("priority"),
        "targeting": profile.get("targeting"),
    }


def build_effect_taxonomy(
    cards: List[Dict[str, Any]], generated_at: Optional[str] = None
) -> Dict[str, Any]:
    """Count how many cards fall into each effect class.

    Every known class is listed in ``classCounts``, including those no card
    uses; a card counts once per class even if the class repeats.
    """
    class_counts: Dict[str, int] = {definition.id: 0 for definition in EFFECT_CLASSES}
    entries = []
    for card in cards:
        entry = _card_entry(card)
        for class_id in set(entry["classes"]):
            class_counts[class_id] = class_counts.get(class_id, 0) + 1
        entries.append(entry)

    return {
        "generatedAt": generated_at or utc_timestamp(),
        "totalCards": len(cards),
        "classes": [
            {"id": definition.id, "label": definition.label, "ruleRefs": list(definition.rule_refs)}
            for definition in EFFECT_CLASSES
        ],
        "classCounts": class_counts,
        "cards": entries,
    }
