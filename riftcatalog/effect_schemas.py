"""Ordered pattern tables used to classify card effect text.

Tables are plain ordered lists of ``(label, pattern)`` pairs; every table is
evaluated in full for each card and the declaration order is the output order.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern, Tuple


def _word(*words: str) -> Pattern[str]:
    return re.compile("|".join(rf"\b{word}\b" for word in words), re.IGNORECASE)


KEYWORD_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("Action", _word("ACTION")),
    ("Reaction", _word("REACTION")),
    ("Showdown", _word("showdown")),
    ("Conquer", _word("conquer")),
    ("Gear", _word("gear")),
    ("Rune", _word("rune")),
    ("Heal", _word("heal")),
    ("Buff", _word("buff")),
    ("Draw", _word("draw")),
    ("Kill", _word("kill")),
]

ACTION_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("kill", _word(r"kill(?:s|ed|ing)?")),
    ("buff", _word(r"buff(?:s|ed|ing)?")),
    ("heal", _word(r"heal(?:s|ed|ing)?")),
    ("draw", _word(r"draw(?:s|n|ing)?")),
    ("summon", _word(r"summon(?:s|ed|ing)?")),
    ("discard", _word(r"discard(?:s|ed|ing)?")),
    ("conquer", _word(r"conquer(?:s|ed|ing)?")),
    ("transform", _word(r"transform(?:s|ed|ing)?")),
    ("recover", _word(r"recover(?:s|ed|ing)?")),
]

# Clause categories; ACTION/REACTION only count at the start of a clause.
CLAUSE_TAG_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("action", re.compile(r"^ACTION\b", re.IGNORECASE)),
    ("reaction", re.compile(r"^REACTION\b", re.IGNORECASE)),
    ("trigger", _word("When", "Whenever")),
    ("buff", _word("Buff")),
    ("removal", _word("Kill")),
    ("healing", _word("Heal")),
]

REACTION_WINDOW_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("showdown", re.compile(r"showdown", re.IGNORECASE)),
    ("opponent-turn", re.compile(r"opponent'?s turn", re.IGNORECASE)),
    ("your-turn", re.compile(r"your turn", re.IGNORECASE)),
]

# Highest priority first; the first match wins.
TIMING_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("action", _word("ACTION")),
    ("reaction", _word("REACTION")),
    ("triggered", _word("When", "Whenever")),
]

TRIGGER_PATTERN = re.compile(
    r"\b(When|Whenever|After|Before|While|During)\b([^.;]+)", re.IGNORECASE
)
CLAUSE_SPLIT_PATTERN = re.compile(r"(?:(?<=[.!?])\s+|\n+)")
TARGET_PATTERN = _word("target", "choose", "select")
STATEFUL_PATTERN = _word("buff", "heal", "transform", "summon")
MULTI_TARGET_PATTERN = _word("all", "each", "every")
GLOBAL_TARGET_PATTERN = re.compile(r"\bglobal\b|\ball\b.*players\b", re.IGNORECASE)
MULLIGAN_PATTERN = _word("mulligan")
SHOWDOWN_PATTERN = _word("showdown")

TARGET_HINT_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("ally", re.compile(r"\bfriendly\b|\ballied\b|\byou control\b", re.IGNORECASE)),
    ("enemy", re.compile(r"\ban enemy\b|\bopponent'?s\b", re.IGNORECASE)),
    ("battlefield", _word("battlefield")),
    ("self", _word("myself", "this", "me", "self")),
    ("any", _word("any", "target")),
]


@dataclass(frozen=True)
class EffectClass:
    """One effect category with the operation it implies."""

    id: str
    label: str
    patterns: Tuple[Pattern[str], ...]
    operation: str
    target_hint: str
    zone: Optional[str]
    automated: bool
    rule_refs: Tuple[str, ...] = field(default_factory=tuple)

    def matches(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.patterns)


def _class(
    class_id: str,
    label: str,
    patterns: List[str],
    operation: str,
    target_hint: str,
    zone: Optional[str],
    automated: bool,
    rule_refs: List[str],
) -> EffectClass:
    return EffectClass(
        id=class_id,
        label=label,
        patterns=tuple(re.compile(p, re.IGNORECASE) for p in patterns),
        operation=operation,
        target_hint=target_hint,
        zone=zone,
        automated=automated,
        rule_refs=tuple(rule_refs),
    )


EFFECT_CLASSES: List[EffectClass] = [
    _class("card_draw", "Card draw & vision",
           [r"\bdraw\b", r"\bvision\b", r"\bpeek\b", r"\blook at the top\b"],
           "draw_cards", "self", "deck", True, ["409-410", "743"]),
    _class("card_discard", "Discard / hand pressure",
           [r"\bdiscard\b", r"\blose a card\b"],
           "discard_cards", "enemy", "hand", False, ["346", "407"]),
    _class("resource_gain", "Resource generation",
           [r"\bgain\b.*\benergy\b", r"\bchannel\b", r"\brune\b", r"\bpower\b"],
           "gain_resource", "self", None, True, ["161-170"]),
    _class("buff", "Buff / stat increase",
           [r"\bbuff\b", r"\bgive\b.*\+\d", r"\bgrant\b.*\+\d"],
           "modify_stats", "ally", "board", False, ["430-450"]),
    _class("debuff", "Debuff / stat reduction",
           [r"\bdebuff\b", r"\bgive\b.*-\d", r"\breduce\b"],
           "modify_stats", "enemy", "board", False, ["430-450"]),
    _class("damage", "Direct damage",
           [r"\bdeal\b.*\bdamage\b", r"\bstrike\b", r"\bblast\b", r"\bburn\b"],
           "deal_damage", "enemy", "board", False, ["437", "500-520"]),
    _class("heal", "Healing & recovery",
           [r"\bheal\b", r"\brecover\b", r"\brestore\b"],
           "heal", "ally", "board", False, ["520-530"]),
    _class("summon", "Summon / deploy units",
           [r"\bsummon\b", r"\bplay a\b", r"\bdeploy\b", r"\bput\b.*onto the board"],
           "summon_unit", "ally", "board", False, ["340-360"]),
    _class("token", "Token creation",
           [r"\btoken\b", r"\bcopy\b"],
           "create_token", "ally", "board", False, ["340-360"]),
    _class("movement", "Movement / repositioning",
           [r"\bmove\b", r"\brelocate\b", r"\bswap\b"],
           "move_unit", "ally", "board", False, ["430", "737"]),
    _class("battlefield_control", "Battlefield control",
           [r"\bbattlefield\b", r"\bconquer\b", r"\bcapture\b", r"\bcontrol\b.*battlefield"],
           "control_battlefield", "battlefield", "battlefield", False, ["106", "437"]),
    _class("removal", "Removal / destruction",
           [r"\bkill\b", r"\bdestroy\b", r"\bbanish\b", r"\bremove\b"],
           "remove_permanent", "enemy", "board", False, ["500-520", "716"]),
    _class("recycle", "Recycle / shuffle",
           [r"\brecycle\b", r"\bshuffle\b", r"\bput\b.*bottom\b"],
           "recycle_card", "self", "deck", True, ["403", "409"]),
    _class("search", "Search / tutor",
           [r"\bsearch\b", r"\blook for\b", r"\bchoose\b.*from your deck"],
           "search_deck", "self", "deck", False, ["346", "409"]),
    _class("rune", "Rune interaction",
           [r"\brune\b", r"\bchannel\b", r"\bpower pip\b"],
           "channel_rune", "self", "board", True, ["161-170", "132.5"]),
    _class("legend", "Legend / leader interaction",
           [r"\blegend\b", r"\bleader\b", r"\bchosen champion\b", r"\bchampion\b"],
           "interact_legend", "self", "board", False, ["103-107", "132.6"]),
    _class("priority", "Priority & reaction modifiers",
           [r"\bREACTION\b", r"\bACTION\b", r"\bshowdown\b", r"\bpriority\b"],
           "manipulate_priority", "any", "board", False, ["117", "346", "739"]),
    _class("shielding", "Shield / prevention",
           [r"\bshield\b", r"\bprevent\b", r"\bbarrier\b", r"\bprotect\b"],
           "shield", "ally", "board", False, ["735-742"]),
    _class("attachment", "Attachment / gear",
           [r"\bequip\b", r"\battach\b", r"\bgear\b"],
           "attach_gear", "ally", "board", False, ["716", "744"]),
    _class("transform", "Transform / polymorph",
           [r"\btransform\b", r"\bbecome\b", r"\bswap\b.*form"],
           "transform", "any", "board", False, ["430-450"]),
    _class("mulligan", "Mulligan / setup modifiers",
           [r"\bmulligan\b", r"\bstarting hand\b"],
           "adjust_mulligan", "self", "hand", True, ["117"]),
]

GENERIC_CLASS = _class("generic", "Generic effect", [], "generic", "any", None, False, ["000-055"])

# Fallback when no class pattern matched but an action verb did.
ACTION_CLASS_MAP: Dict[str, str] = {
    "draw": "card_draw",
    "buff": "buff",
    "heal": "heal",
    "kill": "removal",
    "summon": "summon",
    "discard": "card_discard",
    "conquer": "battlefield_control",
    "transform": "transform",
    "recover": "heal",
}
