"""Derive keywords, clauses and activation/effect profiles from effect text."""
from __future__ import annotations

from typing import Iterable, List, Optional

from .effect_schemas import (
    ACTION_CLASS_MAP,
    ACTION_PATTERNS,
    CLAUSE_SPLIT_PATTERN,
    CLAUSE_TAG_PATTERNS,
    EFFECT_CLASSES,
    GENERIC_CLASS,
    GLOBAL_TARGET_PATTERN,
    KEYWORD_PATTERNS,
    MULLIGAN_PATTERN,
    MULTI_TARGET_PATTERN,
    REACTION_WINDOW_PATTERNS,
    SHOWDOWN_PATTERN,
    STATEFUL_PATTERN,
    TARGET_HINT_PATTERNS,
    TARGET_PATTERN,
    TIMING_PATTERNS,
    TRIGGER_PATTERN,
    EffectClass,
)
from .models import Activation, EffectOperation, EffectProfile, RuleClause, Targeting, Timing
from .utils import dedupe_preserve_order, get_logger

LOGGER = get_logger(__name__)


def derive_keywords(effect: str, base_keywords: Iterable[str]) -> List[str]:
    """Explicit colors/tags first, then keywords detected in ``effect``."""
    keywords = dedupe_preserve_order(keyword for keyword in base_keywords if keyword)
    for keyword, pattern in KEYWORD_PATTERNS:
        if keyword not in keywords and pattern.search(effect):
            keywords.append(keyword)
    return keywords


def derive_clauses(card_id: str, effect: str) -> List[RuleClause]:
    if not effect:
        return []

    fragments = [fragment.strip() for fragment in CLAUSE_SPLIT_PATTERN.split(effect)]
    clauses: List[RuleClause] = []
    for text in (fragment for fragment in fragments if fragment):
        tags = [tag for tag, pattern in CLAUSE_TAG_PATTERNS if pattern.search(text)]
        clauses.append(
            RuleClause(id=f"{card_id}-clause-{len(clauses) + 1}", text=text, tags=tags)
        )
    return clauses


def derive_triggers(effect: str) -> List[str]:
    """Return every trigger phrase up to the next ``.`` or ``;``, in order.

    The trigger word and the clause text are trimmed separately and joined
    without a separator: ``"When you play me, draw 1"`` becomes
    ``"Whenyou play me, draw 1"``, the form stored in activation profiles.
    """
    return [
        f"{match.group(1).strip()}{match.group(2).strip()}"
        for match in TRIGGER_PATTERN.finditer(effect)
    ]


def derive_actions(effect: str) -> List[str]:
    return [label for label, pattern in ACTION_PATTERNS if pattern.search(effect)]


def derive_reaction_windows(effect: str) -> List[str]:
    return [label for label, pattern in REACTION_WINDOW_PATTERNS if pattern.search(effect)]


def derive_timing(effect: str) -> Timing:
    for timing, pattern in TIMING_PATTERNS:
        if pattern.search(effect):
            return timing  # type: ignore[return-value]
    return "passive"


def build_activation(effect: str) -> Activation:
    text = effect or ""
    return Activation(
        timing=derive_timing(text),
        triggers=derive_triggers(text),
        actions=derive_actions(text),
        requires_target=bool(TARGET_PATTERN.search(text)),
        reaction_windows=derive_reaction_windows(text),
        stateful=bool(STATEFUL_PATTERN.search(text)),
    )


# ----------------------------------------------------------------------
# Effect profile


def match_effect_classes(text: str, activation: Activation) -> List[EffectClass]:
    matches = [definition for definition in EFFECT_CLASSES if definition.matches(text)]
    if matches:
        return matches

    inferred = {ACTION_CLASS_MAP[action] for action in activation.actions if action in ACTION_CLASS_MAP}
    if inferred:
        LOGGER.debug("No class pattern matched; inferring %s from actions", sorted(inferred))
        return [definition for definition in EFFECT_CLASSES if definition.id in inferred]
    return [GENERIC_CLASS]


def detect_target_hint(text: str) -> Optional[str]:
    for hint, pattern in TARGET_HINT_PATTERNS:
        if pattern.search(text):
            return hint
    return None


def detect_target_mode(text: str, requires_target: bool) -> str:
    if not requires_target:
        return "none"
    if MULTI_TARGET_PATTERN.search(text):
        return "multiple"
    if GLOBAL_TARGET_PATTERN.search(text):
        return "global"
    return "single"


def detect_priority(text: str, activation: Activation) -> str:
    if activation.timing == "reaction" or activation.reaction_windows:
        if "showdown" in activation.reaction_windows or SHOWDOWN_PATTERN.search(text):
            return "combat"
        return "reaction"
    if activation.timing == "triggered":
        return "any"
    if MULLIGAN_PATTERN.search(text):
        return "setup"
    return "main"


def build_effect_profile(effect: str, activation: Activation) -> EffectProfile:
    text = effect or ""
    classes = match_effect_classes(text, activation)
    operations = [
        EffectOperation(
            type=definition.operation,
            target_hint=definition.target_hint,
            zone=definition.zone,
            automated=definition.automated,
            rule_refs=list(definition.rule_refs),
        )
        for definition in classes
    ]
    references = dedupe_preserve_order(ref for definition in classes for ref in definition.rule_refs)
    targeting = Targeting(
        mode=detect_target_mode(text, activation.requires_target),
        hint=detect_target_hint(text),
        requires_selection=activation.requires_target,
    )
    return EffectProfile(
        classes=[definition.id for definition in classes],
        primary_class=classes[0].id if classes else None,
        operations=operations,
        targeting=targeting,
        priority=detect_priority(text, activation),
        references=references,
        reliability="heuristic" if classes[0] is GENERIC_CLASS else "exact",
    )
