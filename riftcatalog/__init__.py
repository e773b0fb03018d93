"""Riftbound card catalog enrichment and publishing pipeline."""

from .models import (
    Activation,
    CardCost,
    EffectProfile,
    EnrichedCardRecord,
    EnrichedDataset,
    ImageManifestEntry,
    RawCardDump,
    RuleClause,
)
from .normalizer import listify, normalize, parse_cost, to_number
from .effect_parser import (
    build_activation,
    build_effect_profile,
    derive_actions,
    derive_clauses,
    derive_keywords,
    derive_reaction_windows,
    derive_timing,
    derive_triggers,
)
from .transform import EnrichmentTransformer, enrich_dump, enrich_record, load_dump
from .publisher import CatalogPublisher, chunk, map_card_to_item, publish_catalog
from .config import CatalogConfig
from .utils import (
    CatalogConfigError,
    DatasetError,
    DumpNotFoundError,
    MalformedDumpError,
    PipelineError,
    PublishError,
)
from .cli import main

__all__ = [
    "Activation",
    "CardCost",
    "EffectProfile",
    "EnrichedCardRecord",
    "EnrichedDataset",
    "ImageManifestEntry",
    "RawCardDump",
    "RuleClause",
    "listify",
    "normalize",
    "parse_cost",
    "to_number",
    "build_activation",
    "build_effect_profile",
    "derive_actions",
    "derive_clauses",
    "derive_keywords",
    "derive_reaction_windows",
    "derive_timing",
    "derive_triggers",
    "EnrichmentTransformer",
    "enrich_dump",
    "enrich_record",
    "load_dump",
    "CatalogPublisher",
    "chunk",
    "map_card_to_item",
    "publish_catalog",
    "CatalogConfig",
    "CatalogConfigError",
    "DatasetError",
    "DumpNotFoundError",
    "MalformedDumpError",
    "PipelineError",
    "PublishError",
    "main",
]
