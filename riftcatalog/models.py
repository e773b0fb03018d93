from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = Union[int, float]
Timing = Literal["action", "reaction", "triggered", "passive"]


class CatalogModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class RawCardDump(BaseModel):
    """Columnar source dump: field names plus positionally aligned rows."""

    names: List[str]
    data: List[Any]


class CardCost(CatalogModel):
    """Energy and power cost of a card.

    - energy: digit groups of the raw cost, concatenated. Null when absent.
    - power_symbols: bracketed single-letter symbols, first occurrence order.
    - raw: the normalized source string.
    """

    energy: Optional[int] = None
    power_symbols: List[str] = Field(default_factory=list)
    raw: Optional[str] = None


class RuleClause(CatalogModel):
    id: str
    text: str
    tags: List[str] = Field(default_factory=list)


class Activation(CatalogModel):
    """When and how a card's effect fires."""

    timing: Timing
    triggers: List[str] = Field(default_factory=list)
    actions: List[str] = Field(default_factory=list)
    requires_target: bool = False
    reaction_windows: List[str] = Field(default_factory=list)
    stateful: bool = False


class EffectOperation(CatalogModel):
    type: str
    target_hint: str
    zone: Optional[str] = None
    automated: bool = False
    rule_refs: List[str] = Field(default_factory=list)


class Targeting(CatalogModel):
    mode: Literal["none", "single", "multiple", "global"]
    hint: Optional[str] = None
    requires_selection: bool = False


class EffectProfile(CatalogModel):
    classes: List[str] = Field(default_factory=list)
    primary_class: Optional[str] = None
    operations: List[EffectOperation] = Field(default_factory=list)
    targeting: Targeting
    priority: str
    references: List[str] = Field(default_factory=list)
    reliability: Literal["exact", "heuristic"]


class CardAssets(CatalogModel):
    remote: Optional[str] = None
    local_path: str


class CardPricing(CatalogModel):
    price: Optional[Number] = None
    foil_price: Optional[Number] = None
    currency: Literal["USD"] = "USD"


class CardReferences(CatalogModel):
    market_url: Optional[str] = None
    source: str


class EnrichedCardRecord(CatalogModel):
    """Canonical enriched representation of a single card."""

    id: str
    # Stable external key; falls back to id.
    slug: str
    name: str
    type: Optional[str] = None
    rarity: Optional[str] = None
    set_name: Optional[str] = None

    colors: List[str] = Field(default_factory=list)
    cost: CardCost
    might: Optional[Number] = None
    tags: List[str] = Field(default_factory=list)

    effect: str = ""
    flavor: Optional[str] = None

    # Derived semantics
    keywords: List[str] = Field(default_factory=list)
    activation: Activation
    effect_profile: EffectProfile
    rules: List[RuleClause] = Field(default_factory=list)

    assets: CardAssets
    pricing: CardPricing
    references: CardReferences


class ImageManifestEntry(CatalogModel):
    id: str
    name: str
    remote: Optional[str] = None
    local_path: str


class EnrichedDataset(CatalogModel):
    generated_at: str
    total_cards: int = Field(..., ge=0)
    cards: List[EnrichedCardRecord] = Field(default_factory=list)
