"""Runtime configuration for the catalog publisher.

Environment variables are read here and nowhere else; the CLI passes its
option values through :meth:`CatalogConfig.with_overrides`.
"""
from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .json_writer import ENRICHED_FILENAME
from .utils import CatalogConfigError

TABLE_ENV = "CARD_CATALOG_TABLE"
REGION_ENV = "AWS_REGION"
SOURCE_ENV = "CARD_CATALOG_SOURCE"

DEFAULT_REGION = "us-east-1"
DEFAULT_SOURCE = pathlib.Path("data") / ENRICHED_FILENAME


@dataclass(frozen=True)
class CatalogConfig:
    """Validated publisher settings.

    Attributes:
        table_name: Target catalog table, or None when unset.
        region: AWS region hosting the table.
        source_path: Enriched dataset to publish.
    """

    table_name: Optional[str]
    region: str
    source_path: pathlib.Path

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CatalogConfig":
        env = os.environ if environ is None else environ
        table_name = (env.get(TABLE_ENV) or "").strip() or None
        region = (env.get(REGION_ENV) or "").strip() or DEFAULT_REGION
        source = (env.get(SOURCE_ENV) or "").strip()
        source_path = pathlib.Path(source) if source else DEFAULT_SOURCE
        return cls(
            table_name=table_name,
            region=region,
            source_path=source_path.expanduser().resolve(),
        )

    def with_overrides(
        self,
        table_name: Optional[str] = None,
        region: Optional[str] = None,
        source_path: Optional[pathlib.Path] = None,
    ) -> "CatalogConfig":
        return replace(
            self,
            table_name=(table_name or "").strip() or self.table_name,
            region=(region or "").strip() or self.region,
            source_path=source_path.expanduser().resolve() if source_path else self.source_path,
        )

    def require_table(self) -> str:
        if not self.table_name:
            raise CatalogConfigError(
                f"{TABLE_ENV} must be set (or pass --table) before publishing the catalog"
            )
        return self.table_name
