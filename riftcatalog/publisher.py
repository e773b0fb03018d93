"""Push the enriched dataset into the DynamoDB card catalog.

Cards are written with ``batch_write_item`` in chunks of 25, the largest batch
DynamoDB accepts.  A batch may come back with ``UnprocessedItems`` when the
table throttles; only those items are resubmitted, with a linear backoff, and
a chunk that still has leftovers after the attempt budget stops the run.
Chunks committed before the failure stay written.
"""
from __future__ import annotations

import json
import time
from decimal import Decimal
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, TypeVar

import boto3
import botocore.exceptions

from .config import CatalogConfig
from .dataset import load_cards
from .utils import PublishError, get_logger

LOGGER = get_logger(__name__)

BATCH_WRITE_LIMIT = 25
MAX_ATTEMPTS = 5
BACKOFF_MS = 500
DEFAULT_DOMAIN = "neutral"

T = TypeVar("T")
WriteRequest = Dict[str, Any]


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    """Split ``items`` into consecutive lists of at most ``size`` elements."""
    if size < 1:
        raise ValueError("chunk size must be positive")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


def _store_value(value: Any) -> Any:
    # The DynamoDB document layer rejects float; route numbers through Decimal.
    return json.loads(json.dumps(value), parse_float=Decimal)


def map_card_to_item(card: Dict[str, Any], indexed_at_ms: Optional[int] = None) -> Dict[str, Any]:
    """Project an enriched card onto the catalog table's attribute layout."""
    assets = card.get("assets") or {}
    colors = card.get("colors") or []
    item = {
        "CardSlug": card.get("slug"),
        "CardId": card.get("id"),
        "CardName": card.get("name"),
        "CardType": card.get("type"),
        "CardRarity": card.get("rarity"),
        "SetName": card.get("setName"),
        "PrimaryDomain": colors[0] if colors else DEFAULT_DOMAIN,
        "Colors": colors,
        "Tags": card.get("tags") or [],
        "Keywords": card.get("keywords") or [],
        "CardEffect": card.get("effect"),
        "Might": card.get("might"),
        "Cost": card.get("cost"),
        "ActivationProfile": card.get("activation"),
        "RuleClauses": card.get("rules") or [],
        "CardImageUrl": assets.get("remote"),
        "CardImageLocalPath": assets.get("localPath"),
        "Assets": card.get("assets"),
        "Pricing": card.get("pricing"),
        "References": card.get("references"),
        "LastIndexedAt": indexed_at_ms if indexed_at_ms is not None else int(time.time() * 1000),
    }
    return _store_value(item)


def create_dynamodb_client(region: str) -> Any:
    """DynamoDB client that accepts plain Python values (the document layer)."""
    session = boto3.session.Session(region_name=region)
    return session.resource("dynamodb").meta.client


class CatalogPublisher:
    """Chunked, retrying batch writer bound to one table and one client."""

    def __init__(
        self,
        client: Any,
        table_name: str,
        *,
        batch_size: int = BATCH_WRITE_LIMIT,
        max_attempts: int = MAX_ATTEMPTS,
        backoff_ms: int = BACKOFF_MS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.table_name = table_name
        self.batch_size = batch_size
        self.max_attempts = max_attempts
        self.backoff_ms = backoff_ms
        self.sleep = sleep

    def __enter__(self) -> "CatalogPublisher":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self.client, "close", None)
        if callable(close):
            close()

    # ------------------------------------------------------------------
    def upload_batch(self, requests: List[WriteRequest]) -> None:
        """Write one chunk, resubmitting throttled leftovers."""
        unprocessed = list(requests)
        attempts = 0
        while unprocessed and attempts < self.max_attempts:
            try:
                response = self.client.batch_write_item(RequestItems={self.table_name: unprocessed})
            except (botocore.exceptions.BotoCoreError, botocore.exceptions.ClientError) as error:
                raise PublishError(f"Batch write to {self.table_name} failed: {error}") from error
            unprocessed = (response.get("UnprocessedItems") or {}).get(self.table_name) or []
            if unprocessed:
                attempts += 1
                backoff_ms = attempts * self.backoff_ms
                LOGGER.warning(
                    "Batch write throttled (%s items). Retrying in %sms...",
                    len(unprocessed),
                    backoff_ms,
                )
                self.sleep(backoff_ms / 1000)

        if unprocessed:
            raise PublishError(
                f"Failed to write {len(unprocessed)} items after {attempts} attempts"
            )

    def iter_batches(self, cards: Sequence[Dict[str, Any]]) -> Iterator[List[WriteRequest]]:
        requests = [{"PutRequest": {"Item": map_card_to_item(card)}} for card in cards]
        yield from chunk(requests, self.batch_size)

    def publish(self, cards: Sequence[Dict[str, Any]]) -> int:
        """Upload every card and return how many were committed."""
        processed = 0
        for batch in self.iter_batches(cards):
            self.upload_batch(batch)
            processed += len(batch)
            LOGGER.info("Uploaded %s/%s", processed, len(cards))
        return processed


def publish_catalog(
    config: CatalogConfig, client_factory: Callable[[str], Any] = create_dynamodb_client
) -> int:
    """Validate ``config``, load the dataset and publish it."""
    table_name = config.require_table()
    cards = load_cards(config.source_path)
    if not cards:
        LOGGER.info("No cards found to upload.")
        return 0

    LOGGER.info("Uploading %s cards to %s in %s...", len(cards), table_name, config.region)
    try:
        client = client_factory(config.region)
    except botocore.exceptions.BotoCoreError as error:
        raise PublishError(f"Unable to create a DynamoDB client in {config.region}: {error}") from error

    with CatalogPublisher(client, table_name) as publisher:
        uploaded = publisher.publish(cards)
    LOGGER.info("Card catalog upload complete.")
    return uploaded
