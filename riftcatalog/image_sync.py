"""Download card art listed in the image manifest and store it as WebP."""
from __future__ import annotations

import io
import pathlib
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import requests
from PIL import Image

from .utils import get_logger

LOGGER = get_logger(__name__)

DEFAULT_TIMEOUT = 30
WEBP_QUALITY = 90


@dataclass
class SyncSummary:
    downloaded: int = 0
    skipped: int = 0
    failed: int = 0


def convert_to_webp(payload: bytes, target: pathlib.Path) -> pathlib.Path:
    """Decode ``payload`` with Pillow and save it to ``target`` as WebP."""
    with Image.open(io.BytesIO(payload)) as img:
        if img.mode not in ("RGB", "RGBA"):
            # Palette images keep their alpha in info["transparency"], not in a band.
            has_alpha = "A" in img.getbands() or "transparency" in img.info
            img = img.convert("RGBA" if has_alpha else "RGB")
        target.parent.mkdir(parents=True, exist_ok=True)
        img.save(target, format="WEBP", quality=WEBP_QUALITY)
    return target


class ImageSync:
    """Materialise manifest entries under ``asset_root``.

    One HTTP session is shared by every download and released by
    :meth:`close`.  A failing image is logged and counted; it never stops the
    remaining downloads.
    """

    def __init__(
        self,
        asset_root: str | pathlib.Path,
        session: Optional[Any] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        force: bool = False,
    ) -> None:
        self.asset_root = pathlib.Path(asset_root)
        self.session = session or requests.Session()
        self.timeout = timeout
        self.force = force

    def __enter__(self) -> "ImageSync":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self.session, "close", None)
        if callable(close):
            close()

    def target_for(self, entry: Dict[str, Any]) -> pathlib.Path:
        return self.asset_root / str(entry["localPath"])

    def fetch(self, entry: Dict[str, Any]) -> pathlib.Path:
        response = self.session.get(entry["remote"], timeout=self.timeout)
        response.raise_for_status()
        return convert_to_webp(response.content, self.target_for(entry))

    def sync(self, entries: Iterable[Dict[str, Any]]) -> SyncSummary:
        summary = SyncSummary()
        for entry in entries:
            if not entry.get("remote") or not entry.get("localPath"):
                LOGGER.debug("No remote image for %s", entry.get("id"))
                summary.skipped += 1
                continue

            target = self.target_for(entry)
            if target.exists() and not self.force:
                summary.skipped += 1
                continue

            try:
                self.fetch(entry)
            except (requests.RequestException, OSError) as exc:
                LOGGER.warning("Failed to fetch image for %s: %s", entry.get("id"), exc)
                summary.failed += 1
                continue

            LOGGER.debug("Saved %s", target)
            summary.downloaded += 1
        return summary
