"""Utility helpers shared by the catalog pipeline."""
from __future__ import annotations

import datetime
import logging
import os
import pathlib
from typing import Iterable, List, Optional

LOGGER_NAME = "riftcatalog"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger below the package logger.

    The package logger owns the only handler; module loggers propagate to it
    so a single ``set_log_level`` call affects the whole pipeline.
    """
    base = logging.getLogger(LOGGER_NAME)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        base.addHandler(handler)
        base.setLevel(logging.INFO)
    return logging.getLogger(name or LOGGER_NAME)


def set_log_level(level: str | int) -> None:
    get_logger().setLevel(level)


class PipelineError(RuntimeError):
    """Raised when the pipeline encounters an unrecoverable error."""


class DumpNotFoundError(PipelineError):
    """The raw card dump does not exist."""


class MalformedDumpError(PipelineError):
    """The raw card dump lacks a usable ``names``/``data`` structure."""


class CatalogConfigError(PipelineError):
    """Required catalog configuration is missing."""


class DatasetError(PipelineError):
    """The enriched dataset is missing or unreadable."""


class PublishError(PipelineError):
    """A batch could not be committed within the retry budget."""


def ensure_directory(path: str | os.PathLike[str]) -> pathlib.Path:
    """Create *path* if it does not already exist and return it as Path."""
    directory = pathlib.Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def utc_timestamp(moment: Optional[datetime.datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    moment = moment or datetime.datetime.now(datetime.timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def dedupe_preserve_order(values: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    result: List[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result
