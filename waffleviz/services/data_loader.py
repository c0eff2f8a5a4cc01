from __future__ import annotations

import asyncio
import json
import logging
from io import StringIO
from pathlib import Path, PurePosixPath
from typing import Any, Awaitable, Mapping, Protocol
from urllib.parse import urlsplit

import pandas as pd
import requests

from ..core.settings import get_settings
from .errors import LoadError, UnsupportedSourceError

logger = logging.getLogger(__name__)

ACCEPTABLE_EXTENSIONS = {"json", "tsv", "csv"}

_SEPARATORS = {"csv": ",", "tsv": "\t"}


class DataLoader(Protocol):
    def load(self, location: str) -> Awaitable[pd.DataFrame]:
        ...


def is_acceptable_extension(extension: str) -> bool:
    return extension.lower() in ACCEPTABLE_EXTENSIONS


def file_extension(location: str) -> str:
    """Return the lower-cased extension of a path or URL, ignoring any query string."""

    path = urlsplit(location).path or location
    return PurePosixPath(path).suffix.lstrip(".").lower()


def get_data_type(raw: Any) -> str:
    """Classify the shape of user supplied data.

    Strings that parse as JSON are inline data; any other string is a location.
    """

    if isinstance(raw, pd.DataFrame):
        return "frame"
    if isinstance(raw, str):
        try:
            json.loads(raw)
        except ValueError:
            return "location"
        return "json"
    if isinstance(raw, Mapping):
        return "object"
    if isinstance(raw, (list, tuple)):
        return "array"
    raise TypeError(f"Unsupported dataset input of type {type(raw).__name__}")


def to_frame(raw: Any) -> pd.DataFrame:
    """Normalize in-memory data into a DataFrame, keeping record order and raw values."""

    kind = get_data_type(raw)
    if kind == "frame":
        return raw
    if kind == "json":
        parsed = json.loads(raw)
        if not isinstance(parsed, (list, dict)):
            raise ValueError("Inline JSON data must be an array of records or a single record.")
        return to_frame(parsed)
    if kind == "object":
        return pd.DataFrame([dict(raw)])
    if kind == "array":
        records = list(raw)
        for idx, record in enumerate(records):
            if not isinstance(record, Mapping):
                raise ValueError(f"record[{idx}] must be a mapping of column name to value")
        return pd.DataFrame.from_records([dict(rec) for rec in records])
    raise ValueError(f"'{raw}' is a location; load it with a DataLoader first.")


class FileDataLoader:
    """Load csv, tsv and json datasets from disk or over HTTP."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout if timeout is not None else get_settings().load_timeout

    def load(self, location: str) -> Awaitable[pd.DataFrame]:
        extension = file_extension(location)
        if not is_acceptable_extension(extension):
            raise UnsupportedSourceError(location, extension)
        return self._load(location, extension)

    async def _load(self, location: str, extension: str) -> pd.DataFrame:
        logger.info("Loading %s dataset from %s", extension, location)
        try:
            frame = await asyncio.to_thread(self._read, location, extension)
        except (OSError, ValueError, requests.RequestException) as exc:
            raise LoadError(f"Failed to load '{location}': {exc}") from exc
        logger.info("Loaded %d records with columns %s", len(frame), list(frame.columns))
        return frame

    def _read(self, location: str, extension: str) -> pd.DataFrame:
        text = self._read_text(location)
        if extension == "json":
            parsed = json.loads(text)
            if not isinstance(parsed, (list, dict)):
                raise ValueError("JSON data must be an array of records or a single record")
            return to_frame(parsed)
        # Values stay strings, as delimited text carries no types.
        return pd.read_csv(
            StringIO(text),
            sep=_SEPARATORS[extension],
            dtype=object,
            keep_default_na=False,
        )

    def _read_text(self, location: str) -> str:
        if urlsplit(location).scheme in {"http", "https"}:
            response = requests.get(location, timeout=self.timeout)
            response.raise_for_status()
            return response.text
        return Path(location).read_text(encoding="utf-8")
