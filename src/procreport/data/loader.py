from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set

import pandas as pd
import requests

from ..errors import LoadError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
FALLBACK_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")


@dataclass
class ParsedCSV:
    headers: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)


def _is_url(source: str | os.PathLike) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


def _decode(raw: bytes, encoding: Optional[str], source: str) -> str:
    encodings: Sequence[str] = (encoding,) if encoding else FALLBACK_ENCODINGS
    for enc in encodings:
        try:
            return raw.decode(enc)
        except (UnicodeDecodeError, LookupError):
            logger.debug("Decoding %s as %s failed", source, enc)
            continue
    raise LoadError(f"Could not decode '{source}' (tried: {', '.join(encodings)}).")


def fetch_csv_text(
    source: str | os.PathLike,
    encoding: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> str:
    if _is_url(source):
        url = str(source)
        client = session or requests
        try:
            response = client.get(url, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise LoadError(f"Could not load CSV file from '{url}': {exc}") from exc
        logger.info("Fetched %d bytes from %s", len(response.content), url)
        return _decode(response.content, encoding, url)

    path = Path(source)
    if not path.is_file():
        raise LoadError(f"CSV file not found: '{path}'. Check data.source in config.yaml.")
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise LoadError(f"Could not read CSV file '{path}': {exc}") from exc
    logger.info("Read %d bytes from %s", len(raw), path)
    return _decode(raw, encoding, str(path))


def _unique_headers(columns: Sequence[str]) -> List[str]:
    used: Set[str] = set()
    headers: List[str] = []
    for col in columns:
        base = str(col).strip()
        name = base
        suffix = 0
        while name in used:
            suffix += 1
            name = f"{base}.{suffix}"
        used.add(name)
        headers.append(name)
    return headers


def _read_frame(text: str, delimiter: str, **kwargs) -> pd.DataFrame:
    return pd.read_csv(
        io.StringIO(text),
        sep=delimiter,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        index_col=False,
        **kwargs,
    )


def _read_ragged(text: str, delimiter: str) -> pd.DataFrame:
    width = len(_read_frame(text, delimiter, nrows=0).columns)
    # usecols makes the tokenizer drop cells past the header width
    return _read_frame(text, delimiter, usecols=list(range(width)))


def parse_csv(text: str, delimiter: str = ",") -> ParsedCSV:
    if not text.strip():
        return ParsedCSV()
    try:
        df = _read_frame(text, delimiter)
    except pd.errors.EmptyDataError:
        return ParsedCSV()
    except pd.errors.ParserError as exc:
        # "Expected N fields in line M, saw K": rows with extra cells
        if "Expected" not in str(exc):
            raise ParseError(f"Malformed CSV: {exc}") from exc
        logger.warning("Rows with extra fields; truncating to header width (%s)", exc)
        try:
            df = _read_ragged(text, delimiter)
        except (pd.errors.ParserError, ValueError) as retry_exc:
            raise ParseError(f"Malformed CSV: {retry_exc}") from retry_exc
    except ValueError as exc:
        raise ParseError(f"Malformed CSV: {exc}") from exc

    df.columns = _unique_headers(df.columns)
    df = df.fillna("")
    rows = df.to_dict(orient="records")
    logger.debug("Parsed %d rows x %d columns", len(rows), len(df.columns))
    return ParsedCSV(headers=list(df.columns), rows=rows)


def load_csv(
    source: str | os.PathLike,
    encoding: Optional[str] = None,
    delimiter: str = ",",
    timeout: float = DEFAULT_TIMEOUT,
) -> ParsedCSV:
    text = fetch_csv_text(source, encoding=encoding, timeout=timeout)
    return parse_csv(text, delimiter=delimiter)


__all__ = ["ParsedCSV", "fetch_csv_text", "parse_csv", "load_csv", "DEFAULT_TIMEOUT"]
