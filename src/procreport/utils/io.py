from __future__ import annotations

import re
import unicodedata
from pathlib import Path


def ensure_dirs(*dirs: Path) -> None:
    for d in dirs:
        d.mkdir(parents=True, exist_ok=True)


def safe_filename(name: str, fallback: str = "item") -> str:
    # "Biópsia de Colo" -> "biopsia_de_colo"
    ascii_name = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^A-Za-z0-9]+", "_", ascii_name).strip("_").lower()
    return slug or fallback


__all__ = ["ensure_dirs", "safe_filename"]
