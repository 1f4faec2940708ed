from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Set

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import seaborn as sns

from ..analysis.view_model import ViewModel
from ..utils.io import ensure_dirs, safe_filename

COLORS = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884d8", "#82ca9d", "#ffc658"]
BAR_COLOR = "#60a5fa"


def _savefig(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(path, bbox_inches="tight")
    plt.close()


def _procedure_filenames(names: List[str]) -> Dict[str, str]:
    used: Set[str] = set()
    out: Dict[str, str] = {}
    for name in names:
        base = safe_filename(name, fallback="procedure")
        slug = base
        suffix = 0
        while slug in used:
            suffix += 1
            slug = f"{base}_{suffix}"
        used.add(slug)
        out[name] = f"procedure_{slug}.png"
    return out


def render_procedure_chart(name: str, points: List[Dict], path: Path) -> Path:
    years = [p["name"] for p in points]
    counts = [p["conteo"] for p in points]
    plt.figure(figsize=(4, 3))
    sns.barplot(x=years, y=counts, color=BAR_COLOR)
    plt.title(f"{name} per year")
    plt.xlabel("Year")
    plt.ylabel("Count")
    _savefig(path)
    return path


def render_totals_chart(totals: List[Dict], path: Path) -> Path:
    names = [t["name"] for t in totals]
    values = [t["value"] for t in totals]
    palette = [COLORS[i % len(COLORS)] for i in range(len(names))]
    plt.figure(figsize=(max(6, 0.6 * len(names)), 6))
    sns.barplot(x=names, y=values, hue=names, palette=palette, legend=False)
    plt.xticks(rotation=45, ha="right")
    plt.title("Procedure totals")
    plt.ylabel("Count")
    _savefig(path)
    return path


def render_report(view_model: ViewModel, out_dir: str | os.PathLike) -> List[Path]:
    out_dir = Path(out_dir)
    out_figs = out_dir / "figs"
    out_tabs = out_dir / "tables"
    ensure_dirs(out_figs, out_tabs)

    written: List[Path] = []
    detail_csv = out_tabs / "procedure_detail.csv"
    view_model.series_frame().rename(columns={"name": "year"}).to_csv(detail_csv, index=False)
    written.append(detail_csv)
    totals_csv = out_tabs / "procedure_totals.csv"
    view_model.totals_frame().rename(columns={"name": "procedure"}).to_csv(totals_csv, index=False)
    written.append(totals_csv)

    if view_model.is_empty:
        return written

    filenames = _procedure_filenames(view_model.procedure_names)
    for name, points in view_model.per_procedure_series.items():
        written.append(render_procedure_chart(name, points, out_figs / filenames[name]))
    written.append(render_totals_chart(view_model.totals, out_figs / "procedure_totals.png"))
    return written


__all__ = ["render_report", "render_procedure_chart", "render_totals_chart", "COLORS"]
