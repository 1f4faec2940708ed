"""
build_report.py
~~~~~~~~~~~~~~~
Load the procedure CSV, print per-procedure totals and export the bar charts
and detail tables under ``outputs/`` (figs/ and tables/).

Exit status is 1 when the CSV cannot be loaded or parsed.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from procreport.analysis.aggregate import LEGACY_POLICY, policy_from_config
from procreport.config import DEFAULT_CONFIG_PATH, DEFAULT_SOURCE, configure_logging, load_config
from procreport.data.loader import DEFAULT_TIMEOUT
from procreport.report.state import ReportStatus, load_report


def main() -> int:
    ap = argparse.ArgumentParser(
        description="Aggregate procedures per year from a CSV and export charts/tables."
    )
    ap.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG_PATH),
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    ap.add_argument("--source", default=None, help="CSV path or URL; overrides data.source.")
    ap.add_argument(
        "--legacy",
        action="store_true",
        help="Only PROCEDIMENTO columns, case-sensitive names, raw years, discovery order.",
    )
    ap.add_argument("--no-figures", action="store_true", help="Skip PNG/CSV export.")
    args = ap.parse_args()

    cfg = load_config(args.config)
    configure_logging(cfg)
    data_cfg = cfg.get("data", {}) or {}
    policy = LEGACY_POLICY if args.legacy else policy_from_config(cfg)

    session = load_report(
        source=args.source or data_cfg.get("source", DEFAULT_SOURCE),
        policy=policy,
        encoding=data_cfg.get("encoding"),
        delimiter=str(data_cfg.get("delimiter", ",")),
        timeout=float(data_cfg.get("timeout_seconds", DEFAULT_TIMEOUT)),
    )

    if session.status is ReportStatus.ERROR:
        print(f"Error loading the data: {session.message}")
        return 1
    if session.status is ReportStatus.EMPTY:
        print("No procedure data found to display.")
        return 0

    vm = session.view_model
    width = max(len(t["name"]) for t in vm.totals)
    for entry in vm.totals:
        years = "  ".join(f"{p['name']}={p['conteo']}" for p in vm.per_procedure_series[entry["name"]])
        print(f"{entry['name']:<{width}}  {entry['value']:>6}  ({years})")
    print(f"Total procedures: {vm.grand_total}")

    if not args.no_figures:
        from procreport.report.figures import render_report

        out_dir = Path(cfg.get("paths", {}).get("outputs", "outputs"))
        written = render_report(vm, out_dir)
        print(f"✓ Wrote {len(written)} files → {out_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
