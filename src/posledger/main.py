from __future__ import annotations

import argparse
import logging

from posledger.application.container import build_container
from posledger.config import get_app_paths
from posledger.logging_config import setup_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="posledger", description="Multi-store POS ledger")
    sub = parser.add_subparsers(dest="command", required=True)

    summary = sub.add_parser("summary", help="print dashboard figures")
    summary.add_argument("--store", default=None, help="store id (default: all stores)")

    sub.add_parser("reset", help="reinstall the seed dataset (destructive)")
    sub.add_parser("health", help="storage integrity and orphaned rows")

    export = sub.add_parser("export", help="write the ledger views to an .xlsx workbook")
    export.add_argument("path")
    export.add_argument("--store", default=None, help="store id (default: all stores)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    paths = get_app_paths()
    setup_logging(paths.logs_dir, level=logging.INFO)
    app = build_container(paths.db_path)

    if args.command == "summary":
        s = app.reporting.dashboard(args.store)
        print(f"Revenue:        {s.revenue:,.2f}")
        print(f"Sales today:    {s.sales_today:,.2f}")
        print(f"Units on hand:  {s.units_on_hand}")
        print(f"Stock value:    {s.stock_value:,.2f}")
        print(f"Cash balance:   {s.cash_balance:,.2f}")
        for row in s.low_stock:
            print(f"  low stock: {row.product_name} ({row.quantity})")
    elif args.command == "reset":
        app.operations.reset()
        print("Ledger reset to seed data.")
    elif args.command == "health":
        report = app.operations.run_health_check()
        print(f"integrity={report.storage_integrity} orphans={report.orphans} counts={report.counts}")
        return 0 if report.ok else 1
    elif args.command == "export":
        app.reporting.export_ledger_excel(args.path, args.store)
        print(f"Exported to {args.path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
