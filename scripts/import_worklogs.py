"""Import a timesheet spreadsheet from the command line.

Without ``--confirm`` only the preview is printed; nothing is written.
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.catering_payroll.catering_payroll.container import build_container
from src.catering_payroll.catering_payroll.core.exceptions import BatchRejectedError, DomainError
from src.catering_payroll.catering_payroll.importing.spreadsheet import read_rows


def _json_default(o):
    if isinstance(o, Decimal):
        return int(o) if o == o.to_integral_value() else float(o)
    raise TypeError(f"not JSON serializable: {type(o).__name__}")


def _print(payload: dict) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2, default=_json_default))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Preview or import work logs from a timesheet file.")
    parser.add_argument("file", help="path to .xlsx / .xls / .csv timesheet")
    parser.add_argument("--confirm", action="store_true", help="write the batch if every row is valid")
    parser.add_argument("--overtime-rate", type=Decimal, default=None, help="override pay per overtime interval")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s [%(name)s] %(message)s")

    container = build_container(db_config=dict(settings.DB_CONFIG), salary_config=getattr(settings, "SALARY_CONFIG", None))
    svc = container.import_service

    try:
        rows = read_rows(args.file)
        if args.confirm:
            _print(svc.confirm(rows, overtime_rate=args.overtime_rate).to_dict())
        else:
            _print(svc.preview(rows, overtime_rate=args.overtime_rate).to_dict())
    except BatchRejectedError as e:
        _print({"error": str(e), "results": [r.to_dict() for r in e.results], "summary": e.summary})
        return 1
    except DomainError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
