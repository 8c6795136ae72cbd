"""Sort a CSV file from the command line.

Replays header selections against a CSV table and prints the reordered rows.
Each ``--by`` acts like a header click: the first is a plain click, later
ones are Shift+clicks, and the header is clicked once more when the key does
not yet point in the requested direction (``:asc`` by default).
With ``--table-id`` the sort state is restored before the clicks and saved
afterwards, so repeated runs behave like a table reopened in a new session.

Example:
  tablesorter-csv standings.csv --by Pts:desc --by Team --type 3=date:DD/MM/YYYY
  tablesorter-csv standings.csv --table-id standings --state-dir ./state --json
"""

from __future__ import annotations

import argparse
import csv
import io
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence, Tuple

from tablesorter.domain.models import ColumnType
from tablesorter.services.column_registry import ColumnRegistry
from tablesorter.services.event_bus import EventBus, SortEvent
from tablesorter.services.settings_service import SettingsService
from tablesorter.services.sort_state_persistence import JsonFileSortStateStore, LoadStatus
from tablesorter.services.table_sort_controller import TableSortController


def _resolve_column(token: str, headers: Optional[List[str]]) -> int:
    token = token.strip()
    if token.isdigit():
        return int(token)
    if headers is not None and token in headers:
        return headers.index(token)
    raise ValueError(f"unknown column {token!r}")


def _parse_by(value: str, headers: Optional[List[str]]) -> Tuple[int, bool]:
    column, _, direction = value.rpartition(":")
    if not column or direction.lower() not in ("asc", "desc"):
        column, direction = value, "asc"
    return _resolve_column(column, headers), direction.lower() == "desc"


def _parse_type(value: str, headers: Optional[List[str]]) -> Tuple[int, str, Optional[str]]:
    column, sep, rest = value.partition("=")
    if not sep:
        raise ValueError(f"expected COL=TYPE[:FORMAT], got {value!r}")
    type_name, _, date_format = rest.partition(":")
    return _resolve_column(column, headers), type_name, date_format or None


def _read_rows(path: str, delimiter: str) -> List[List[str]]:
    if path == "-":
        return list(csv.reader(sys.stdin, delimiter=delimiter))
    with open(path, "r", encoding="utf-8", newline="") as f:
        return list(csv.reader(f, delimiter=delimiter))


def _build_registry(
    column_count: int, types: Dict[int, Tuple[str, Optional[str]]], exclude: Sequence[int]
) -> ColumnRegistry:
    registry = ColumnRegistry()
    for position in range(column_count):
        if position in exclude:
            continue
        forced, date_format = types.get(position, (None, None))
        registry.register(position, forced_type=forced, date_format=date_format)
    return registry


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tablesorter-csv", description="Multi-column sort for CSV tables"
    )
    p.add_argument("csv_path", help="CSV file to sort ('-' for stdin)")
    p.add_argument(
        "--by",
        action="append",
        default=[],
        metavar="COL[:asc|desc]",
        help="Column index or header name to sort by (repeatable; later keys extend)",
    )
    p.add_argument(
        "--type",
        action="append",
        default=[],
        metavar="COL=TYPE[:FORMAT]",
        help=f"Force a column type ({', '.join(t.value for t in ColumnType)}), optional date format",
    )
    p.add_argument(
        "--exclude", action="append", default=[], metavar="COL", help="Column not sortable"
    )
    p.add_argument("--no-header", action="store_true", help="First row is data, not headers")
    p.add_argument("--delimiter", default=",", help="CSV delimiter (default ',')")
    p.add_argument("--table-id", help="Restore and save sort state under this table id")
    p.add_argument("--state-dir", help="Directory for saved sort state")
    p.add_argument("--json", action="store_true", help="Emit JSON instead of CSV")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default WARNING)")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        table = _read_rows(args.csv_path, args.delimiter)
    except OSError as exc:
        print(f"error: cannot read {args.csv_path}: {exc}", file=sys.stderr)
        return 2
    headers: Optional[List[str]] = None
    if table and not args.no_header:
        headers, table = table[0], table[1:]
    column_count = max([len(headers or [])] + [len(r) for r in table])

    try:
        types = {}
        for value in args.type:
            index, type_name, date_format = _parse_type(value, headers)
            types[index] = (type_name, date_format)
        exclude = [_resolve_column(v, headers) for v in args.exclude]
        selections = [_parse_by(v, headers) for v in args.by]
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    registry = _build_registry(column_count, types, exclude)
    settings = SettingsService(persist_sort_state=bool(args.table_id))
    if args.state_dir:
        settings.state_dir = args.state_dir
    store = JsonFileSortStateStore(settings.state_dir) if args.table_id else None
    bus = EventBus()
    warnings: List[Dict[str, Any]] = []
    for evt in (SortEvent.SORT_STATE_LOAD_FAILED, SortEvent.SORT_STATE_SAVE_FAILED):
        bus.subscribe(evt, lambda e: warnings.append({"event": e.name, **e.payload}))
    controller = TableSortController(
        args.table_id or "cli", registry, store=store, bus=bus, settings=settings
    )
    status = controller.restore() if args.table_id else LoadStatus.ABSENT

    for i, (index, descending) in enumerate(selections):
        extend = i > 0
        if not controller.select(index, extend):
            print(f"warning: column {index} is not sortable", file=sys.stderr)
            continue
        key = controller.spec.key_for(index)
        if key is not None and key.ascending == descending:
            controller.select(index, extend)

    rows = controller.sort_rows(table)
    if args.json:
        payload = {
            "headers": headers,
            "spec": [{"index": k.index, "asc": k.ascending} for k in controller.spec],
            "restore_status": status.value,
            "warnings": warnings,
            "rows": rows,
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        out = io.StringIO()
        writer = csv.writer(out, delimiter=args.delimiter, lineterminator="\n")
        if headers is not None:
            writer.writerow(headers)
        writer.writerows(rows)
        sys.stdout.write(out.getvalue())
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
