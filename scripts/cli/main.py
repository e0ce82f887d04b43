#!/usr/bin/env python3
"""Tab ordering CLI: order open files by directory depth, name, or imports."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from _fs import safe_preview_text, write_json
from taborder import (
    STRATEGY_KEYS,
    GroupOrder,
    ImportOrderStrategy,
    LocalHost,
    OpenFile,
    group_open_files,
    open_files_from_paths,
    organize,
    strategy_for_name,
)
from utils import emit_warnings, progress
from .config import load_settings, resolve_alias_config_files, resolve_strategy


def load_tab_list(path: Path, root: Path) -> List[OpenFile]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Failed to read tab list {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise ValueError(f"Invalid tab list {path}: expected a JSON array")
    files: List[OpenFile] = []
    for entry in payload:
        if isinstance(entry, str):
            entry = {"path": entry}
        if not isinstance(entry, dict):
            raise ValueError(f"Invalid tab entry: {safe_preview_text(json.dumps(entry), 120)}")
        raw_path = entry.get("path")
        tab_path = None
        if isinstance(raw_path, str) and raw_path.strip():
            tab_path = os.path.normpath(os.path.join(root, raw_path))
        group = entry.get("group", 0)
        if not isinstance(group, (str, int)):
            group = json.dumps(group, sort_keys=True)
        label = entry.get("label") if isinstance(entry.get("label"), str) else ""
        files.append(OpenFile(path=tab_path, group=group, label=label))
    return files


def collect_open_files(args: argparse.Namespace, root: Path) -> List[OpenFile]:
    files: List[OpenFile] = []
    if getattr(args, "tabs", None):
        files.extend(load_tab_list(Path(args.tabs), root))
    files.extend(open_files_from_paths(getattr(args, "paths", None) or []))
    return files


def group_depths(strategy: ImportOrderStrategy, files: Sequence[OpenFile]) -> Dict[str, int]:
    depths: Dict[str, int] = {}
    for members in group_open_files(files).values():
        depths.update(strategy.depths(members))
    return depths


def order_payload(
    strategy_key: str,
    strategy_name: str,
    results: Sequence[GroupOrder],
    depths: Dict[str, int],
) -> Dict[str, object]:
    groups = []
    for result in results:
        entries = []
        for item in result.files:
            entry: Dict[str, object] = {"path": item.path}
            if item.label:
                entry["label"] = item.label
            if item.path in depths:
                entry["depth"] = depths[item.path]
            entries.append(entry)
        groups.append({"group": result.group, "changed": result.changed, "files": entries})
    return {"strategy": strategy_key, "name": strategy_name, "groups": groups}


def print_order(payload: Dict[str, object]) -> None:
    groups = payload.get("groups", [])
    multiple = isinstance(groups, list) and len(groups) > 1
    for group in groups:  # type: ignore[union-attr]
        if multiple:
            print(f"[group {group['group']}]")
        for entry in group["files"]:
            line = entry.get("path") or entry.get("label") or "-"
            if "depth" in entry:
                line = f"{line}\t{entry['depth']}"
            print(line)


def run_order(args: argparse.Namespace, host: LocalHost, strategy_key: str) -> int:
    strategy = strategy_for_name(strategy_key, host)
    files = host.list_open_files()
    progress(f"Ordering {len(files)} tabs ({strategy.name()})")
    results = organize(files, strategy)
    depths: Dict[str, int] = {}
    if getattr(args, "explain", False) and isinstance(strategy, ImportOrderStrategy):
        depths = group_depths(strategy, files)
    payload = order_payload(strategy_key, strategy.name(), results, depths)
    progress(f"Ordering {len(files)} tabs ({strategy.name()})", done=True)
    if args.json:
        print(json.dumps(payload, ensure_ascii=True, indent=2))
    else:
        print_order(payload)
    if getattr(args, "out", None):
        out_path = write_json(args.out, payload)
        print(f"Wrote {out_path}", file=sys.stderr)
    if isinstance(strategy, ImportOrderStrategy):
        emit_warnings(strategy.warnings)
    return 0


def run_graph(args: argparse.Namespace, host: LocalHost) -> int:
    strategy = ImportOrderStrategy(host)
    files = host.list_open_files()
    progress(f"Building import graph for {len(files)} tabs")
    edges = strategy.matched_edges(files)
    depths = strategy.depths(files)
    progress(f"Building import graph for {len(files)} tabs", done=True)
    if args.json:
        payload = {
            "edges": [{"from": src, "to": dst} for src, targets in edges.items() for dst in targets],
            "depths": depths,
        }
        print(json.dumps(payload, ensure_ascii=True, indent=2))
    else:
        for src, targets in edges.items():
            for dst in targets:
                print(f"{src} -> {dst}")
        for path, depth in sorted(depths.items(), key=lambda item: (item[1], item[0])):
            print(f"{depth}\t{path}")
    emit_warnings(strategy.warnings)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Order open editor tabs")
    parser.add_argument("--root", default=".", help="Workspace root (default: .)")
    parser.add_argument(
        "--strategy",
        choices=list(STRATEGY_KEYS),
        default=None,
        help="Sort strategy (default: settings file, then fileSystem)",
    )
    parser.add_argument(
        "--alias-config",
        action="append",
        default=None,
        help="Alias configuration file name, relative to the root (repeatable)",
    )

    subparsers = parser.add_subparsers(dest="command")

    def add_inputs(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("paths", nargs="*", help="Open files, in tab order (relative to the current directory)")
        sub.add_argument("--tabs", default=None, help="JSON tab list with path/group entries (paths relative to --root)")
        sub.add_argument("--json", action="store_true", help="Emit JSON")

    order_parser = subparsers.add_parser("order", help="Print the sorted tab order")
    add_inputs(order_parser)
    order_parser.add_argument(
        "--explain", action="store_true", help="Show import depth per file (imports strategy)"
    )
    order_parser.add_argument(
        "--out", default=None, help="Also write JSON output (relative to workspace/ or absolute)"
    )

    graph_parser = subparsers.add_parser("graph", help="Show import edges between open files")
    add_inputs(graph_parser)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else sys.argv[1:])
    if not args.command:
        parser.print_help()
        return 1

    warnings: List[str] = []
    root = Path(os.path.abspath(args.root))
    settings, _ = load_settings(root, warnings)
    try:
        files = collect_open_files(args, root)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    host = LocalHost(
        root=str(root),
        open_files=files,
        alias_config_files=resolve_alias_config_files(args.alias_config, settings),
    )
    emit_warnings(warnings)

    if args.command == "graph":
        return run_graph(args, host)
    if args.command == "order":
        strategy_key = resolve_strategy(args.strategy, settings)
        try:
            return run_order(args, host, strategy_key)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
