from __future__ import annotations

import functools
import os
import re
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from .aliases import AliasTable, load_alias_table
from .constants import (
    STRATEGY_ALPHABETICAL,
    STRATEGY_FILE_SYSTEM,
    STRATEGY_IMPORTS,
    STRATEGY_KEYS,
)
from .extract import extract_references
from .graph import DependencyGraph, build_dependency_graph, compute_depths, match_edges
from .host import Host, OpenFile
from .imports import resolve_reference
from .matching import OpenPathIndex

_DIGITS_RE = re.compile(r"(\d+)")


def natural_key(text: str) -> Tuple[Tuple[int, Any], ...]:
    """Case-insensitive key that compares digit runs numerically."""
    parts: List[Tuple[int, Any]] = []
    for chunk in _DIGITS_RE.split(text):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk)))
        else:
            parts.append((1, chunk.casefold()))
    return tuple(parts)


def natural_compare(left: str, right: str) -> int:
    a, b = natural_key(left), natural_key(right)
    return (a > b) - (a < b)


def _compare_missing(path_a: Optional[str], path_b: Optional[str]) -> Optional[int]:
    if not path_a and not path_b:
        return 0
    if not path_a:
        return 1
    if not path_b:
        return -1
    return None


class SortStrategy:
    def name(self) -> str:
        raise NotImplementedError

    def order(self, files: Sequence[OpenFile]) -> List[OpenFile]:
        raise NotImplementedError


class AlphabeticalStrategy(SortStrategy):
    def name(self) -> str:
        return "Alphabetical"

    def order(self, files: Sequence[OpenFile]) -> List[OpenFile]:
        def compare(a: OpenFile, b: OpenFile) -> int:
            missing = _compare_missing(a.path, b.path)
            if missing is not None:
                return missing
            return natural_compare(a.path or "", b.path or "")

        return sorted(files, key=functools.cmp_to_key(compare))


class FileSystemStrategy(SortStrategy):
    def __init__(self, host: Host) -> None:
        self.host = host

    def name(self) -> str:
        return "File System Hierarchy"

    @staticmethod
    def path_depth(relative: str) -> int:
        if relative in ("", "."):
            return 0
        return len(relative.replace("\\", "/").split("/")) - 1

    def order(self, files: Sequence[OpenFile]) -> List[OpenFile]:
        root = self.host.workspace_root()

        def relative(path: str) -> str:
            rel = os.path.relpath(path, root) if root else path
            return rel.replace("\\", "/")

        def compare(a: OpenFile, b: OpenFile) -> int:
            missing = _compare_missing(a.path, b.path)
            if missing is not None:
                return missing
            rel_a = relative(a.path or "")
            rel_b = relative(b.path or "")
            depth_a = self.path_depth(rel_a)
            depth_b = self.path_depth(rel_b)
            if depth_a != depth_b:
                return depth_a - depth_b
            dir_a = os.path.dirname(rel_a)
            dir_b = os.path.dirname(rel_b)
            if dir_a != dir_b:
                if dir_b.startswith(f"{dir_a}/"):
                    return -1
                if dir_a.startswith(f"{dir_b}/"):
                    return 1
            return natural_compare(rel_a, rel_b)

        return sorted(files, key=functools.cmp_to_key(compare))


class ImportOrderStrategy(SortStrategy):
    """Order tabs so importers come before the files they import.

    Extracted references and the alias table live for as long as the
    instance does; ``invalidate`` is the only thing that drops them, so an
    edited file keeps its old references until then.
    """

    def __init__(self, host: Host) -> None:
        self.host = host
        self.reference_cache: Dict[str, Set[str]] = {}
        self.alias_table = AliasTable()
        self.graph: DependencyGraph = {}
        self.warnings: List[str] = []

    def name(self) -> str:
        return "Import Order"

    def aliases(self) -> AliasTable:
        return load_alias_table(self.host, self.warnings, table=self.alias_table)

    def read_text(self, path: str) -> Optional[str]:
        text = self.host.read_open_text(path)
        if text is not None:
            return text
        try:
            return self.host.read_file(path).decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self.warnings.append(f"Failed to read {path}: {exc}")
            return None

    def references_for(self, path: str) -> Set[str]:
        cached = self.reference_cache.get(path)
        if cached is not None:
            return cached
        resolved: Set[str] = set()
        text = self.read_text(path)
        if text:
            for module in extract_references(text):
                target = resolve_reference(
                    module,
                    path,
                    exists=self.host.file_exists,
                    load_aliases=self.aliases,
                )
                if target:
                    resolved.add(target)
        self.reference_cache[path] = resolved
        return resolved

    def matched_edges(self, files: Sequence[OpenFile]) -> Dict[str, List[str]]:
        self.graph = build_dependency_graph((f.path for f in files), self.references_for)
        index = OpenPathIndex(f.path for f in files if f.path)
        return match_edges(self.graph, index)

    def depths(self, files: Sequence[OpenFile]) -> Dict[str, int]:
        edges = self.matched_edges(files)
        return compute_depths(edges, edges.keys())

    def order(self, files: Sequence[OpenFile]) -> List[OpenFile]:
        scores = self.depths(files)

        def sort_key(item: OpenFile) -> Tuple[int, int, str]:
            if not item.path:
                return (1, 0, "")
            return (0, scores.get(item.path, 0), item.path)

        return sorted(files, key=sort_key)

    def invalidate(self) -> None:
        self.reference_cache.clear()
        self.graph = {}
        self.alias_table.reset()
        self.warnings.clear()


def strategy_for_name(key: str, host: Host) -> SortStrategy:
    if key == STRATEGY_IMPORTS:
        return ImportOrderStrategy(host)
    if key == STRATEGY_ALPHABETICAL:
        return AlphabeticalStrategy()
    if key == STRATEGY_FILE_SYSTEM:
        return FileSystemStrategy(host)
    raise ValueError(f"Unknown sort strategy: {key!r} (expected one of {', '.join(STRATEGY_KEYS)})")
