from __future__ import annotations

from collections import deque
from typing import Callable, Dict, Iterable, List, Optional, Set

from .matching import OpenPathIndex

DependencyGraph = Dict[str, Set[str]]


def build_dependency_graph(
    paths: Iterable[Optional[str]],
    references_for: Callable[[str], Set[str]],
) -> DependencyGraph:
    """Map each open path to the resolved paths it references.

    Entries without a path are skipped. ``references_for`` returns resolved
    paths only; unresolvable references are already gone at that point.
    """
    graph: DependencyGraph = {}
    for path in paths:
        if not path or path in graph:
            continue
        graph[path] = set(references_for(path))
    return graph


def match_edges(graph: DependencyGraph, index: OpenPathIndex) -> Dict[str, List[str]]:
    """Rewrite ``graph`` onto open paths, dropping targets that are not open."""
    matched: Dict[str, List[str]] = {path: [] for path in index}
    resolved_to_open: Dict[str, Optional[str]] = {}
    for path in index:
        targets: List[str] = []
        for resolved in sorted(graph.get(path, ())):
            if resolved not in resolved_to_open:
                resolved_to_open[resolved] = index.match(resolved)
            target = resolved_to_open[resolved]
            if target is not None and target not in targets:
                targets.append(target)
        matched[path] = targets
    return matched


def compute_depths(edges: Dict[str, List[str]], paths: Iterable[str]) -> Dict[str, int]:
    """Layer ``paths`` by longest import chain from an un-imported file.

    Kahn's algorithm: files nothing imports start at depth 0, and a file's
    depth is one more than its deepest importer. Files still holding
    incoming edges once the queue drains sit on or behind a cycle; they all
    get one band past the deepest assigned file.
    """
    order = list(dict.fromkeys(paths))
    incoming: Dict[str, int] = {path: 0 for path in order}
    for source in order:
        for target in edges.get(source, []):
            if target in incoming:
                incoming[target] += 1

    depths: Dict[str, int] = {}
    queue = deque()
    for path in order:
        if incoming[path] == 0:
            depths[path] = 0
            queue.append(path)

    while queue:
        current = queue.popleft()
        current_depth = depths[current]
        for target in edges.get(current, []):
            if target not in incoming:
                continue
            incoming[target] -= 1
            depths[target] = max(depths.get(target, 0), current_depth + 1)
            if incoming[target] == 0:
                queue.append(target)

    # never enqueued, including cycle members that picked up a partial depth
    max_depth = max(depths.values(), default=0)
    for path in order:
        if incoming[path] > 0:
            depths[path] = max_depth + 1
    return depths
