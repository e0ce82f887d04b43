from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from .constants import MIN_SUFFIX_SEGMENTS


def path_segments(path: str) -> List[str]:
    return path.replace("\\", "/").split("/")


def common_suffix_length(left: Sequence[str], right: Sequence[str]) -> int:
    length = 0
    for a, b in zip(reversed(left), reversed(right)):
        if a != b:
            break
        length += 1
    return length


class OpenPathIndex:
    """Open-file paths in tab order, pre-split for suffix comparison."""

    def __init__(self, paths: Iterable[str]) -> None:
        self.paths: List[str] = []
        self._segments: Dict[str, List[str]] = {}
        for path in paths:
            if path in self._segments:
                continue
            self.paths.append(path)
            self._segments[path] = path_segments(path)

    def __iter__(self):
        return iter(self.paths)

    def match(self, resolved: str, *, min_segments: int = MIN_SUFFIX_SEGMENTS) -> Optional[str]:
        """Map ``resolved`` onto an open path, exactly or by trailing segments.

        Worktrees and symlinks make the same file reachable under different
        prefixes, so the open path sharing the longest run of trailing
        segments wins, provided it shares at least ``min_segments`` of them.
        Ties go to the path opened first.
        """
        if resolved in self._segments:
            return resolved
        wanted = path_segments(resolved)
        best: Optional[str] = None
        best_length = 0
        for path in self.paths:
            length = common_suffix_length(wanted, self._segments[path])
            if length >= min_segments and length > best_length:
                best = path
                best_length = length
        return best


def match_open_path(resolved: str, open_paths: Iterable[str]) -> Optional[str]:
    return OpenPathIndex(open_paths).match(resolved)
