"""Environment contract for the ordering core.

The editor (or the CLI) supplies open files and answers read/existence
probes through a ``Host``. ``LocalHost`` is the filesystem-backed one.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Hashable, List, Optional, Protocol, Sequence

from .constants import DEFAULT_ALIAS_CONFIG_FILES


@dataclass(frozen=True)
class OpenFile:
    path: Optional[str]
    group: Hashable = 0
    label: str = ""


class Host(Protocol):
    def list_open_files(self) -> Sequence[OpenFile]: ...

    def read_open_text(self, path: str) -> Optional[str]: ...

    def read_file(self, path: str) -> bytes: ...

    def file_exists(self, path: str) -> bool: ...

    def workspace_root(self) -> Optional[str]: ...

    def alias_config_candidates(self) -> Sequence[str]: ...


@dataclass
class LocalHost:
    """Host backed by the local filesystem.

    ``buffers`` maps absolute paths to in-memory text that takes precedence
    over the on-disk content, the way an editor's unsaved documents do.
    """

    root: Optional[str] = None
    open_files: List[OpenFile] = field(default_factory=list)
    alias_config_files: Sequence[str] = DEFAULT_ALIAS_CONFIG_FILES
    buffers: Dict[str, str] = field(default_factory=dict)

    def list_open_files(self) -> Sequence[OpenFile]:
        return list(self.open_files)

    def read_open_text(self, path: str) -> Optional[str]:
        return self.buffers.get(path)

    def read_file(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def file_exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def workspace_root(self) -> Optional[str]:
        if not self.root:
            return None
        return os.path.abspath(self.root)

    def alias_config_candidates(self) -> Sequence[str]:
        return list(self.alias_config_files)


def open_files_from_paths(paths: Sequence[str], *, group: Hashable = 0) -> List[OpenFile]:
    return [OpenFile(path=os.path.abspath(path), group=group) for path in paths]
