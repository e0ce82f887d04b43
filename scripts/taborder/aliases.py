from __future__ import annotations

import enum
import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .host import Host


class LoadState(enum.Enum):
    UNLOADED = "unloaded"
    EMPTY = "empty"
    POPULATED = "populated"


@dataclass
class AliasTable:
    """Prefix rewrites taken from ``compilerOptions.paths``.

    Keys and values have their trailing ``*`` removed; iteration follows the
    order the configuration file lists them in.
    """

    state: LoadState = LoadState.UNLOADED
    base_dir: Optional[str] = None
    aliases: Dict[str, str] = field(default_factory=dict)
    source: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.state is not LoadState.UNLOADED

    def reset(self) -> None:
        self.state = LoadState.UNLOADED
        self.base_dir = None
        self.aliases = {}
        self.source = None


def strip_json_comments(text: str) -> str:
    """Remove // and /* */ comments from JSON-like text."""
    out: List[str] = []
    in_str = False
    escape = False
    idx = 0
    while idx < len(text):
        ch = text[idx]
        if in_str:
            out.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_str = False
            idx += 1
            continue
        if ch == '"':
            in_str = True
            out.append(ch)
            idx += 1
            continue
        if ch == "/" and idx + 1 < len(text):
            nxt = text[idx + 1]
            if nxt == "/":
                idx = text.find("\n", idx + 2)
                if idx == -1:
                    break
                continue
            if nxt == "*":
                end = text.find("*/", idx + 2)
                if end == -1:
                    break
                idx = end + 2
                continue
        out.append(ch)
        idx += 1
    return "".join(out)


def strip_wildcard(value: str) -> str:
    return value[:-1] if value.endswith("*") else value


def parse_alias_config(payload: Any) -> Tuple[Optional[str], Dict[str, str]]:
    if not isinstance(payload, dict):
        return None, {}
    compiler = payload.get("compilerOptions", {})
    if not isinstance(compiler, dict):
        return None, {}
    base_url = compiler.get("baseUrl")
    if not isinstance(base_url, str) or not base_url.strip():
        base_url = None
    paths = compiler.get("paths", {})
    aliases: Dict[str, str] = {}
    if isinstance(paths, dict):
        for key, value in paths.items():
            if not isinstance(key, str):
                continue
            if isinstance(value, str):
                first = value
            elif isinstance(value, list) and value and isinstance(value[0], str):
                first = value[0]
            else:
                continue
            aliases[strip_wildcard(key)] = strip_wildcard(first)
    return base_url, aliases


def load_alias_table(
    host: Host,
    warnings: List[str],
    *,
    table: Optional[AliasTable] = None,
    candidates: Optional[Sequence[str]] = None,
) -> AliasTable:
    """Fill ``table`` from the first candidate config that declares aliases.

    A table that has already been loaded (even to the empty state) is
    returned untouched.
    """
    if table is None:
        table = AliasTable()
    if table.loaded:
        return table
    table.state = LoadState.EMPTY
    root = host.workspace_root()
    if not root:
        return table
    if candidates is None:
        candidates = host.alias_config_candidates()

    for name in candidates:
        path = os.path.join(root, name)
        if not host.file_exists(path):
            continue
        try:
            raw = host.read_file(path).decode("utf-8")
            payload = json.loads(strip_json_comments(raw))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            warnings.append(f"Failed to parse {name}: {exc}")
            continue
        if not isinstance(payload, dict):
            warnings.append(f"Invalid {name}: expected a JSON object")
            continue
        base_url, aliases = parse_alias_config(payload)
        if not aliases:
            continue
        table.base_dir = os.path.normpath(os.path.join(root, base_url)) if base_url else root
        table.aliases = aliases
        table.source = name
        table.state = LoadState.POPULATED
        break
    return table
