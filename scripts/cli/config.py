from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from taborder import (
    DEFAULT_ALIAS_CONFIG_FILES,
    DEFAULT_STRATEGY,
    SETTINGS_FILES,
    STRATEGY_KEYS,
    strip_json_comments,
)


def normalize_str_list(value: Any) -> List[str]:
    if isinstance(value, str) and value.strip():
        return [value.strip()]
    if isinstance(value, list):
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return []


def load_settings(root: Path, warnings: List[str]) -> Tuple[Dict[str, object], Optional[str]]:
    for filename in SETTINGS_FILES:
        path = root / filename
        if not path.exists():
            continue
        try:
            payload = json.loads(strip_json_comments(path.read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            warnings.append(f"Failed to parse {filename}: {exc}")
            return {}, filename
        if not isinstance(payload, dict):
            warnings.append(f"Invalid {filename}: expected a JSON object")
            return {}, filename
        settings: Dict[str, object] = {}
        strategy = payload.get("sortStrategy")
        if isinstance(strategy, str) and strategy.strip():
            if strategy.strip() in STRATEGY_KEYS:
                settings["sortStrategy"] = strategy.strip()
            else:
                warnings.append(f"Ignoring unknown sortStrategy {strategy!r} in {filename}")
        if "aliasConfigFiles" in payload:
            settings["aliasConfigFiles"] = normalize_str_list(payload.get("aliasConfigFiles"))
        return settings, filename
    return {}, None


def resolve_strategy(cli_value: Optional[str], settings: Dict[str, object]) -> str:
    if cli_value:
        return cli_value
    value = settings.get("sortStrategy")
    return value if isinstance(value, str) else DEFAULT_STRATEGY


def resolve_alias_config_files(
    cli_values: Optional[Sequence[str]], settings: Dict[str, object]
) -> List[str]:
    if cli_values:
        return list(cli_values)
    value = settings.get("aliasConfigFiles")
    if isinstance(value, list):
        return [str(item) for item in value]
    return list(DEFAULT_ALIAS_CONFIG_FILES)
