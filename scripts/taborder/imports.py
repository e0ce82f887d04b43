from __future__ import annotations

import os
from typing import Callable, List, Optional

from .aliases import AliasTable
from .constants import INDEX_BASENAME, INDEX_EXTENSIONS, MODULE_EXTENSIONS

ExistsProbe = Callable[[str], bool]


def is_relative_reference(module: str) -> bool:
    return module.startswith((".", "/"))


def module_candidates(target: str) -> List[str]:
    candidates = [f"{target}{ext}" for ext in MODULE_EXTENSIONS]
    candidates.extend(
        os.path.join(target, f"{INDEX_BASENAME}{ext}") for ext in INDEX_EXTENSIONS
    )
    return candidates


def probe_module(target: str, exists: ExistsProbe) -> Optional[str]:
    for candidate in module_candidates(target):
        if exists(candidate):
            return candidate
    return None


def alias_target(module: str, table: AliasTable) -> Optional[str]:
    """Rewrite ``module`` through the first alias whose prefix covers it."""
    if not table.aliases or not table.base_dir:
        return None
    for alias, target in table.aliases.items():
        bare = alias.rstrip("/")
        if not bare:
            continue
        if module == alias or module == bare:
            remainder = ""
        elif module.startswith(f"{bare}/"):
            remainder = module[len(bare) + 1 :]
        else:
            continue
        return os.path.normpath(os.path.join(table.base_dir, target, remainder))
    return None


def resolve_reference(
    module: str,
    importer: str,
    *,
    exists: ExistsProbe,
    aliases: Optional[AliasTable] = None,
    load_aliases: Optional[Callable[[], AliasTable]] = None,
) -> Optional[str]:
    """Resolve ``module`` as referenced from the absolute path ``importer``.

    Relative and absolute references are joined onto the importer's
    directory. Anything else goes through the alias table, which is loaded
    on first use via ``load_aliases``. Bare package names resolve to None.
    """
    if not module:
        return None
    if is_relative_reference(module):
        base = os.path.dirname(importer)
        target = os.path.normpath(os.path.join(base, module))
        return probe_module(target, exists)
    if aliases is None and load_aliases is not None:
        aliases = load_aliases()
    if aliases is None:
        return None
    target = alias_target(module, aliases)
    if target is None:
        return None
    return probe_module(target, exists)
