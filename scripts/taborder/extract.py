"""Regex scan of JS/TS source text for module references."""
from __future__ import annotations

import re
from typing import List, Set

IMPORT_FROM_RE = re.compile(r"import\s+(?:[\w*\s{},]*)\s+from\s+['\"]([^'\"]+)['\"]")
REQUIRE_RE = re.compile(r"require\s*\(\s*['\"]([^'\"]+)['\"]\s*\)")
DYNAMIC_IMPORT_RE = re.compile(r"import\s*\(\s*['\"]([^'\"]+)['\"]\s*\)")

REFERENCE_PATTERNS = (IMPORT_FROM_RE, REQUIRE_RE, DYNAMIC_IMPORT_RE)


def regex_references(content: str) -> List[str]:
    modules: List[str] = []
    for pattern in REFERENCE_PATTERNS:
        for match in pattern.finditer(content):
            modules.append(match.group(1))
    return modules


def extract_references(content: str) -> Set[str]:
    """Return every module reference in ``content``.

    Comments and unrelated string literals are not excluded, so a reference
    inside ``// require("./x")`` is still reported.
    """
    if not content:
        return set()
    return set(regex_references(content))
