from __future__ import annotations

# Probed in order; the empty suffix retries the bare candidate last.
MODULE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", "")
INDEX_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")
INDEX_BASENAME = "index"

DEFAULT_ALIAS_CONFIG_FILES = ("tsconfig.json", "jsconfig.json")
SETTINGS_FILES = (".taborder.json", "taborder.json")

# filename plus at least one containing directory
MIN_SUFFIX_SEGMENTS = 2

STRATEGY_FILE_SYSTEM = "fileSystem"
STRATEGY_IMPORTS = "imports"
STRATEGY_ALPHABETICAL = "alphabetical"
STRATEGY_KEYS = (STRATEGY_FILE_SYSTEM, STRATEGY_IMPORTS, STRATEGY_ALPHABETICAL)
DEFAULT_STRATEGY = STRATEGY_FILE_SYSTEM
