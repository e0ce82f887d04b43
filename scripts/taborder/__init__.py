from .aliases import AliasTable, LoadState, load_alias_table, parse_alias_config, strip_json_comments
from .constants import (
    DEFAULT_ALIAS_CONFIG_FILES,
    DEFAULT_STRATEGY,
    MIN_SUFFIX_SEGMENTS,
    SETTINGS_FILES,
    STRATEGY_ALPHABETICAL,
    STRATEGY_FILE_SYSTEM,
    STRATEGY_IMPORTS,
    STRATEGY_KEYS,
)
from .extract import extract_references, regex_references
from .graph import DependencyGraph, build_dependency_graph, compute_depths, match_edges
from .host import Host, LocalHost, OpenFile, open_files_from_paths
from .imports import alias_target, module_candidates, probe_module, resolve_reference
from .matching import OpenPathIndex, common_suffix_length, match_open_path, path_segments
from .organizer import GroupOrder, group_open_files, organize
from .strategies import (
    AlphabeticalStrategy,
    FileSystemStrategy,
    ImportOrderStrategy,
    SortStrategy,
    natural_key,
    strategy_for_name,
)
