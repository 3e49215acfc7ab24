import os
from pathlib import Path
from typing import Optional

import yaml

from relnotes_core.components import Component

DEFAULT_CONFIG: dict = {
    "title": "Release {version}",
    "cache_dir": ".cache",
    # Priority order: the first component matching a label wins.
    "components": [
        {"name": "Core", "labels": ["scope:core", "scope:3rdparty"]},
        {"name": "macOS Client", "labels": ["scope:mac"]},
        {"name": "Qt Client", "labels": ["scope:qt"]},
        {"name": "GTK Client", "labels": ["scope:gtk"]},
        {"name": "Web Client", "labels": ["scope:web"]},
        {"name": "Daemon", "labels": ["scope:daemon"]},
        {"name": "transmission-cli", "labels": ["scope:cli"]},
        {"name": "transmission-edit", "labels": ["scope:edit"]},
        {"name": "transmission-remote", "labels": ["scope:remote"]},
        {"name": "transmission-create", "labels": ["scope:create"]},
        {"name": "transmission-show", "labels": ["scope:show"]},
        {"name": "Docs", "labels": ["scope:docs"]},
    ],
    "fallback_component": "All Platforms",
    "trusted_note_writers": [],  # logins whose "Notes: ..." comments override the PR body
    # Maintainers and bots, never credited.
    "omit_logins": [
        "ckerr",
        "mikedld",
        "livings124",
        "Coeur",
        "dependabot[bot]",
        "github-actions[bot]",
        "renovate[bot]",
    ],
    "ignore_labels": ["type:refactor", "type:fixup", "notes:none"],
    "no_notes_aliases": ["none", "none.", "no-notes", "no-notes."],
    "docs_labels": ["scope:docs", "type:docs"],
    "docs_summary": None,  # e.g. "Updated documentation." to fold all docs PRs into one line
    "highlight_label": "notes:highlight",
    # Lowest rank first.
    "rank_labels": [
        "type:docs",
        "type:test",
        "type:refactor",
        "type:ui",
        "type:perf",
        "type:fix",
        "type:feat",
        "notes:highlight",
    ],
}

_LIST_KEYS = (
    "components",
    "trusted_note_writers",
    "omit_logins",
    "ignore_labels",
    "no_notes_aliases",
    "docs_labels",
    "rank_labels",
)


def load_config(config_path: str = ".relnotes.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .relnotes.yml in the current directory
      3. NOTES_CACHE_PATH for the record cache directory
      4. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG}
    for key in _LIST_KEYS:
        config[key] = list(DEFAULT_CONFIG[key])

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ValueError(f"Configuration file {config_path} must contain a mapping.")
        config.update(file_config)

    cache_path = os.environ.get("NOTES_CACHE_PATH")
    if cache_path:
        config["cache_dir"] = cache_path

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    for key in _LIST_KEYS:
        if config.get(key) is None:
            config[key] = []
        elif not isinstance(config[key], list):
            raise ValueError(f"{key} must be a list, got {type(config[key]).__name__}.")

    return config


def load_components(config: dict) -> list[Component]:
    """
    Build the priority-ordered component list, with the catch-all appended last.

    Raises ValueError for malformed entries.
    """
    components = []
    for i, entry in enumerate(config.get("components") or []):
        if not isinstance(entry, dict) or not entry.get("name"):
            raise ValueError(f"Component #{i + 1} needs a name.")
        labels = entry.get("labels") or []
        if isinstance(labels, str) or not isinstance(labels, list):
            raise ValueError(f"Component {entry['name']!r}: labels must be a list.")
        components.append(Component(name=str(entry["name"]), labels=tuple(str(label) for label in labels)))

    fallback = config.get("fallback_component") or DEFAULT_CONFIG["fallback_component"]
    components.append(Component(name=str(fallback), labels=(), fallback=True))
    return components
