"""Core release-notes orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from relnotes_core.aggregate import (
    ComponentSection,
    NoteEntry,
    ResolvedPull,
    build_entries,
    build_sections,
    split_highlights,
)
from relnotes_core.components import Component, classify
from relnotes_core.config import load_components
from relnotes_core.credits import ComponentCredits, build_credits
from relnotes_core.notes import Note, NoteResolver, NoteSettings

if TYPE_CHECKING:
    from relnotes_store.base import BaseStore
    from relnotes_store.models import PullRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PullResolution:
    """How one pull request was handled; ``note`` is None for ignored pull requests."""

    pull: PullRequest
    component: Component
    note: Note | None

    @property
    def ignored(self) -> bool:
        return self.note is None

    @property
    def listed(self) -> bool:
        return self.note is not None and not self.note.is_absent


@dataclass(frozen=True)
class ReleasePlan:
    """Everything the renderer needs, already ordered."""

    version: str
    title: str
    highlights: tuple[NoteEntry, ...]
    sections: tuple[ComponentSection, ...]
    credits: tuple[ComponentCredits, ...]


def resolve_pulls(store: BaseStore, config: dict, components: list[Component] | None = None) -> list[PullResolution]:
    """Classify every pull request and resolve its note.

    Pull requests with an ignore label are classified but never resolved.
    """
    if components is None:
        components = load_components(config)
    ignore_labels = frozenset(config.get("ignore_labels") or [])
    resolver = NoteResolver(store, NoteSettings.from_config(config))

    resolutions = []
    for pull in store.list_pulls():
        component = classify(pull, components)
        if pull.has_label(ignore_labels):
            logger.debug("Skipping #%d: ignored label", pull.number)
            resolutions.append(PullResolution(pull=pull, component=component, note=None))
            continue
        note = resolver.resolve(pull)
        if note.is_absent:
            logger.debug("Skipping #%d: no notes (%s)", pull.number, note.source.value)
        resolutions.append(PullResolution(pull=pull, component=component, note=note))
    return resolutions


def build_release_plan(store: BaseStore, config: dict, version: str) -> ReleasePlan:
    """Run the whole engine over the store's corpus and return the render plan.

    Raises ValueError when ``version`` is empty or the component configuration is invalid.
    """
    if not version or not version.strip():
        raise ValueError("A release version is required.")
    version = version.strip()

    components = load_components(config)
    rank_labels = list(config.get("rank_labels") or [])

    resolved = [
        ResolvedPull(pull=r.pull, component=r.component, note=r.note.text)
        for r in resolve_pulls(store, config, components)
        if r.listed
    ]
    logger.info("Resolved notes for %d pull request(s)", len(resolved))

    highlighted, regular = split_highlights(resolved, config.get("highlight_label"))

    return ReleasePlan(
        version=version,
        title=str(config.get("title") or "{version}").replace("{version}", version),
        highlights=build_entries(highlighted, rank_labels),
        sections=build_sections(regular, components, rank_labels),
        credits=build_credits(resolved, components, store, config.get("omit_logins") or [], rank_labels),
    )
