"""Grouping and ordering of resolved notes.

Pull requests that resolve to the same note text within a component are
folded into a single entry citing all of them. Entries are ranked by the
strongest type label among their pull requests (features before fixes before
docs, per ``rank_labels``), then by their smallest pull-request number.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from relnotes_core.components import Component
from relnotes_store.models import PullRequest


@dataclass(frozen=True)
class ResolvedPull:
    """A listed pull request together with its component and normalized note text."""

    pull: PullRequest
    component: Component
    note: str


@dataclass(frozen=True)
class NoteEntry:
    """One bullet: a note text and every pull request sharing it, ascending by number."""

    component: Component
    note: str
    pulls: tuple[PullRequest, ...]

    @property
    def numbers(self) -> tuple[int, ...]:
        return tuple(p.number for p in self.pulls)


@dataclass(frozen=True)
class ComponentSection:
    component: Component
    entries: tuple[NoteEntry, ...]


def label_rank(pulls: Iterable[PullRequest], rank_labels: Sequence[str]) -> int:
    """Return the highest index in ``rank_labels`` found on any of the pulls, or -1."""
    rank = -1
    for pull in pulls:
        for label in pull.labels:
            if label in rank_labels:
                rank = max(rank, rank_labels.index(label))
    return rank


def group_notes(resolved: Iterable[ResolvedPull]) -> dict[tuple[Component, str], tuple[PullRequest, ...]]:
    """Fold resolved pulls into (component, note text) -> pulls sharing that text."""
    groups: dict[tuple[Component, str], list[PullRequest]] = {}
    for item in resolved:
        groups.setdefault((item.component, item.note), []).append(item.pull)
    return {key: tuple(sorted(pulls, key=lambda p: p.number)) for key, pulls in groups.items()}


def order_entries(entries: Iterable[NoteEntry], rank_labels: Sequence[str]) -> tuple[NoteEntry, ...]:
    return tuple(sorted(entries, key=lambda e: (-label_rank(e.pulls, rank_labels), e.numbers[0], e.note)))


def build_entries(resolved: Iterable[ResolvedPull], rank_labels: Sequence[str]) -> tuple[NoteEntry, ...]:
    entries = (
        NoteEntry(component=component, note=note, pulls=pulls)
        for (component, note), pulls in group_notes(resolved).items()
    )
    return order_entries(entries, rank_labels)


def build_sections(
    resolved: Sequence[ResolvedPull],
    components: Sequence[Component],
    rank_labels: Sequence[str],
) -> tuple[ComponentSection, ...]:
    """Return one section per component with at least one entry, in component priority order."""
    sections = []
    for component in components:
        entries = build_entries((r for r in resolved if r.component == component), rank_labels)
        if entries:
            sections.append(ComponentSection(component=component, entries=entries))
    return tuple(sections)


def split_highlights(
    resolved: Sequence[ResolvedPull], highlight_label: str | None
) -> tuple[list[ResolvedPull], list[ResolvedPull]]:
    """Partition listed pulls into (highlighted, regular)."""
    if not highlight_label:
        return [], list(resolved)
    highlighted = [r for r in resolved if highlight_label in r.pull.labels]
    regular = [r for r in resolved if highlight_label not in r.pull.labels]
    return highlighted, regular
