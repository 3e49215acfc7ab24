"""Release components and pull-request classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from relnotes_store.models import PullRequest


@dataclass(frozen=True)
class Component:
    """A release-facing grouping such as "Core" or "Daemon", selected by label."""

    name: str
    labels: tuple[str, ...] = field(default_factory=tuple)
    fallback: bool = False

    def matches(self, label: str) -> bool:
        return label in self.labels


def classify(pull: PullRequest, components: Sequence[Component]) -> Component:
    """Return the one component a pull request belongs to.

    Labels are scanned in storage order and, for each label, components in
    priority order; the first match wins. When several labels would match
    different components, the earliest stored label decides. Pull requests
    matching nothing land in the fallback component, which must be last.
    """
    for label in pull.labels:
        for component in components:
            if component.matches(label):
                return component
    return components[-1]
