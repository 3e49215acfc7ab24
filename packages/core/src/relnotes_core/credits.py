"""Contributor credits: who to thank, per component, and for what.

A login is credited in a component for two kinds of work:
  - code review of pull requests in that component (never their own), and
  - authoring pull requests there, one line per distinct note text.

Maintainers and bots listed in ``omit_logins`` are never credited, and a
login without a cached profile is skipped because there is nothing to link to.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

from relnotes_core.aggregate import ResolvedPull, build_entries
from relnotes_core.components import Component
from relnotes_store.base import RecordError
from relnotes_store.models import PullRequest, User

if TYPE_CHECKING:
    from relnotes_store.base import BaseStore

logger = logging.getLogger(__name__)


class CreditKind(enum.Enum):
    REVIEW = "review"
    AUTHORED = "authored"


@dataclass(frozen=True)
class CreditLine:
    kind: CreditKind
    pulls: tuple[PullRequest, ...]
    note: str | None = None  # authored lines only


@dataclass(frozen=True)
class CreditEntry:
    user: User
    lines: tuple[CreditLine, ...]


@dataclass(frozen=True)
class ComponentCredits:
    component: Component
    entries: tuple[CreditEntry, ...]


def collect_reviewers(store: BaseStore, pulls: Iterable[PullRequest]) -> dict[int, frozenset[str]]:
    """Return pull number -> distinct reviewer logins, without the pull request's author.

    Anyone who comments in a review thread shows up as a reviewer, including
    the author answering feedback on their own pull request.
    """
    reviewers = {}
    for pull in pulls:
        try:
            logins = store.list_reviewers(pull)
        except RecordError as e:
            logger.warning("Ignoring unreadable reviews of #%d: %s", pull.number, e)
            logins = set()
        reviewers[pull.number] = frozenset(logins - {pull.author})
    return reviewers


def _lookup_user(store: BaseStore, login: str) -> User | None:
    try:
        user = store.get_user(login)
    except RecordError as e:
        logger.warning("Ignoring unreadable profile of %s: %s", login, e)
        return None
    if user is None:
        logger.debug("No profile cached for %s; not crediting", login)
    return user


def build_component_credits(
    component: Component,
    resolved: Sequence[ResolvedPull],
    reviewers: dict[int, frozenset[str]],
    store: BaseStore,
    omit_logins: Iterable[str],
    rank_labels: Sequence[str],
) -> ComponentCredits:
    omit = set(omit_logins)
    in_component = [r for r in resolved if r.component == component]

    reviewed: dict[str, list[PullRequest]] = {}
    for item in sorted(in_component, key=lambda r: r.pull.number):
        for login in reviewers.get(item.pull.number, ()):
            reviewed.setdefault(login, []).append(item.pull)

    authored: dict[str, list[ResolvedPull]] = {}
    for item in in_component:
        authored.setdefault(item.pull.author, []).append(item)

    logins = sorted((set(reviewed) | set(authored)) - omit - {""}, key=lambda login: (login.lower(), login))

    entries = []
    for login in logins:
        user = _lookup_user(store, login)
        if user is None:
            continue
        lines = []
        if login in reviewed:
            lines.append(CreditLine(kind=CreditKind.REVIEW, pulls=tuple(reviewed[login])))
        for entry in build_entries(authored.get(login, ()), rank_labels):
            lines.append(CreditLine(kind=CreditKind.AUTHORED, pulls=entry.pulls, note=entry.note))
        entries.append(CreditEntry(user=user, lines=tuple(lines)))

    return ComponentCredits(component=component, entries=tuple(entries))


def build_credits(
    resolved: Sequence[ResolvedPull],
    components: Sequence[Component],
    store: BaseStore,
    omit_logins: Iterable[str],
    rank_labels: Sequence[str],
) -> tuple[ComponentCredits, ...]:
    """Return credits for every component that has at least one credited login, in priority order."""
    omit = frozenset(omit_logins)
    reviewers = collect_reviewers(store, (r.pull for r in resolved))
    credits = []
    for component in components:
        component_credits = build_component_credits(component, resolved, reviewers, store, omit, rank_labels)
        if component_credits.entries:
            credits.append(component_credits)
    return tuple(credits)
