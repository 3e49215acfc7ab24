"""In-memory store: records handed over directly by the caller.

Useful when the corpus was already fetched by another tool in the same
process, and as the fixture store for engine tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Mapping

from relnotes_store.base import BaseStore

if TYPE_CHECKING:
    from relnotes_store.models import Comment, PullRequest, User


class MemoryStore(BaseStore):
    """Serves records from plain mappings keyed by pull-request number and login."""

    def __init__(
        self,
        pulls: Iterable[PullRequest] = (),
        comments: Mapping[int, list[Comment]] | None = None,
        reviewers: Mapping[int, Iterable[str]] | None = None,
        users: Iterable[User] = (),
    ):
        self._pulls = sorted(pulls, key=lambda p: p.number)
        self._comments = dict(comments or {})
        self._reviewers = {number: set(logins) for number, logins in (reviewers or {}).items()}
        self._users = {user.login: user for user in users}

    def list_pulls(self) -> list[PullRequest]:
        return list(self._pulls)

    def list_comments(self, pull: PullRequest) -> list[Comment]:
        return list(self._comments.get(pull.number, []))

    def list_reviewers(self, pull: PullRequest) -> set[str]:
        return set(self._reviewers.get(pull.number, set()))

    def get_user(self, login: str) -> User | None:
        return self._users.get(login)
