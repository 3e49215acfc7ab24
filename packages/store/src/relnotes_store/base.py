"""Abstract record store interface.

The release-notes engine only ever asks four questions of its corpus:
all pull requests, the comments of one pull request, the distinct reviewers
of one pull request, and the profile of one login. Any backend (cache
directory, in-memory fixtures) implements this interface, so relnotes_core
depends on BaseStore and not on a concrete backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from relnotes_store.models import Comment, PullRequest, User


class RecordError(Exception):
    """A cached record exists but cannot be parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class BaseStore(ABC):
    """Read-only access to a fully materialized pull-request corpus.

    Missing records are not errors: list queries return empty results and
    profile lookups return None. Malformed records raise RecordError.
    """

    @abstractmethod
    def list_pulls(self) -> list[PullRequest]:
        """Return every pull request in the corpus, ordered by number."""

    @abstractmethod
    def list_comments(self, pull: PullRequest) -> list[Comment]:
        """Return the issue comments of a pull request, oldest first."""

    @abstractmethod
    def list_reviewers(self, pull: PullRequest) -> set[str]:
        """Return the distinct logins that submitted a review on a pull request."""

    @abstractmethod
    def get_user(self, login: str) -> User | None:
        """Return the profile of a login, or None if the corpus has none."""

    def close(self) -> None:
        """Release any resources held by the store.

        Default is a no-op so callers can always call close() safely.
        """
