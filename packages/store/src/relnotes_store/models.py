"""Pull-request corpus records.

Decoupled from relnotes_core so the store layer can be used independently.
All records are frozen snapshots: the engine reads them, never writes back.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Repo:
    """The repository a pull request lives in, used to address its comments and reviews."""

    owner: str
    name: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class PullRequest:
    """A cached pull request.

    ``labels`` keeps the order the upstream data source stored them in;
    component classification depends on it.
    """

    number: int
    title: str
    html_url: str
    author: str
    repo: Repo
    body: str | None = None
    labels: tuple[str, ...] = field(default_factory=tuple)

    def has_label(self, names) -> bool:
        return any(label in names for label in self.labels)


@dataclass(frozen=True)
class Comment:
    """An issue comment on a pull request."""

    author: str
    body: str


@dataclass(frozen=True)
class User:
    """A GitHub user profile."""

    login: str
    html_url: str
    name: str | None = None
