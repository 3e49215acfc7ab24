"""CacheStore: reads a directory of individually cached GitHub API records.

The directory is filled by whatever tool mirrors the GitHub REST API; this
store only reads it. Records are addressed by file name:

  {owner}-{repo}-pull-{number}              pull request
  {owner}-{repo}-issue-{number}-comments    issue comments of that pull request
  {owner}-{repo}-issue-{number}-reviews     code reviews of that pull request
  user-{login}                              user profile

Files may carry a ``.json`` suffix and may live in nested directories. The
content is either the raw REST payload or an envelope ``{"data": payload}``
as written by octokit-style response caches.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from urllib.parse import urlparse

from relnotes_store.base import BaseStore, RecordError
from relnotes_store.models import Comment, PullRequest, Repo, User

logger = logging.getLogger(__name__)

_PULL_RE = re.compile(r"^(?P<prefix>.+)-pull-(?P<number>\d+)$")
_SUFFIX = ".json"


def _record_key(path: Path) -> str:
    name = path.name
    return name[: -len(_SUFFIX)] if name.endswith(_SUFFIX) else name


class CacheStore(BaseStore):
    """Serves records from a cache directory, indexed once at construction."""

    def __init__(self, cache_dir: str):
        root = Path(cache_dir)
        if not root.is_dir():
            raise FileNotFoundError(f"Record cache directory not found: {cache_dir}")
        self._root = root
        self._index: dict[str, Path] = {}
        for path in sorted(root.rglob("*")):
            if not path.is_file():
                continue
            key = _record_key(path)
            if key in self._index:
                logger.warning("Duplicate cached record %s (keeping %s)", path, self._index[key])
                continue
            self._index[key] = path
        logger.debug("Indexed %d cached records under %s", len(self._index), root)

    def list_pulls(self) -> list[PullRequest]:
        pulls = [
            self._pull_from_dict(self._load(path), path) for key, path in self._index.items() if _PULL_RE.match(key)
        ]
        return sorted(pulls, key=lambda p: p.number)

    def list_comments(self, pull: PullRequest) -> list[Comment]:
        payload = self._load_key(f"{pull.repo.owner}-{pull.repo.name}-issue-{pull.number}-comments")
        if payload is None:
            return []
        try:
            return [
                Comment(author=(c.get("user") or {}).get("login", ""), body=c.get("body") or "") for c in payload
            ]
        except (AttributeError, TypeError) as e:
            raise RecordError(f"comments of #{pull.number}", f"unexpected payload shape ({e})") from e

    def list_reviewers(self, pull: PullRequest) -> set[str]:
        payload = self._load_key(f"{pull.repo.owner}-{pull.repo.name}-issue-{pull.number}-reviews")
        if payload is None:
            return set()
        try:
            # Reviews by deleted accounts come back with a null user.
            return {r["user"]["login"] for r in payload if r.get("user")}
        except (AttributeError, KeyError, TypeError) as e:
            raise RecordError(f"reviews of #{pull.number}", f"unexpected payload shape ({e})") from e

    def get_user(self, login: str) -> User | None:
        payload = self._load_key(f"user-{login}")
        if payload is None:
            return None
        try:
            return User(login=payload["login"], html_url=payload.get("html_url", ""), name=payload.get("name"))
        except (AttributeError, KeyError, TypeError) as e:
            raise RecordError(f"user {login}", f"unexpected payload shape ({e})") from e

    def _load_key(self, key: str):
        path = self._index.get(key)
        if path is None:
            logger.debug("No cached record %s", key)
            return None
        return self._load(path)

    @staticmethod
    def _load(path: Path):
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RecordError(str(path), f"cannot read JSON ({e})") from e
        if isinstance(doc, dict) and "data" in doc:
            return doc["data"]
        return doc

    @staticmethod
    def _pull_from_dict(d, path: Path) -> PullRequest:
        try:
            return PullRequest(
                number=int(d["number"]),
                title=d.get("title") or "",
                html_url=d.get("html_url", ""),
                author=(d.get("user") or {}).get("login", ""),
                repo=_repo_from_dict(d),
                body=d.get("body"),
                labels=tuple(
                    label["name"] if isinstance(label, dict) else str(label) for label in d.get("labels") or []
                ),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise RecordError(str(path), f"not a pull request record ({e})") from e


def _repo_from_dict(d: dict) -> Repo:
    """Return the repository a pull-request payload belongs to.

    Prefers ``base.repo``; falls back to parsing ``html_url``
    (https://github.com/{owner}/{repo}/pull/{number}).
    """
    base_repo = (d.get("base") or {}).get("repo")
    if base_repo:
        return Repo(owner=base_repo["owner"]["login"], name=base_repo["name"])

    parts = urlparse(d.get("html_url", "")).path.strip("/").split("/")
    if len(parts) >= 2 and parts[0] and parts[1]:
        return Repo(owner=parts[0], name=parts[1])
    raise ValueError("cannot determine repository (no base.repo and no usable html_url)")
