"""Note resolution: the one-line release note for a pull request.

Resolution order (first hit wins):
  1. documentation override, a fixed summary for every docs-labelled PR
  2. trusted comments, newest first, "Notes: ..." from a trusted writer
  3. pull-request body, the first "Notes: ..." paragraph
  4. title, always available

A "Notes: none" paragraph (or any configured alias) is an explicit absence:
it stops resolution and the pull request is left out of the document, which
is different from a source that simply has no "Notes:" paragraph.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

from relnotes_store.base import RecordError

if TYPE_CHECKING:
    from relnotes_store.base import BaseStore
    from relnotes_store.models import Comment, PullRequest

logger = logging.getLogger(__name__)

NOTES_PREFIX = "notes: "

# Blank line, with or without CRLF and trailing whitespace on the blank line.
_PARAGRAPH_BREAK_RE = re.compile(r"\r?\n(?:[ \t]*\r?\n)+")

PAST_TENSE = {
    "Add": "Added",
    "Allow": "Allowed",
    "Bump": "Bumped",
    "Change": "Changed",
    "Drop": "Dropped",
    "Fix": "Fixed",
    "Improve": "Improved",
    "Make": "Made",
    "Remove": "Removed",
    "Update": "Updated",
    "Use": "Used",
}


class ExtractionKind(enum.Enum):
    NOTE = "note"
    NO_NOTES = "no-notes"  # explicit absence, stops resolution
    NO_MATCH = "no-match"  # nothing here, try the next source


@dataclass(frozen=True)
class Extraction:
    kind: ExtractionKind
    text: str | None = None

    @property
    def is_definitive(self) -> bool:
        return self.kind is not ExtractionKind.NO_MATCH


NO_MATCH = Extraction(ExtractionKind.NO_MATCH)
NO_NOTES = Extraction(ExtractionKind.NO_NOTES)


class NoteSource(enum.Enum):
    DOCS = "docs"
    COMMENT = "comment"
    BODY = "body"
    TITLE = "title"


@dataclass(frozen=True)
class Note:
    """Resolved note of one pull request; ``text`` is None when it is explicitly absent."""

    text: str | None
    source: NoteSource

    @property
    def is_absent(self) -> bool:
        return self.text is None


@dataclass(frozen=True)
class NoteSettings:
    trusted_writers: frozenset[str] = frozenset()
    no_notes_aliases: frozenset[str] = frozenset()
    docs_labels: frozenset[str] = frozenset()
    docs_summary: str | None = None

    @classmethod
    def from_config(cls, config: dict) -> NoteSettings:
        return cls(
            trusted_writers=frozenset(config.get("trusted_note_writers") or []),
            no_notes_aliases=frozenset(alias.lower() for alias in config.get("no_notes_aliases") or []),
            docs_labels=frozenset(config.get("docs_labels") or []),
            docs_summary=config.get("docs_summary") or None,
        )


def extract_note(text: str | None, no_notes_aliases: Iterable[str]) -> Extraction:
    """Find the first paragraph of ``text`` starting with "notes: " (any case).

    A paragraph with nothing after the prefix does not qualify, so an empty
    "Notes: " falls through to the next paragraph and then the next source.
    """
    if not text:
        return NO_MATCH
    aliases = {alias.lower() for alias in no_notes_aliases}
    for paragraph in _PARAGRAPH_BREAK_RE.split(text):
        if not paragraph.lower().startswith(NOTES_PREFIX):
            continue
        note = paragraph[len(NOTES_PREFIX) :].strip()
        if not note:
            continue
        if note.lower() in aliases:
            return NO_NOTES
        return Extraction(ExtractionKind.NOTE, note)
    return NO_MATCH


def scan_comments(
    comments: Sequence[Comment], trusted_writers: Iterable[str], no_notes_aliases: Iterable[str]
) -> Extraction:
    """Scan comments newest first and return the first definitive trusted note.

    An older trusted comment never overrides a newer one, including a newer
    "Notes: none" retraction.
    """
    trusted = set(trusted_writers)
    for comment in reversed(comments):
        if comment.author not in trusted:
            continue
        extraction = extract_note(comment.body, no_notes_aliases)
        if extraction.is_definitive:
            return extraction
    return NO_MATCH


def normalize_note(text: str) -> str:
    """Trim, capitalize, end with a period, and put a leading imperative verb in the past tense.

    >>> normalize_note("add foo support")
    'Added foo support.'
    """
    text = text.strip()
    if not text:
        return text
    text = text[0].upper() + text[1:]
    if not text.endswith("."):
        text += "."
    verb, sep, rest = text.partition(" ")
    if sep and verb in PAST_TENSE:
        text = f"{PAST_TENSE[verb]} {rest}"
    return text


class NoteResolver:
    """Resolves notes for pull requests, loading comments from the store on demand."""

    def __init__(self, store: BaseStore, settings: NoteSettings):
        self._store = store
        self._settings = settings

    def resolve(self, pull: PullRequest) -> Note:
        settings = self._settings

        if settings.docs_summary and pull.has_label(settings.docs_labels):
            return Note(normalize_note(settings.docs_summary), NoteSource.DOCS)

        if settings.trusted_writers:
            extraction = scan_comments(self._load_comments(pull), settings.trusted_writers, settings.no_notes_aliases)
            if extraction.is_definitive:
                return _to_note(extraction, NoteSource.COMMENT)

        extraction = extract_note(pull.body, settings.no_notes_aliases)
        if extraction.is_definitive:
            return _to_note(extraction, NoteSource.BODY)

        return Note(normalize_note(pull.title), NoteSource.TITLE)

    def _load_comments(self, pull: PullRequest) -> list[Comment]:
        try:
            return self._store.list_comments(pull)
        except RecordError as e:
            logger.warning("Ignoring unreadable comments of #%d: %s", pull.number, e)
            return []


def _to_note(extraction: Extraction, source: NoteSource) -> Note:
    if extraction.kind is ExtractionKind.NO_NOTES:
        return Note(None, source)
    return Note(normalize_note(extraction.text or ""), source)
