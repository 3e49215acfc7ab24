"""Tests for markdown rendering."""

from relnotes_core.aggregate import ComponentSection, NoteEntry
from relnotes_core.components import Component
from relnotes_core.credits import ComponentCredits, CreditEntry, CreditKind, CreditLine
from relnotes_core.markdown import THANKS_INTRO, format_highlight, format_user, render
from relnotes_core.release import ReleasePlan
from relnotes_store.models import PullRequest, Repo, User

CORE = Component("Core", ("scope:core",))
FALLBACK = Component("All Platforms", (), fallback=True)


def _pull(number, author="alice"):
    return PullRequest(
        number=number,
        title=f"PR {number}",
        html_url=f"https://github.com/o/r/pull/{number}",
        author=author,
        repo=Repo("o", "r"),
    )


def _plan(highlights=(), sections=(), credits=()):
    return ReleasePlan(
        version="4.0.0", title="Release 4.0.0", highlights=highlights, sections=sections, credits=credits
    )


ALICE = User("alice", "https://github.com/alice", name="Alice Liddell")
BOB = User("bob", "https://github.com/bob")


class TestFormatting:
    def test_user_with_name(self):
        assert format_user(ALICE) == "[@alice (Alice Liddell)](https://github.com/alice)"

    def test_user_without_name(self):
        assert format_user(BOB) == "[@bob](https://github.com/bob)"

    def test_highlight_prefixed_with_component(self):
        entry = NoteEntry(CORE, "Added foo.", (_pull(1),))
        assert format_highlight(entry) == "Core: Added foo. ([#1](https://github.com/o/r/pull/1))"

    def test_fallback_highlight_not_prefixed(self):
        entry = NoteEntry(FALLBACK, "Added foo.", (_pull(1),))
        assert format_highlight(entry) == "Added foo. ([#1](https://github.com/o/r/pull/1))"


class TestRender:
    def test_title_only_for_empty_plan(self):
        assert render(_plan()) == "# Release 4.0.0\n"

    def test_section_with_merged_entry(self):
        section = ComponentSection(CORE, (NoteEntry(CORE, "Fixed crash.", (_pull(102), _pull(103))),))
        assert render(_plan(sections=(section,))) == (
            "# Release 4.0.0\n"
            "\n"
            "## Core\n"
            "\n"
            "* Fixed crash. ([#102](https://github.com/o/r/pull/102), [#103](https://github.com/o/r/pull/103))\n"
        )

    def test_highlights_come_before_sections(self):
        highlight = NoteEntry(CORE, "Big thing.", (_pull(1),))
        section = ComponentSection(CORE, (NoteEntry(CORE, "Small thing.", (_pull(2),)),))
        document = render(_plan(highlights=(highlight,), sections=(section,)))
        assert document.index("## Highlights") < document.index("## Core")
        assert "* Core: Big thing. ([#1](https://github.com/o/r/pull/1))" in document

    def test_credits(self):
        credits = ComponentCredits(
            CORE,
            (
                CreditEntry(
                    ALICE,
                    (
                        CreditLine(CreditKind.REVIEW, (_pull(105, "bob"),)),
                        CreditLine(CreditKind.AUTHORED, (_pull(104),), note="Added foo."),
                    ),
                ),
                CreditEntry(BOB, (CreditLine(CreditKind.AUTHORED, (_pull(105, "bob"),), note="Fixed bar."),)),
            ),
        )
        document = render(_plan(credits=(credits,)))
        assert document == (
            "# Release 4.0.0\n"
            "\n"
            "## Thank you\n"
            "\n"
            f"{THANKS_INTRO}\n"
            "\n"
            "### Contributions to `Core`:\n"
            "\n"
            "* [@alice (Alice Liddell)](https://github.com/alice):\n"
            "  * Code review for [#105](https://github.com/o/r/pull/105)\n"
            "  * Added foo. ([#104](https://github.com/o/r/pull/104))\n"
            "* [@bob](https://github.com/bob): Fixed bar. ([#105](https://github.com/o/r/pull/105))\n"
        )
