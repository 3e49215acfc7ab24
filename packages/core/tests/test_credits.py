"""Tests for the contributor credit engine."""

from unittest.mock import MagicMock

from relnotes_core.aggregate import ResolvedPull
from relnotes_core.components import Component
from relnotes_core.credits import CreditKind, build_component_credits, build_credits, collect_reviewers
from relnotes_store.base import RecordError
from relnotes_store.memory import MemoryStore
from relnotes_store.models import PullRequest, Repo, User

RANKS = ["type:docs", "type:fix", "type:feat"]
CORE = Component("Core", ("scope:core",))
DAEMON = Component("Daemon", ("scope:daemon",))
FALLBACK = Component("All Platforms", (), fallback=True)


def _make_pull(number, author, labels=("scope:core",)):
    return PullRequest(
        number=number,
        title=f"PR {number}",
        html_url=f"https://github.com/o/r/pull/{number}",
        author=author,
        repo=Repo("o", "r"),
        labels=tuple(labels),
    )


def _user(login):
    return User(login=login, html_url=f"https://github.com/{login}", name=login.title())


def _store(pulls, reviewers=None, logins=("alice", "bob", "carol", "Dave", "ckerr")):
    return MemoryStore(pulls=pulls, reviewers=reviewers or {}, users=[_user(login) for login in logins])


class TestCollectReviewers:
    def test_author_removed_from_own_pull(self):
        pull = _make_pull(1, "alice")
        store = _store([pull], reviewers={1: ["alice", "bob"]})
        assert collect_reviewers(store, [pull]) == {1: frozenset({"bob"})}

    def test_sole_self_review_leaves_no_reviewers(self):
        pull = _make_pull(1, "alice")
        store = _store([pull], reviewers={1: ["alice"]})
        assert collect_reviewers(store, [pull]) == {1: frozenset()}

    def test_unreadable_reviews_degrade_to_none(self):
        store = MagicMock()
        store.list_reviewers.side_effect = RecordError("reviews of #1", "bad JSON")
        assert collect_reviewers(store, [_make_pull(1, "alice")]) == {1: frozenset()}


class TestComponentCredits:
    def test_author_and_reviewer_merged_into_one_entry(self):
        p104 = _make_pull(104, "alice")
        p105 = _make_pull(105, "bob")
        resolved = [ResolvedPull(p104, CORE, "Added foo."), ResolvedPull(p105, CORE, "Fixed bar.")]
        store = _store([p104, p105], reviewers={105: ["alice"]})

        credits = build_component_credits(CORE, resolved, collect_reviewers(store, [p104, p105]), store, [], RANKS)

        alice = next(e for e in credits.entries if e.user.login == "alice")
        assert [line.kind for line in alice.lines] == [CreditKind.REVIEW, CreditKind.AUTHORED]
        assert [p.number for p in alice.lines[0].pulls] == [105]
        assert alice.lines[1].note == "Added foo."
        assert [p.number for p in alice.lines[1].pulls] == [104]

    def test_self_review_generates_no_review_line(self):
        pull = _make_pull(1, "alice")
        resolved = [ResolvedPull(pull, CORE, "Added foo.")]
        store = _store([pull], reviewers={1: ["alice"]})

        credits = build_component_credits(CORE, resolved, collect_reviewers(store, [pull]), store, [], RANKS)

        assert [line.kind for entry in credits.entries for line in entry.lines] == [CreditKind.AUTHORED]

    def test_duplicate_notes_by_same_author_collapse(self):
        pulls = [_make_pull(7, "bob"), _make_pull(3, "bob")]
        resolved = [ResolvedPull(p, CORE, "Updated translations.") for p in pulls]
        store = _store(pulls)

        credits = build_component_credits(CORE, resolved, {}, store, [], RANKS)

        (bob,) = credits.entries
        assert len(bob.lines) == 1
        assert [p.number for p in bob.lines[0].pulls] == [3, 7]

    def test_omitted_logins_get_no_credit(self):
        p1 = _make_pull(1, "ckerr")
        p2 = _make_pull(2, "bob")
        resolved = [ResolvedPull(p1, CORE, "One."), ResolvedPull(p2, CORE, "Two.")]
        store = _store([p1, p2], reviewers={2: ["ckerr"]})

        credits = build_component_credits(CORE, resolved, collect_reviewers(store, [p1, p2]), store, ["ckerr"], RANKS)

        assert [e.user.login for e in credits.entries] == ["bob"]

    def test_login_without_profile_skipped(self):
        pull = _make_pull(1, "stranger")
        store = _store([pull])
        credits = build_component_credits(CORE, [ResolvedPull(pull, CORE, "One.")], {}, store, [], RANKS)
        assert credits.entries == ()

    def test_logins_sorted_case_insensitively(self):
        pulls = [_make_pull(1, "carol"), _make_pull(2, "Dave"), _make_pull(3, "alice"), _make_pull(4, "bob")]
        resolved = [ResolvedPull(p, CORE, f"Note {p.number}.") for p in pulls]
        credits = build_component_credits(CORE, resolved, {}, _store(pulls), [], RANKS)
        assert [e.user.login for e in credits.entries] == ["alice", "bob", "carol", "Dave"]

    def test_review_credit_is_per_component(self):
        core_pull = _make_pull(1, "alice")
        daemon_pull = _make_pull(2, "alice", labels=("scope:daemon",))
        resolved = [ResolvedPull(core_pull, CORE, "One."), ResolvedPull(daemon_pull, DAEMON, "Two.")]
        store = _store([core_pull, daemon_pull], reviewers={1: ["bob"], 2: ["bob"]})
        reviewers = collect_reviewers(store, [core_pull, daemon_pull])

        core = build_component_credits(CORE, resolved, reviewers, store, [], RANKS)
        bob = next(e for e in core.entries if e.user.login == "bob")

        assert [p.number for p in bob.lines[0].pulls] == [1]


class TestBuildCredits:
    def test_components_without_credit_are_dropped(self):
        pull = _make_pull(1, "alice")
        store = _store([pull])
        credits = build_credits([ResolvedPull(pull, CORE, "One.")], [CORE, DAEMON, FALLBACK], store, [], RANKS)
        assert [c.component.name for c in credits] == ["Core"]
