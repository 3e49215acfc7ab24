"""Markdown rendering of a ReleasePlan."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from relnotes_core.credits import CreditKind, CreditLine

if TYPE_CHECKING:
    from relnotes_core.aggregate import NoteEntry
    from relnotes_core.release import ReleasePlan
    from relnotes_store.models import PullRequest, User

THANKS_INTRO = "Last but certainly not least, a big ***Thank You*** to these contributors:"


def format_pull_link(pull: PullRequest) -> str:
    return f"[#{pull.number}]({pull.html_url})"


def format_pull_links(pulls: Iterable[PullRequest]) -> str:
    return ", ".join(format_pull_link(p) for p in pulls)


def format_user(user: User) -> str:
    if user.name:
        return f"[@{user.login} ({user.name})]({user.html_url})"
    return f"[@{user.login}]({user.html_url})"


def format_entry(entry: NoteEntry) -> str:
    return f"{entry.note} ({format_pull_links(entry.pulls)})"


def format_highlight(entry: NoteEntry) -> str:
    if entry.component.fallback:
        return format_entry(entry)
    return f"{entry.component.name}: {format_entry(entry)}"


def format_credit_line(line: CreditLine) -> str:
    if line.kind is CreditKind.REVIEW:
        return f"Code review for {format_pull_links(line.pulls)}"
    return f"{line.note} ({format_pull_links(line.pulls)})"


def render(plan: ReleasePlan) -> str:
    """Return the release-notes document; sections without content are left out."""
    blocks = [f"# {plan.title}"]

    if plan.highlights:
        lines = ["## Highlights", ""]
        lines.extend(f"* {format_highlight(entry)}" for entry in plan.highlights)
        blocks.append("\n".join(lines))

    for section in plan.sections:
        lines = [f"## {section.component.name}", ""]
        lines.extend(f"* {format_entry(entry)}" for entry in section.entries)
        blocks.append("\n".join(lines))

    if plan.credits:
        blocks.append(f"## Thank you\n\n{THANKS_INTRO}")
        for component_credits in plan.credits:
            lines = [f"### Contributions to `{component_credits.component.name}`:", ""]
            for credit in component_credits.entries:
                rendered = [format_credit_line(line) for line in credit.lines]
                if len(rendered) == 1:
                    lines.append(f"* {format_user(credit.user)}: {rendered[0]}")
                else:
                    lines.append(f"* {format_user(credit.user)}:")
                    lines.extend(f"  * {line}" for line in rendered)
            blocks.append("\n".join(lines))

    return "\n\n".join(blocks) + "\n"
