from __future__ import annotations

import datetime as dt

import pytest

from retro_stats.models import ActivityStats, PanelOverflowError
from retro_stats.views.panel_view import (
    bottom_border,
    format_row,
    render_panel,
    separator,
    title_line,
    top_border,
)

UPDATED_AT = dt.datetime(2026, 10, 18, 2, 0, 5, tzinfo=dt.timezone.utc)


def _stats(top_languages=(("Python", 1500), ("JavaScript", 1000)), count: int = 2, **overrides) -> ActivityStats:
    values = dict(
        account="octo",
        commit_count_7d=23,
        most_active_repo="retro-stats",
        pr_count_7d=2,
        issue_count_7d=1,
        top_languages=tuple(top_languages),
        top_language_count=count,
        total_repos=12,
        public_repos=10,
        private_repos=2,
        total_stars=40,
        total_forks=3,
        account_created="2015-03-09",
    )
    values.update(overrides)
    return ActivityStats(**values)


@pytest.mark.parametrize("width", [39, 80])
def test_every_framed_line_has_panel_width(width: int) -> None:
    lines = render_panel(_stats(), width, UPDATED_AT)
    assert all(len(line) == width for line in lines[:-1])
    assert lines[0] == top_border(width)
    assert lines[-2] == bottom_border(width)
    assert lines[-1] == " Last update: 2026-10-18 02:00:05 UTC"


@pytest.mark.parametrize("width", [39, 80])
def test_borders_and_title(width: int) -> None:
    assert top_border(width) == "┌" + "─" * (width - 2) + "┐"
    assert separator(width) == "├" + "─" * (width - 2) + "┤"
    assert bottom_border(width) == "└" + "─" * (width - 2) + "┘"
    title = title_line("octo Stats", width)
    assert len(title) == width
    assert title.startswith("│ ") and title.endswith(" │")
    assert title.strip("│ ") == "octo Stats"


def test_compact_panel_layout() -> None:
    lines = render_panel(_stats(), 39, UPDATED_AT)
    assert lines[3] == "│ Commits (last 7 days):           23 │"
    assert lines[7] == "│ Top language #1:             Python │"
    assert lines[8] == "│ Top language #2:         JavaScript │"
    assert lines[10] == "│ Most active repo:       retro-stats │"
    assert lines[16] == "│ Member since:            2015-03-09 │"
    assert len(lines) == 19


def test_missing_language_slots_show_placeholder() -> None:
    lines = render_panel(_stats(top_languages=[("Python", 7)], count=4), 80, UPDATED_AT)
    language_lines = [line for line in lines if "Top language #" in line]
    assert len(language_lines) == 4
    assert language_lines[0].rstrip(" │").endswith("Python")
    assert all(line.rstrip(" │").endswith("N/A") for line in language_lines[1:])


def test_rendering_is_deterministic() -> None:
    assert render_panel(_stats(), 80, UPDATED_AT) == render_panel(_stats(), 80, UPDATED_AT)


def test_long_value_is_truncated_to_fit() -> None:
    row = format_row("Most active repo:", "a-really-long-repository-name", 39)
    assert len(row) == 39
    assert row == "│ Most active repo: a-really-long-re~ │"


def test_exact_fit_keeps_one_space() -> None:
    row = format_row("Label:", "x" * 28, 39)
    assert row == "│ Label: " + "x" * 28 + " │"


def test_label_too_wide_is_rejected() -> None:
    with pytest.raises(PanelOverflowError):
        format_row("x" * 35, "1", 39)


def test_long_title_is_cut() -> None:
    assert len(title_line("y" * 100, 39)) == 39
