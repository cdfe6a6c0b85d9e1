#------------------------------------------------------------
#                        panel_view.py
#         Renders ActivityStats as a fixed-width bordered
#                     terminal-style panel.

from datetime import datetime
from typing import List, Tuple
from ..config import NOT_AVAILABLE
from ..models import ActivityStats, PanelOverflowError
from ..services.ranking_service import padded_names

TOP_LEFT, TOP_RIGHT = "┌", "┐"
MID_LEFT, MID_RIGHT = "├", "┤"
BOTTOM_LEFT, BOTTOM_RIGHT = "└", "┘"
HORIZONTAL = "─"
VERTICAL = "│"
TRUNCATION_MARK = "~"
# "│ " before the label and " │" after the value.
ROW_FRAME_WIDTH = 4
MIN_PANEL_WIDTH = 8

TITLE_TEMPLATE = "{account} Stats"
LAST_UPDATE_TEMPLATE = " Last update: {timestamp}"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"

ACTIVITY_ROWS = (
    ("Commits (last 7 days):", "commit_count_7d"),
    ("PRs opened (last 7 days):", "pr_count_7d"),
    ("Issues opened (last 7 days):", "issue_count_7d"),
)
LANGUAGE_LABEL_TEMPLATE = "Top language #{rank}:"
REPOSITORY_ROWS = (
    ("Most active repo:", "most_active_repo"),
    ("Total repositories:", "total_repos"),
    ("Public repositories:", "public_repos"),
    ("Private repositories:", "private_repos"),
    ("Total stars:", "total_stars"),
    ("Total forks:", "total_forks"),
    ("Member since:", "account_created"),
)


def _check_width(width: int) -> None:
    if width < MIN_PANEL_WIDTH:
        raise PanelOverflowError(f"panel width must be at least {MIN_PANEL_WIDTH}, got {width}")


def border_line(width: int, left: str, right: str) -> str:
    _check_width(width)
    return left + HORIZONTAL * (width - 2) + right


def top_border(width: int) -> str:
    return border_line(width, TOP_LEFT, TOP_RIGHT)


def separator(width: int) -> str:
    return border_line(width, MID_LEFT, MID_RIGHT)


def bottom_border(width: int) -> str:
    return border_line(width, BOTTOM_LEFT, BOTTOM_RIGHT)


# This function does center a title between the side borders.
# Titles wider than the panel are cut to fit.
def title_line(title: str, width: int) -> str:
    _check_width(width)
    inner = width - 2
    return VERTICAL + title[:inner].center(inner) + VERTICAL


# This function does format one "label ... value" row at an exact width.
# At least one space separates label and value; an overlong value is cut
# and marked with "~", and a label that cannot fit raises PanelOverflowError.
def format_row(label: str, value: str, width: int) -> str:
    _check_width(width)
    available = width - ROW_FRAME_WIDTH - len(label) - 1
    if available < 1:
        raise PanelOverflowError(f"label {label!r} does not fit a {width}-column panel")
    if len(value) > available:
        value = value[: available - 1] + TRUNCATION_MARK
    padding = width - len(label) - len(value) - ROW_FRAME_WIDTH
    return f"{VERTICAL} {label}{' ' * padding}{value} {VERTICAL}"


def language_rows(top_languages: Tuple[Tuple[str, int], ...], count: int) -> List[Tuple[str, str]]:
    names = padded_names(top_languages, count, NOT_AVAILABLE)
    return [(LANGUAGE_LABEL_TEMPLATE.format(rank=rank), name) for rank, name in enumerate(names, start=1)]


# This function does render the complete panel for one stats snapshot.
# Every line but the trailing timestamp is exactly `width` characters.
def render_panel(stats: ActivityStats, width: int, updated_at: datetime) -> List[str]:
    lines = [
        top_border(width),
        title_line(TITLE_TEMPLATE.format(account=stats.account), width),
        separator(width),
    ]
    lines.extend(format_row(label, str(getattr(stats, attr)), width) for label, attr in ACTIVITY_ROWS)
    lines.append(separator(width))
    lines.extend(
        format_row(label, value, width)
        for label, value in language_rows(stats.top_languages, stats.top_language_count)
    )
    lines.append(separator(width))
    lines.extend(format_row(label, str(getattr(stats, attr)), width) for label, attr in REPOSITORY_ROWS)
    lines.append(bottom_border(width))
    lines.append(LAST_UPDATE_TEMPLATE.format(timestamp=format_timestamp(updated_at)))
    return lines


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)
