#------------------------------------------------------------
#                      markdown_view.py
#             Renders the status README and the fenced
#                    text copy of the panel.

from datetime import datetime
from typing import List, Optional
from dateutil import parser as date_parser
from dateutil import relativedelta
from ..config import NOT_AVAILABLE
from ..models import ActivityStats
from .panel_view import format_timestamp

PANEL_FENCE = "```"
README_TEMPLATE = """# GitHub Stats

![Animated GitHub stats]({gif_name})

## Last 7 days
- **Commits:** {commits}
- **PRs opened:** {prs}
- **Issues opened:** {issues}
- **Most active repository:** {most_active}

## Languages
{languages}

## Repositories
- **Total:** {total_repos} ({public_repos} public, {private_repos} private)
- **Stars/Forks:** {stars}/{forks}
- **Member since:** {member_since}

Updated at: {updated_at}

---
"""
LANGUAGE_LINE_TEMPLATE = "{rank}. **{language}**"
NO_LANGUAGE_DATA_MESSAGE = "_No language data available yet._"


def render_panel_markdown(lines: List[str]) -> str:
    return "\n".join([PANEL_FENCE, *lines, PANEL_FENCE]) + "\n"


# This function does describe how long an account has existed.
# It returns an empty string when the creation date is unknown.
def account_age(created: str, now: datetime) -> str:
    if not created or created == NOT_AVAILABLE:
        return ""
    created_at = date_parser.isoparse(created).date()
    delta = relativedelta.relativedelta(now.date(), created_at)
    if delta.years > 0:
        return f"{delta.years} year{'s' if delta.years != 1 else ''}"
    if delta.months > 0:
        return f"{delta.months} month{'s' if delta.months != 1 else ''}"
    return f"{delta.days} day{'s' if delta.days != 1 else ''}"


def render_language_list(stats: ActivityStats) -> str:
    if not stats.top_languages:
        return NO_LANGUAGE_DATA_MESSAGE
    return "\n".join(
        LANGUAGE_LINE_TEMPLATE.format(rank=rank, language=language)
        for rank, (language, _) in enumerate(stats.top_languages, start=1)
    )


# This function does render the README status document.
# It repeats the panel figures in prose next to the animated image.
def render_readme(stats: ActivityStats, gif_name: str, updated_at: datetime, now: Optional[datetime] = None) -> str:
    age = account_age(stats.account_created, now or updated_at)
    member_since = f"{stats.account_created} ({age})" if age else stats.account_created
    return README_TEMPLATE.format(
        gif_name=gif_name,
        commits=stats.commit_count_7d,
        prs=stats.pr_count_7d,
        issues=stats.issue_count_7d,
        most_active=stats.most_active_repo,
        languages=render_language_list(stats),
        total_repos=stats.total_repos,
        public_repos=stats.public_repos,
        private_repos=stats.private_repos,
        stars=stats.total_stars,
        forks=stats.total_forks,
        member_since=member_since,
        updated_at=format_timestamp(updated_at),
    )
