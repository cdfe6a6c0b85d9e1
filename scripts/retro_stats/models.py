#------------------------------------------------------------
#                          models.py
#     Defines dataclasses and errors used by the stats pipeline.

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

REPO_STATUS_OK = "ok"
REPO_STATUS_PARTIAL = "partial"
REPO_STATUS_FAILED = "failed"


class ConfigError(ValueError):
    """Raised when the environment holds an unusable setting."""


class PanelOverflowError(ValueError):
    """Raised when a panel row cannot fit its label at the configured width."""


@dataclass(frozen=True)
class PanelPreset:
    name: str
    width: int
    top_language_count: int
    canvas_width: int
    canvas_height: int


@dataclass
class RetroStatsConfig:
    account: str
    page_size: int
    top_language_count: int
    panel_width: int
    github_token: str = ""
    lookback_days: int = 7
    search_max_pages: Optional[int] = None
    preset: Optional[PanelPreset] = None
    pacing: str = "fixed"
    hold_as_single_frame: bool = False


@dataclass(frozen=True)
class RepositorySummary:
    name: str
    is_private: bool
    star_count: int = 0
    fork_count: int = 0

    @classmethod
    def from_api(cls, repo: dict) -> "RepositorySummary":
        return cls(
            name=repo.get("name") or "",
            is_private=bool(repo.get("private")),
            star_count=int(repo.get("stargazers_count") or 0),
            fork_count=int(repo.get("forks_count") or 0),
        )


# Outcome of collecting one repository's commits and languages.
# A failed commit listing zeroes the repository out entirely.
@dataclass(frozen=True)
class RepoActivity:
    repo: RepositorySummary
    commit_count: int
    languages: Dict[str, int]
    status: str = REPO_STATUS_OK
    error: str = ""


@dataclass(frozen=True)
class ActivityStats:
    account: str
    commit_count_7d: int
    most_active_repo: str
    pr_count_7d: int
    issue_count_7d: int
    top_languages: Tuple[Tuple[str, int], ...]
    top_language_count: int
    total_repos: int
    public_repos: int
    private_repos: int
    total_stars: int
    total_forks: int
    account_created: str
    repo_outcomes: Tuple[RepoActivity, ...] = field(default=(), compare=False)

    def failed_repos(self) -> List[str]:
        return [item.repo.name for item in self.repo_outcomes if item.status == REPO_STATUS_FAILED]
