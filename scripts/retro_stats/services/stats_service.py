#------------------------------------------------------------
#                      stats_service.py
#         Aggregates repositories, commits, languages and
#             search counts into one ActivityStats.

import sys
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional
import requests
from ..config import NOT_AVAILABLE
from ..models import (
    REPO_STATUS_FAILED,
    REPO_STATUS_OK,
    REPO_STATUS_PARTIAL,
    ActivityStats,
    RepoActivity,
    RepositorySummary,
    RetroStatsConfig,
)
from .github_service import GitHubService
from .ranking_service import TopRanking, rank_top

PR_QUERY_TEMPLATE = "type:pr author:{username} created:>{date}"
ISSUE_QUERY_TEMPLATE = "type:issue author:{username} created:>{date}"

REPO_RESULT_MESSAGE = "  {name}: {commits} commits, {languages} languages [{status}]"
COMMITS_ERROR_TEMPLATE = "WARNING: could not list commits for {name}: {error}"
LANGUAGES_ERROR_TEMPLATE = "WARNING: could not read languages for {name}: {error}"
NO_LANGUAGES_WARNING = "WARNING: no language information found"
LANGUAGE_TOTALS_MESSAGE = "Language totals: {totals}"


# This function does compute the lookback boundary in UTC.
def lookback_boundary(now: Optional[datetime] = None, days: int = 7) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now - timedelta(hours=24 * days)


# This function does collect commits and languages for one repository.
# A commit failure zeroes the repository; a language failure only empties languages.
def collect_repo_activity(github_service: GitHubService, repo: RepositorySummary, since: datetime) -> RepoActivity:
    try:
        commit_count = github_service.count_commits_since(repo.name, since)
    except requests.RequestException as exc:
        print(COMMITS_ERROR_TEMPLATE.format(name=repo.name, error=exc), file=sys.stderr)
        return RepoActivity(repo=repo, commit_count=0, languages={}, status=REPO_STATUS_FAILED, error=str(exc))

    try:
        languages = github_service.fetch_languages(repo.name)
    except requests.RequestException as exc:
        print(LANGUAGES_ERROR_TEMPLATE.format(name=repo.name, error=exc), file=sys.stderr)
        return RepoActivity(repo=repo, commit_count=commit_count, languages={}, status=REPO_STATUS_PARTIAL, error=str(exc))

    return RepoActivity(repo=repo, commit_count=commit_count, languages=languages, status=REPO_STATUS_OK)


# This function does sum per-language byte counts across repositories.
# First appearance decides a language's position in the tally.
def tally_languages(outcomes: Iterable[RepoActivity]) -> Dict[str, int]:
    totals: Dict[str, int] = {}
    for outcome in outcomes:
        for language, byte_count in outcome.languages.items():
            totals[language] = totals.get(language, 0) + int(byte_count or 0)
    return totals


# This function does pick the repository with the most commits.
# Ties keep the earliest repository; zero-commit repositories never qualify.
def most_active_repo(outcomes: Iterable[RepoActivity]) -> str:
    ranking: TopRanking[str] = TopRanking(1)
    for outcome in outcomes:
        if outcome.status != REPO_STATUS_FAILED and outcome.commit_count > 0:
            ranking.offer(outcome.repo.name, outcome.commit_count)
    top = ranking.top()
    return top[0] if top else NOT_AVAILABLE


# This function does build ActivityStats from already collected pieces.
# It holds no I/O so the aggregation rules can be checked directly.
def build_activity_stats(
    config: RetroStatsConfig,
    repos: List[RepositorySummary],
    outcomes: List[RepoActivity],
    pr_count: int,
    issue_count: int,
    account_created: str,
) -> ActivityStats:
    top_languages = rank_top(tally_languages(outcomes), config.top_language_count)

    private_repos = sum(1 for repo in repos if repo.is_private)
    return ActivityStats(
        account=config.account,
        commit_count_7d=sum(outcome.commit_count for outcome in outcomes),
        most_active_repo=most_active_repo(outcomes),
        pr_count_7d=pr_count,
        issue_count_7d=issue_count,
        top_languages=tuple(top_languages),
        top_language_count=config.top_language_count,
        total_repos=len(repos),
        public_repos=len(repos) - private_repos,
        private_repos=private_repos,
        total_stars=sum(repo.star_count for repo in repos),
        total_forks=sum(repo.fork_count for repo in repos),
        account_created=account_created,
        repo_outcomes=tuple(outcomes),
    )


# This function does run the whole aggregation for the configured account.
# Repositories are visited one at a time in listing order.
def collect_activity_stats(
    github_service: GitHubService,
    config: RetroStatsConfig,
    now: Optional[datetime] = None,
) -> ActivityStats:
    since = lookback_boundary(now, config.lookback_days)
    repos = github_service.fetch_repos()

    outcomes: List[RepoActivity] = []
    for repo in repos:
        outcome = collect_repo_activity(github_service, repo, since)
        print(
            REPO_RESULT_MESSAGE.format(
                name=repo.name,
                commits=outcome.commit_count,
                languages=len(outcome.languages),
                status=outcome.status,
            )
        )
        outcomes.append(outcome)

    totals = tally_languages(outcomes)
    if totals:
        print(LANGUAGE_TOTALS_MESSAGE.format(totals=totals))
    else:
        print(NO_LANGUAGES_WARNING, file=sys.stderr)

    since_date = since.strftime("%Y-%m-%d")
    pr_count = github_service.count_search_items(PR_QUERY_TEMPLATE.format(username=config.account, date=since_date))
    issue_count = github_service.count_search_items(ISSUE_QUERY_TEMPLATE.format(username=config.account, date=since_date))
    account_created = github_service.fetch_account_created_at()

    return build_activity_stats(config, repos, outcomes, pr_count, issue_count, account_created)
