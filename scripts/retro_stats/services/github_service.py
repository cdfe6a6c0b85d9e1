#------------------------------------------------------------
#                      github_service.py
#               Handles GitHub API requests and
#                  paginated response shaping.

import sys
from datetime import datetime
from typing import Dict, Iterator, List, Optional
import requests
from dateutil import parser as date_parser
from ..config import (
    GITHUB_API_ACCEPT_HEADER,
    GITHUB_API_BASE_URL,
    GITHUB_COMMITS_PER_PAGE,
    GITHUB_REQUEST_TIMEOUT_SECONDS,
    GITHUB_SEARCH_PER_PAGE,
    NOT_AVAILABLE,
)
from ..models import RepositorySummary, RetroStatsConfig

AUTH_USER_ENDPOINT = "/user"
AUTH_REPOS_ENDPOINT = "/user/repos"
USER_REPOS_ENDPOINT_TEMPLATE = "/users/{username}/repos"
USER_PROFILE_ENDPOINT_TEMPLATE = "/users/{username}"
COMMITS_ENDPOINT_TEMPLATE = "/repos/{owner}/{repo}/commits"
LANGUAGES_ENDPOINT_TEMPLATE = "/repos/{owner}/{repo}/languages"
SEARCH_ISSUES_ENDPOINT = "/search/issues"
SEARCH_ITEMS_KEY = "items"

FETCH_REPOS_MESSAGE = "Fetching repositories for {username} ..."
AUTH_REPOS_MESSAGE = "Using authenticated /user/repos endpoint (private repositories included)"
PUBLIC_REPOS_MESSAGE = "Using public /users/{username}/repos endpoint"
TOKEN_OWNER_MISMATCH_TEMPLATE = "WARNING: token belongs to {login!r}, not {username!r}; listing public repositories only"
TOKEN_USER_ERROR_TEMPLATE = "WARNING: could not identify the token owner: {error}"
PAGE_RESULT_MESSAGE = "Page {page}: Found {count} repositories"
TOTAL_REPOS_MESSAGE = "Total repositories found: {count}"
NO_REPOS_WARNING_TEMPLATE = "WARNING: no repositories found for {username!r}; check the account name"
REPO_LIST_ERROR_TEMPLATE = "WARNING: listing repositories stopped at page {page}: {error}"
PROFILE_ERROR_TEMPLATE = "WARNING: could not read profile for {username!r}: {error}"
SEARCH_LIMIT_WARNING_TEMPLATE = "WARNING: search {query!r} stopped at the {max_pages}-page limit"


class GitHubService:

    # This function does initialize the service with a reusable HTTP session.
    # It stores runtime configuration used by API methods.
    def __init__(self, config: RetroStatsConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session if session is not None else requests.Session()

    # This function does build request headers for GitHub API calls.
    # It adds auth headers when a token is configured.
    def headers(self) -> Dict[str, str]:
        headers = {"Accept": GITHUB_API_ACCEPT_HEADER}
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    def _get(self, path: str, params: Optional[dict] = None):
        url = path if path.startswith("http") else f"{GITHUB_API_BASE_URL}{path}"
        response = self.session.get(
            url,
            params=params,
            headers=self.headers(),
            timeout=GITHUB_REQUEST_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        return response.json()

    # This function does walk a paginated list endpoint one page at a time.
    # A short or empty page ends the walk, as does reaching max_pages.
    def iter_pages(
        self,
        path: str,
        params: Optional[dict] = None,
        per_page: int = GITHUB_COMMITS_PER_PAGE,
        items_key: Optional[str] = None,
        max_pages: Optional[int] = None,
    ) -> Iterator[List[dict]]:
        page = 1
        while True:
            query = dict(params or {})
            query.update({"per_page": per_page, "page": page})
            data = self._get(path, query)
            items = (data or {}).get(items_key, []) if items_key else (data or [])
            if not items:
                return
            yield items
            if len(items) < per_page:
                return
            if max_pages is not None and page >= max_pages:
                return
            page += 1

    # This function does choose the repository listing endpoint.
    # Only a token owned by the configured account can see its private repositories.
    def repo_listing(self):
        username = self.config.account
        public = (USER_REPOS_ENDPOINT_TEMPLATE.format(username=username), {"type": "all", "sort": "updated"})
        if not self.config.github_token:
            print(PUBLIC_REPOS_MESSAGE.format(username=username))
            return public

        try:
            login = (self._get(AUTH_USER_ENDPOINT) or {}).get("login") or ""
        except requests.RequestException as exc:
            print(TOKEN_USER_ERROR_TEMPLATE.format(error=exc), file=sys.stderr)
            return public
        if login.lower() != username.lower():
            print(TOKEN_OWNER_MISMATCH_TEMPLATE.format(login=login, username=username), file=sys.stderr)
            return public

        print(AUTH_REPOS_MESSAGE)
        return AUTH_REPOS_ENDPOINT, {"affiliation": "owner", "visibility": "all", "sort": "updated"}

    # This function does list every repository of the configured account.
    # A failing page ends the listing and keeps what was already collected.
    def fetch_repos(self) -> List[RepositorySummary]:
        username = self.config.account
        print(FETCH_REPOS_MESSAGE.format(username=username))
        path, params = self.repo_listing()

        repos: List[RepositorySummary] = []
        page = 0
        try:
            for page, items in enumerate(self.iter_pages(path, params, per_page=self.config.page_size), start=1):
                print(PAGE_RESULT_MESSAGE.format(page=page, count=len(items)))
                repos.extend(RepositorySummary.from_api(item) for item in items)
        except requests.RequestException as exc:
            print(REPO_LIST_ERROR_TEMPLATE.format(page=page + 1, error=exc), file=sys.stderr)

        if not repos:
            print(NO_REPOS_WARNING_TEMPLATE.format(username=username), file=sys.stderr)
        print(TOTAL_REPOS_MESSAGE.format(count=len(repos)))
        return repos

    # This function does count commits pushed to a repository since a moment.
    # Errors propagate so the caller can record the repository as failed.
    def count_commits_since(self, repo_name: str, since: datetime) -> int:
        path = COMMITS_ENDPOINT_TEMPLATE.format(owner=self.config.account, repo=repo_name)
        params = {"since": since.strftime("%Y-%m-%dT%H:%M:%SZ")}
        return sum(len(items) for items in self.iter_pages(path, params, per_page=GITHUB_COMMITS_PER_PAGE))

    # This function does fetch the language byte breakdown of a repository.
    def fetch_languages(self, repo_name: str) -> Dict[str, int]:
        path = LANGUAGES_ENDPOINT_TEMPLATE.format(owner=self.config.account, repo=repo_name)
        data = self._get(path)
        if not isinstance(data, dict):
            return {}
        return {str(language): int(byte_count or 0) for language, byte_count in data.items()}

    # This function does read the account creation date from the profile.
    # It returns N/A instead of failing the run.
    def fetch_account_created_at(self) -> str:
        username = self.config.account
        try:
            profile = self._get(USER_PROFILE_ENDPOINT_TEMPLATE.format(username=username))
            created_at = date_parser.isoparse(profile["created_at"])
        except (requests.RequestException, KeyError, TypeError, ValueError) as exc:
            print(PROFILE_ERROR_TEMPLATE.format(username=username, error=exc), file=sys.stderr)
            return NOT_AVAILABLE
        return created_at.strftime("%Y-%m-%d")

    # This function does count issues or pull requests matching a search query.
    # It sums page sizes until a short page; max_pages bounds the walk when set.
    def count_search_items(self, query: str) -> int:
        max_pages = self.config.search_max_pages
        total = 0
        pages = 0
        for items in self.iter_pages(
            SEARCH_ISSUES_ENDPOINT,
            {"q": query},
            per_page=GITHUB_SEARCH_PER_PAGE,
            items_key=SEARCH_ITEMS_KEY,
            max_pages=max_pages,
        ):
            total += len(items)
            pages += 1
        if max_pages is not None and pages >= max_pages and total == pages * GITHUB_SEARCH_PER_PAGE:
            print(SEARCH_LIMIT_WARNING_TEMPLATE.format(query=query, max_pages=max_pages), file=sys.stderr)
        return total
