from __future__ import annotations

from urllib.parse import urlsplit

import requests


class FakeResponse:
    def __init__(self, payload, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def json(self):
        return self.payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Routes GET requests by URL path.

    A route is either a list of page payloads (indexed by the ``page``
    parameter, with an empty list past the end), an HTTP status code to
    fail with, or a single payload returned for every call.
    """

    def __init__(self, routes: dict) -> None:
        self.routes = routes
        self.calls: list[tuple[str, dict]] = []

    def get(self, url, params=None, headers=None, timeout=None):
        path = urlsplit(url).path
        params = dict(params or {})
        self.calls.append((path, params))
        route = self.routes.get(path)
        if route is None:
            return FakeResponse({"message": "Not Found"}, status_code=404)
        if isinstance(route, int):
            return FakeResponse({"message": "error"}, status_code=route)
        if isinstance(route, list):
            index = int(params.get("page", 1)) - 1
            return FakeResponse(route[index] if index < len(route) else [])
        return FakeResponse(route)

    def calls_to(self, path: str) -> list[dict]:
        return [params for call_path, params in self.calls if call_path == path]


def repo_payload(name: str, private: bool = False, stars: int = 0, forks: int = 0) -> dict:
    return {"name": name, "private": private, "stargazers_count": stars, "forks_count": forks}


def commits(count: int) -> list[dict]:
    return [{"sha": f"{index:040d}"} for index in range(count)]
