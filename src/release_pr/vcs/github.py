"""GitHub implementation of the source-control interface (REST v3 over httpx)."""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING, Any

import httpx

from release_pr.core.version import Version
from release_pr.exceptions import InvalidVersionError, UpdaterError
from release_pr.vcs.models import Commit, PullRequest, Tag
from release_pr.vcs.urls import parse_github_repo_url

if TYPE_CHECKING:
    from collections.abc import Iterator

    from release_pr.updaters import Update

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
PER_PAGE = 100


class GitHub:
    """Synchronous GitHub REST client scoped to one repository."""

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str | None = None,
        *,
        base_url: str = DEFAULT_API_URL,
        tag_prefix: str = "v",
        client: httpx.Client | None = None,
    ):
        """Initialize the client.

        Args:
            owner: Repository owner (user or organization)
            repo: Repository name
            token: Personal access or App token with write access
            base_url: API base URL (for GitHub Enterprise)
            tag_prefix: Prefix stripped from tag names before version parsing
            client: Preconfigured httpx client, mainly for tests
        """
        self.owner = owner
        self.repo = repo
        self.tag_prefix = tag_prefix
        self.base_url = base_url.rstrip("/")
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token.strip()}"
        self._client = client or httpx.Client(base_url=self.base_url, headers=headers, timeout=30.0)
        self._default_branch: str | None = None

    @classmethod
    def from_repo_url(cls, repo_url: str, token: str | None = None, **kwargs: Any) -> GitHub:
        owner, repo = parse_github_repo_url(repo_url)
        return cls(owner, repo, token, **kwargs)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHub:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, path)
        response = self._client.request(method, f"{self._repo_path}{path}", **kwargs)
        response.raise_for_status()
        return response

    def _get_optional(self, path: str, **params: Any) -> httpx.Response | None:
        """GET that maps 404 to None."""
        logger.debug("GET %s", path)
        response = self._client.get(f"{self._repo_path}{path}", params=params)
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response

    def _paginate(self, path: str, **params: Any) -> Iterator[dict[str, Any]]:
        page = 1
        while True:
            response = self._request("GET", path, params={**params, "per_page": PER_PAGE, "page": page})
            items = response.json()
            yield from items
            if len(items) < PER_PAGE:
                return
            page += 1

    @property
    def default_branch(self) -> str:
        if self._default_branch is None:
            self._default_branch = self._request("GET", "").json()["default_branch"]
        return self._default_branch

    @staticmethod
    def _to_pull_request(data: dict[str, Any]) -> PullRequest:
        return PullRequest(
            number=data["number"],
            sha=data.get("merge_commit_sha") or data.get("head", {}).get("sha", ""),
            title=data.get("title", ""),
            labels=tuple(label["name"] for label in data.get("labels", [])),
            head_branch=data.get("head", {}).get("ref", ""),
        )

    # ------------------------------------------------------------------
    # SourceControl
    # ------------------------------------------------------------------

    def find_merged_release_pr(self, labels: list[str]) -> PullRequest | None:
        """Scan the most recently updated closed PRs for a merged release PR."""
        response = self._request(
            "GET",
            "/pulls",
            params={"state": "closed", "sort": "updated", "direction": "desc", "per_page": PER_PAGE},
        )
        for data in response.json():
            if not data.get("merged_at"):
                continue
            pr = self._to_pull_request(data)
            if pr.has_labels(labels):
                return pr
        return None

    def latest_tag(self) -> Tag | None:
        """Return the highest semver tag; tags that are not versions are ignored."""
        best: tuple[Version, Tag] | None = None
        for data in self._paginate("/tags"):
            name = data["name"]
            text = name[len(self.tag_prefix) :] if name.startswith(self.tag_prefix) else name
            try:
                version = Version.parse(text)
            except InvalidVersionError:
                logger.debug("Ignoring non-version tag %s", name)
                continue
            if best is None or version > best[0]:
                best = (version, Tag(name=name, sha=data["commit"]["sha"], version=str(version)))
        return best[1] if best else None

    def commits_since_sha(self, sha: str | None) -> list[Commit]:
        commits = []
        for data in self._paginate("/commits", sha=self.default_branch):
            if sha is not None and data["sha"] == sha:
                return commits
            commits.append(Commit(sha=data["sha"], message=data["commit"]["message"]))
        if sha is not None:
            logger.warning("Commit %s not found on %s; using full history", sha, self.default_branch)
        return commits

    def open_pr(
        self,
        *,
        branch: str,
        version: str,
        sha: str,
        updates: list[Update],
        title: str,
        body: str,
        labels: list[str],
    ) -> int:
        logger.info("Preparing %s for %s at %s", branch, version, sha)
        self._reset_branch(branch, sha)
        for update in updates:
            self._apply_update(branch, update, title)

        existing = self._request(
            "GET",
            "/pulls",
            params={"state": "open", "head": f"{self.owner}:{branch}"},
        ).json()
        if existing:
            number = existing[0]["number"]
            self._request("PATCH", f"/pulls/{number}", json={"title": title, "body": body})
            return number

        created = self._request(
            "POST",
            "/pulls",
            json={"title": title, "body": body, "head": branch, "base": self.default_branch},
        ).json()
        return created["number"]

    def _reset_branch(self, branch: str, sha: str) -> None:
        if self._get_optional(f"/git/ref/heads/{branch}") is None:
            self._request("POST", "/git/refs", json={"ref": f"refs/heads/{branch}", "sha": sha})
        else:
            self._request("PATCH", f"/git/refs/heads/{branch}", json={"sha": sha, "force": True})

    def _apply_update(self, branch: str, update: Update, message: str) -> None:
        response = self._get_optional(f"/contents/{update.path}", ref=branch)
        content: str | None = None
        file_sha: str | None = None
        if response is not None:
            data = response.json()
            file_sha = data["sha"]
            content = self._decode_content(data)
        elif not update.create:
            logger.info("%s does not exist, skipping", update.path)
            return

        new_content = update.update_content(content)
        if new_content == content:
            return

        payload: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(new_content.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        if file_sha:
            payload["sha"] = file_sha
        self._request("PUT", f"/contents/{update.path}", json=payload)

    def _decode_content(self, data: dict[str, Any]) -> str:
        # Files over 1 MB come back with encoding "none" and no content.
        if data.get("encoding") != "base64":
            logger.debug("Fetching %s through the blob API", data.get("path"))
            data = self._request("GET", f"/git/blobs/{data['sha']}").json()
            if data.get("encoding") != "base64":
                raise UpdaterError(f"Unsupported encoding {data.get('encoding')!r} for blob {data['sha']}")
        return base64.b64decode(data["content"]).decode("utf-8")

    def add_labels(self, pr_number: int, labels: list[str]) -> None:
        self._request("POST", f"/issues/{pr_number}/labels", json={"labels": labels})

    def find_open_release_prs(self, labels: list[str]) -> list[PullRequest]:
        prs = (self._to_pull_request(data) for data in self._paginate("/pulls", state="open"))
        return [pr for pr in prs if pr.has_labels(labels)]

    def close_pr(self, pr_number: int) -> None:
        self._request("PATCH", f"/pulls/{pr_number}", json={"state": "closed"})
