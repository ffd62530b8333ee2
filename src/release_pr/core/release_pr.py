"""Release PR orchestration.

One run of :class:`ReleasePR` moves through these states:

    NO_CANDIDATE
      ├─> PENDING_RELEASE_EXISTS    a merged release PR awaits its release
      └─> COMPUTING
            ├─> NO_USER_FACING_CHANGE
            └─> PR_OPEN             PR opened, labeled, older ones closed

Remote calls are made strictly in sequence: the pending-release check
happens before any PR is opened, and stale PRs are closed only after the
new PR exists, so retirement never closes the PR it just created.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import TYPE_CHECKING

from release_pr.checkpoint import CheckpointType, checkpoint
from release_pr.core.candidate import ReleaseCandidate, coerce_release_candidate
from release_pr.core.changelog import generate_changelog_entry, is_trivial_changelog
from release_pr.core.commits import calculate_bump, filter_skip_release_commits, parse_commits
from release_pr.core.strategies import get_strategy
from release_pr.core.version import BumpType, Version
from release_pr.exceptions import InvalidVersionError

if TYPE_CHECKING:
    from release_pr.config.models import ReleasePRConfig
    from release_pr.core.commits import ParsedCommit
    from release_pr.core.strategies import ReleaseStrategy
    from release_pr.updaters import Update
    from release_pr.vcs.base import SourceControl
    from release_pr.vcs.models import Commit, PullRequest, Tag

logger = logging.getLogger(__name__)

PR_BODY_HEADER = ":robot: I have created a release \\*beep\\* \\*boop\\* \n---\n"


class ReleasePRState(StrEnum):
    NO_CANDIDATE = "no_candidate"
    PENDING_RELEASE_EXISTS = "pending_release_exists"
    COMPUTING = "computing"
    NO_USER_FACING_CHANGE = "no_user_facing_change"
    PR_OPEN = "pr_open"


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    """Everything needed to open the release PR, computed without side effects."""

    candidate: ReleaseCandidate
    bump: BumpType
    commits: list[Commit]
    parsed: list[ParsedCommit]
    changelog_entry: str
    updates: list[Update]
    branch: str
    title: str
    body: str

    @property
    def sha(self) -> str:
        """Branch point of the release PR: the newest commit considered."""
        return self.commits[0].sha


@dataclass(frozen=True, slots=True)
class ReleasePROutcome:
    """Result of a run.

    Attributes:
        state: Terminal state reached
        pr_number: Opened PR, or the pending one, if any
        candidate: Candidate the PR was opened for
        closed: Numbers of stale PRs closed during the run
    """

    state: ReleasePRState
    pr_number: int | None = None
    candidate: ReleaseCandidate | None = None
    closed: list[int] = field(default_factory=list)


class ReleasePR:
    """Keeps a single release PR open for the pending release.

    The release strategy is resolved in the constructor, so an unknown
    release type fails before any remote call is made.
    """

    def __init__(
        self,
        config: ReleasePRConfig,
        scm: SourceControl,
        strategy: ReleaseStrategy | None = None,
        *,
        today: date | None = None,
    ):
        self.config = config
        self.scm = scm
        self.strategy = strategy or get_strategy(config)
        self.today = today
        self.state = ReleasePRState.NO_CANDIDATE

    @property
    def labels(self) -> list[str]:
        return self.config.labels

    def run(self) -> ReleasePROutcome:
        """Run the full release PR lifecycle once."""
        pending = self.find_pending_release()
        if pending is not None:
            self.state = ReleasePRState.PENDING_RELEASE_EXISTS
            return ReleasePROutcome(self.state, pr_number=pending.number)

        plan = self.plan()
        if plan is None:
            self.state = ReleasePRState.NO_USER_FACING_CHANGE
            return ReleasePROutcome(self.state)

        pr_number = self.scm.open_pr(
            branch=plan.branch,
            version=plan.candidate.version,
            sha=plan.sha,
            updates=plan.updates,
            title=plan.title,
            body=plan.body,
            labels=self.labels,
        )
        self.scm.add_labels(pr_number, self.labels)
        checkpoint(
            f"opened pull #{pr_number} for {plan.candidate.version}",
            CheckpointType.SUCCESS,
        )
        self.state = ReleasePRState.PR_OPEN

        closed = self.close_stale_release_prs(pr_number)
        return ReleasePROutcome(self.state, pr_number=pr_number, candidate=plan.candidate, closed=closed)

    def find_pending_release(self) -> PullRequest | None:
        """Return a merged release PR that has not been released yet."""
        pr = self.scm.find_merged_release_pr(self.labels)
        if pr is not None:
            checkpoint(f"pull #{pr.number} {pr.sha} has not yet been released", CheckpointType.FAILURE)
        return pr

    def plan(self) -> ReleasePlan | None:
        """Compute the release PR contents.

        Returns:
            The plan, or None when there are no user facing changes
        """
        self.state = ReleasePRState.COMPUTING
        commits_config = self.config.commits

        latest_tag = self.scm.latest_tag()
        since = latest_tag.sha if latest_tag else None
        commits = self._commits_since(since)
        # The branch point stays the newest commit, skipped or not.
        releasable = filter_skip_release_commits(commits, commits_config.skip_release_patterns)
        parsed = parse_commits(releasable, commits_config)

        bump = calculate_bump(
            parsed,
            commits_config,
            pre_major=_is_pre_major(latest_tag),
            bump_minor_pre_major=self.config.bump_minor_pre_major,
        )
        logger.debug("Resolved %s bump from %d conventional commits", bump, len(parsed))

        if not self.config.release_as and bump == BumpType.NONE:
            self._report_no_changes(since)
            return None

        candidate = coerce_release_candidate(
            latest_tag,
            bump,
            self.config.release_as,
            seed_version=self.config.initial_version,
        )
        changelog_entry = generate_changelog_entry(
            candidate,
            parsed,
            self.config.changelog,
            repo_url=self.config.repo_url,
            tag_prefix=self.config.tag_prefix,
            today=self.today,
        )

        # A one line changelog means no interesting commits were found.
        if not commits or is_trivial_changelog(changelog_entry):
            self._report_no_changes(since)
            return None

        return ReleasePlan(
            candidate=candidate,
            bump=bump,
            commits=commits,
            parsed=parsed,
            changelog_entry=changelog_entry,
            updates=self.strategy.build_updates(candidate, changelog_entry),
            branch=self.config.branch_for(candidate.version),
            title=f"chore: release {candidate.version}",
            body=f"{PR_BODY_HEADER}{changelog_entry}",
        )

    def close_stale_release_prs(self, current_pr_number: int) -> list[int]:
        """Close every open release PR other than ``current_pr_number``."""
        closed = []
        for pr in self.scm.find_open_release_prs(self.labels):
            # Keep the most up-to-date release PR.
            if pr.number == current_pr_number:
                continue
            checkpoint(f"closing pull #{pr.number}", CheckpointType.FAILURE)
            self.scm.close_pr(pr.number)
            closed.append(pr.number)
        return closed

    def _commits_since(self, sha: str | None) -> list[Commit]:
        commits = self.scm.commits_since_sha(sha)
        since = sha or "beginning of time"
        if commits:
            checkpoint(f"found {len(commits)} commits since {since}", CheckpointType.SUCCESS)
        else:
            checkpoint(f"no commits found since {since}", CheckpointType.FAILURE)
        return commits

    def _report_no_changes(self, since: str | None) -> None:
        checkpoint(
            f"no user facing commits found since {since or 'beginning of time'}",
            CheckpointType.FAILURE,
        )


def _is_pre_major(tag: Tag | None) -> bool:
    if tag is None:
        return False
    try:
        return Version.parse(tag.version).is_pre_major
    except InvalidVersionError:
        # Reported by coerce_release_candidate with the offending version.
        return False
