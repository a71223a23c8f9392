"""Creates one merge request per requested target branch."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .errors import ApiError
from .manager import GitLabManager, MergeRequestResult
from .title import format_title

logger = logging.getLogger(__name__)


class FailurePolicy(str, Enum):
    """What to do with the remaining target branches after one fails."""

    ABORT = "abort"
    CONTINUE = "continue"


class MergeRequestSpec(BaseModel):
    """Everything needed to open merge requests into one or more target branches."""

    model_config = ConfigDict(frozen=True)

    repository: str = Field(min_length=1)
    source_branch: str = Field(min_length=1)
    target_branches: tuple[str, ...] = Field(min_length=1)
    title: str
    description: str = ""
    ticket_ids: tuple[str, ...] = ()


class BranchOutcome(BaseModel):
    """Result or error of a single target branch."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    target_branch: str
    result: MergeRequestResult | None = None
    error: ApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchReport(BaseModel):
    """Outcomes of a run, in target branch order."""

    outcomes: list[BranchOutcome] = []

    @property
    def succeeded(self) -> list[MergeRequestResult]:
        return [o.result for o in self.outcomes if o.result is not None]

    @property
    def failed(self) -> list[BranchOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failed


OutcomeCallback = Callable[[BranchOutcome], None]


class MergeRequestCreator:
    """Runs resolve + submit for every target branch, sequentially."""

    def __init__(
        self,
        manager: GitLabManager,
        policy: FailurePolicy = FailurePolicy.ABORT,
        on_outcome: OutcomeCallback | None = None,
    ):
        """
        Initialize the creator.

        Args:
            manager: Manager used for project lookup and submission
            policy: Behaviour of ``create_batch`` after a failed branch
            on_outcome: Called once per processed branch, as soon as it is done
        """
        self.manager = manager
        self.policy = policy
        self.on_outcome = on_outcome

    def create_one(self, spec: MergeRequestSpec, target_branch: str) -> MergeRequestResult:
        """Resolve the project and create the merge request into ``target_branch``."""
        title = format_title(spec.title, target_branch, spec.ticket_ids)
        project = self.manager.resolve_project(spec.repository)
        return self.manager.submit_merge_request(
            project.id,
            spec.source_branch,
            target_branch,
            title,
            spec.description,
        )

    def create_all(self, spec: MergeRequestSpec) -> list[MergeRequestResult]:
        """
        Create merge requests for every target branch, stopping at the first error.

        Args:
            spec: Merge request specification

        Returns:
            Created merge requests in target branch order

        Raises:
            ApiError: The first lookup or submission failure; later branches are not attempted
        """
        results = []
        for target_branch in spec.target_branches:
            result = self.create_one(spec, target_branch)
            results.append(result)
            self._report(BranchOutcome(target_branch=target_branch, result=result))
        return results

    def create_batch(self, spec: MergeRequestSpec) -> BatchReport:
        """
        Create merge requests for every target branch according to the failure policy.

        With ``FailurePolicy.ABORT`` the batch stops after the first failed
        branch; with ``FailurePolicy.CONTINUE`` every branch is attempted.

        Args:
            spec: Merge request specification

        Returns:
            One outcome per attempted branch
        """
        report = BatchReport()
        for target_branch in spec.target_branches:
            try:
                outcome = BranchOutcome(target_branch=target_branch, result=self.create_one(spec, target_branch))
            except ApiError as e:
                logger.warning("Merge request into %s failed: %s", target_branch, e)
                outcome = BranchOutcome(target_branch=target_branch, error=e)

            report.outcomes.append(outcome)
            self._report(outcome)

            if not outcome.ok and self.policy == FailurePolicy.ABORT:
                skipped = len(spec.target_branches) - len(report.outcomes)
                if skipped:
                    logger.info("Aborting, %d target branch(es) not attempted", skipped)
                break

        return report

    def _report(self, outcome: BranchOutcome) -> None:
        if self.on_outcome is not None:
            self.on_outcome(outcome)
