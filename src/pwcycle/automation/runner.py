import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Sequence, Tuple

from ..core.config import FailurePolicy
from ..core.models import CredentialRecord, SecretState
from .types import OutcomeStatus, RunOutcome

logger = logging.getLogger("pwcycle")


@dataclass
class RunSummary:
    passed: int = 0
    failed: int = 0
    skipped: int = 0

    @classmethod
    def of(cls, outcomes: Sequence[RunOutcome]) -> 'RunSummary':
        summary = cls()
        for o in outcomes:
            if o.status == OutcomeStatus.PASSED:
                summary.passed += 1
            elif o.status == OutcomeStatus.FAILED:
                summary.failed += 1
            else:
                summary.skipped += 1
        return summary

    @property
    def ok(self) -> bool:
        return self.failed == 0 and self.skipped == 0


class CycleRunner:
    """Runs the flow once per credential, in order, on a single engine.

    The current password is passed into each iteration and the next one is
    derived from that iteration's outcome, so the runs can never be reordered
    or overlapped.
    """

    def __init__(self, engine, flow, policy: FailurePolicy = FailurePolicy.CONTINUE):
        self.engine = engine
        self.flow = flow
        self.policy = policy

    def run(self, credentials: Sequence[CredentialRecord], initial_password: str, new_password: str,
            dry_run: bool = False) -> List[RunOutcome]:
        outcomes, _ = self.run_with_state(
            credentials,
            SecretState(current_password=initial_password, new_password=new_password),
            dry_run=dry_run,
        )
        return outcomes

    def run_with_state(self, credentials: Sequence[CredentialRecord], secrets: SecretState,
                       dry_run: bool = False) -> Tuple[List[RunOutcome], SecretState]:
        outcomes: List[RunOutcome] = []
        aborted_by = None

        for index, credential in enumerate(credentials, start=1):
            if aborted_by is not None:
                outcomes.append(RunOutcome(
                    username=credential.username,
                    status=OutcomeStatus.SKIPPED,
                    message=f"skipped: run aborted after failure for {aborted_by}",
                ))
                continue

            logger.debug(f"[runner] credential {index}/{len(credentials)}: {credential.username}")
            if dry_run:
                outcome = self._dry_run_outcome(credential, secrets)
            else:
                outcome = self.flow.run(self.engine, credential, secrets)
            outcomes.append(outcome)

            secrets = secrets.advance(outcome.committed)
            if outcome.status == OutcomeStatus.FAILED and self.policy == FailurePolicy.ABORT:
                logger.error(f"[runner] aborting run after failure for {credential.username}")
                aborted_by = credential.username

        return outcomes, secrets

    @staticmethod
    def _dry_run_outcome(credential: CredentialRecord, secrets: SecretState) -> RunOutcome:
        now = datetime.now(timezone.utc)
        return RunOutcome(
            username=credential.username,
            status=OutcomeStatus.PASSED,
            password_used=secrets.current_password,
            committed=True,
            message="dry-run",
            started_at=now,
            finished_at=now,
        )
