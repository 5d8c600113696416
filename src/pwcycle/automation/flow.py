"""
The login / change-password / logout flow for a single credential.

Steps run strictly in order. A step that touches the browser and raises is
recorded as a StepFailure; a post-condition that is not observed is recorded
as a VerificationFailure. Either ends the credential's run, except that a
failed logout check still reaches the commit precondition check, so the
outcome shows the commit was considered and refused.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from ..core.models import CredentialRecord, SecretState
from .engine import AutomationEngine
from .pages import ChangePasswordPage, HomePage, LoginPage
from .sites.base_site import SiteProfile
from .sites.salesforce import SALESFORCE
from .types import (
    Ok,
    OutcomeStatus,
    RunOutcome,
    Skipped,
    StepFailure,
    StepResult,
    VerificationFailure,
    VerificationKind,
)

logger = logging.getLogger("pwcycle")

OPEN_LOGIN = "open_login"
SUBMIT_CREDENTIALS = "submit_credentials"
VERIFY_LOGIN = "verify_login"
OPEN_CHANGE_PASSWORD = "open_change_password"
SUBMIT_PASSWORD_CHANGE = "submit_password_change"
OPEN_HOME = "open_home"
LOGOUT = "logout"
VERIFY_LOGOUT = "verify_logout"
COMMIT_PASSWORD = "commit_password"

STEPS = (
    OPEN_LOGIN,
    SUBMIT_CREDENTIALS,
    VERIFY_LOGIN,
    OPEN_CHANGE_PASSWORD,
    SUBMIT_PASSWORD_CHANGE,
    OPEN_HOME,
    LOGOUT,
    VERIFY_LOGOUT,
    COMMIT_PASSWORD,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class PasswordCycleFlow:
    def __init__(
        self,
        site: SiteProfile = SALESFORCE,
        base_url: str = "https://login.salesforce.com",
        timeout_ms: int = 10000,
        security_answer: str = "Juno Beach",
    ):
        self.site = site
        self.base_url = base_url
        self.timeout_ms = timeout_ms
        self.security_answer = security_answer

    @classmethod
    def from_config(cls, config, site: Optional[SiteProfile] = None) -> 'PasswordCycleFlow':
        return cls(
            site=site or SALESFORCE,
            base_url=config.base_url,
            timeout_ms=config.wait_timeout_ms,
            security_answer=config.security_answer,
        )

    def _attempt(self, step: str, username: str, action: Callable[[], None]) -> StepResult:
        try:
            action()
        except Exception as e:
            logger.debug(f"[flow] {step} raised for {username}: {e!r}")
            return StepFailure(step=step, username=username, cause=f"{type(e).__name__}: {e}")
        return Ok(step=step)

    def _verify(self, step: str, username: str, kind: VerificationKind, probe: Callable[[], bool]) -> StepResult:
        try:
            observed = probe()
        except Exception as e:
            logger.debug(f"[flow] {step} raised for {username}: {e!r}")
            return StepFailure(step=step, username=username, cause=f"{type(e).__name__}: {e}")
        if not observed:
            return VerificationFailure(kind=kind, step=step, username=username)
        return Ok(step=step)

    def _plan(self, engine: AutomationEngine, username: str, secrets: SecretState) -> List[Tuple[str, Callable[[], StepResult]]]:
        args = (engine, self.site, self.base_url, self.timeout_ms)
        login = LoginPage(*args)
        home = HomePage(*args)
        change = ChangePasswordPage(*args)

        def verify_logout() -> bool:
            # no wait here: a missing username field is the failure being checked
            login.revisit()
            return login.is_displayed()

        return [
            (OPEN_LOGIN, lambda: self._attempt(OPEN_LOGIN, username, login.open)),
            (SUBMIT_CREDENTIALS, lambda: self._attempt(
                SUBMIT_CREDENTIALS, username, lambda: login.login(username, secrets.current_password))),
            (VERIFY_LOGIN, lambda: self._verify(VERIFY_LOGIN, username, VerificationKind.LOGIN, home.is_logged_in)),
            (OPEN_CHANGE_PASSWORD, lambda: self._attempt(OPEN_CHANGE_PASSWORD, username, change.open)),
            (SUBMIT_PASSWORD_CHANGE, lambda: self._attempt(
                SUBMIT_PASSWORD_CHANGE, username,
                lambda: change.change_password(secrets.current_password, secrets.new_password, self.security_answer))),
            (OPEN_HOME, lambda: self._attempt(OPEN_HOME, username, home.open)),
            (LOGOUT, lambda: self._attempt(LOGOUT, username, home.logout)),
            (VERIFY_LOGOUT, lambda: self._verify(VERIFY_LOGOUT, username, VerificationKind.LOGOUT, verify_logout)),
        ]

    def _commit(self, outcome: RunOutcome) -> StepResult:
        if outcome.failure is not None:
            return Skipped(step=COMMIT_PASSWORD, reason=f"precondition not met: {outcome.failure.describe()}")
        outcome.committed = True
        return Ok(step=COMMIT_PASSWORD)

    def run(self, engine: AutomationEngine, credential: CredentialRecord, secrets: SecretState) -> RunOutcome:
        username = credential.username
        outcome = RunOutcome(
            username=username,
            status=OutcomeStatus.PASSED,
            password_used=secrets.current_password,
            started_at=_now(),
        )
        logger.info(f"[flow] starting password cycle for {username}")

        try:
            for step, action in self._plan(engine, username, secrets):
                result = action()
                outcome.steps.append(result)
                logger.debug(f"[flow] {username}: {step} -> {type(result).__name__}")
                if not isinstance(result, Ok):
                    outcome.failure = result
                    break
            if outcome.steps[-1].step == VERIFY_LOGOUT:
                outcome.steps.append(self._commit(outcome))
        finally:
            self._teardown(engine, username)

        if outcome.failure is not None:
            outcome.status = OutcomeStatus.FAILED
            logger.warning(f"[flow] {outcome.failure.describe()}")
        else:
            outcome.message = "Password changed"
            logger.info(f"[flow] {username} passed")
        outcome.finished_at = _now()
        return outcome

    def _teardown(self, engine: AutomationEngine, username: str) -> None:
        try:
            engine.clear_cookies()
        except Exception as e:
            logger.warning(f"[flow] could not clear cookies after {username}: {e}")
