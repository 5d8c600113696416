from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class OutcomeStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class VerificationKind(str, Enum):
    LOGIN = "LoginVerificationFailed"
    LOGOUT = "LogoutVerificationFailed"


@dataclass(frozen=True)
class Ok:
    step: str


@dataclass(frozen=True)
class StepFailure:
    """A driver interaction raised while running ``step``."""
    step: str
    username: str
    cause: str

    def describe(self) -> str:
        return f"step '{self.step}' failed for {self.username}: {self.cause}"


@dataclass(frozen=True)
class VerificationFailure:
    """An expected post-condition was not observed."""
    kind: VerificationKind
    step: str
    username: str

    def describe(self) -> str:
        return f"{self.kind.value} for {self.username} (step '{self.step}')"


@dataclass(frozen=True)
class Skipped:
    step: str
    reason: str


StepResult = Union[Ok, StepFailure, VerificationFailure, Skipped]
Failure = Union[StepFailure, VerificationFailure]


def _step_to_dict(result: StepResult) -> Dict[str, Any]:
    if isinstance(result, Ok):
        return {'step': result.step, 'result': 'ok'}
    if isinstance(result, StepFailure):
        return {'step': result.step, 'result': 'step_failure', 'username': result.username, 'cause': result.cause}
    if isinstance(result, VerificationFailure):
        return {'step': result.step, 'result': 'verification_failure', 'username': result.username, 'kind': result.kind.value}
    return {'step': result.step, 'result': 'skipped', 'reason': result.reason}


def _step_from_dict(data: Dict[str, Any]) -> StepResult:
    kind = data['result']
    if kind == 'ok':
        return Ok(step=data['step'])
    if kind == 'step_failure':
        return StepFailure(step=data['step'], username=data['username'], cause=data['cause'])
    if kind == 'verification_failure':
        return VerificationFailure(kind=VerificationKind(data['kind']), step=data['step'], username=data['username'])
    if kind == 'skipped':
        return Skipped(step=data['step'], reason=data['reason'])
    raise ValueError(f"Unknown step result: {kind}")


@dataclass
class RunOutcome:
    """Result of one credential's pass through the flow."""
    username: str
    status: OutcomeStatus
    steps: List[StepResult] = field(default_factory=list)
    failure: Optional[Failure] = None
    password_used: Optional[str] = None
    committed: bool = False
    message: str = ""
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    @property
    def passed(self) -> bool:
        return self.status == OutcomeStatus.PASSED

    @property
    def reason(self) -> str:
        if self.failure is not None:
            return self.failure.describe()
        return self.message

    def step(self, name: str) -> Optional[StepResult]:
        return next((s for s in self.steps if s.step == name), None)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the JSON report. The password itself is never written."""
        return {
            'username': self.username,
            'status': self.status.value,
            'reason': self.reason,
            'committed': self.committed,
            'steps': [_step_to_dict(s) for s in self.steps],
            'failure': _step_to_dict(self.failure) if self.failure else None,
            'message': self.message,
            'started_at': self.started_at.isoformat() if self.started_at else None,
            'finished_at': self.finished_at.isoformat() if self.finished_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RunOutcome':
        failure = _step_from_dict(data['failure']) if data.get('failure') else None
        return cls(
            username=data['username'],
            status=OutcomeStatus(data['status']),
            steps=[_step_from_dict(s) for s in data.get('steps', [])],
            failure=failure,
            committed=data.get('committed', False),
            message=data.get('message', ''),
            started_at=datetime.fromisoformat(data['started_at']) if data.get('started_at') else None,
            finished_at=datetime.fromisoformat(data['finished_at']) if data.get('finished_at') else None,
        )
