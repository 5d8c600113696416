"""Browser automation for the password cycle check.

Engines (Selenium/Playwright) implement the AutomationEngine Protocol; the
flow drives one credential through login, password change and logout, and
the runner threads the current password across credentials.
"""

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
from .engine import AutomationEngine, EngineError, EngineTimeout
from .flow import PasswordCycleFlow, STEPS
from .runner import CycleRunner, RunSummary

__all__ = [
    'AutomationEngine',
    'CycleRunner',
    'EngineError',
    'EngineTimeout',
    'Ok',
    'OutcomeStatus',
    'PasswordCycleFlow',
    'RunOutcome',
    'RunSummary',
    'STEPS',
    'Skipped',
    'StepFailure',
    'StepResult',
    'VerificationFailure',
    'VerificationKind',
]
