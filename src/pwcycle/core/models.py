from dataclasses import dataclass, replace
from typing import List


@dataclass(frozen=True)
class CredentialRecord:
    """One row of the usernames fixture."""
    username: str


@dataclass(frozen=True)
class SecretState:
    """Password pair threaded from one iteration to the next.

    ``new_password`` never changes during a run. ``current_password`` is the
    password the next login must use; it only moves to ``new_password`` once
    an iteration has committed the change.
    """
    current_password: str
    new_password: str

    def advance(self, committed: bool) -> 'SecretState':
        """Return the state the following iteration starts from."""
        if not committed:
            return self
        return replace(self, current_password=self.new_password)


@dataclass(frozen=True)
class FixtureSet:
    """Everything loaded from the data directory for a single run."""
    usernames: List[str]
    password: str
    new_password: str

    @property
    def credentials(self) -> List[CredentialRecord]:
        return [CredentialRecord(username=u) for u in self.usernames]

    @property
    def secrets(self) -> SecretState:
        return SecretState(current_password=self.password, new_password=self.new_password)
