"""Test doubles and fixture-file writers shared across the suite."""
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from pwcycle.automation.engine import EngineTimeout


class FakeEngine:
    """Stands in for a browser.

    Every call is recorded and any action on a selector in ``fail_on`` raises.
    A selector is visible unless ``visible`` maps it to False, or ``hidden_from``
    maps it to a page visit number (1-based count of ``goto`` calls) that has
    been reached. Waiting on, typing into or clicking an invisible selector
    raises EngineTimeout, as the real engines do.
    """

    def __init__(self, visible: Optional[Dict[str, bool]] = None, fail_on: Optional[Set[str]] = None,
                 hidden_from: Optional[Dict[str, int]] = None):
        self.visible = visible if visible is not None else {}
        self.hidden_from = hidden_from or {}
        self.fail_on = fail_on or set()
        self.calls: List[Tuple] = []
        self.started = False

    def _record(self, *call):
        self.calls.append(call)
        if call[1] in self.fail_on:
            raise RuntimeError(f"no such element: {call[1]}")

    def _shown(self, selector: str) -> bool:
        if not self.visible.get(selector, True):
            return False
        visit = self.hidden_from.get(selector)
        return visit is None or len(self.visited()) < visit

    def _require_visible(self, selector: str) -> None:
        if not self._shown(selector):
            raise EngineTimeout(f"Timeout waiting for selector: {selector}")

    def start(self, headless: bool = True, user_data_dir: Optional[str] = None) -> None:
        self.started = True
        self.calls.append(("start", headless))

    def stop(self) -> None:
        self.started = False
        self.calls.append(("stop",))

    def goto(self, url: str) -> None:
        self._record("goto", url)

    def type(self, selector: str, value: str, clear: bool = True) -> None:
        self._record("type", selector, value)
        self._require_visible(selector)

    def click(self, selector: str) -> None:
        self._record("click", selector)
        self._require_visible(selector)

    def wait_for(self, selector: str, timeout_ms: int = 10000) -> None:
        self._record("wait_for", selector)
        self._require_visible(selector)

    def is_visible(self, selector: str, timeout_ms: int = 10000) -> bool:
        self._record("is_visible", selector)
        return self._shown(selector)

    def clear_cookies(self) -> None:
        self.calls.append(("clear_cookies",))

    def typed(self, selector: str) -> List[str]:
        return [c[2] for c in self.calls if c[0] == "type" and c[1] == selector]

    def visited(self) -> List[str]:
        return [c[1] for c in self.calls if c[0] == "goto"]

    def count(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)


def write_fixtures(data_dir: Path, rows=("a@x.com", "b@x.com"), password="P0", new_password="P1") -> Path:
    data_dir.mkdir(parents=True, exist_ok=True)
    lines = ["Username,Role"] + [f"{r},user" for r in rows]
    (data_dir / "passwords.csv").write_text("\n".join(lines) + "\n")
    (data_dir / "password.txt").write_text(f"  {password}\n")
    (data_dir / "newPassword.txt").write_text(f"{new_password}\n\n")
    return data_dir
