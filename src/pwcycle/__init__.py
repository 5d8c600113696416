# Avoid importing engine modules at top-level; they pull in browser drivers
__all__ = ["CycleRunner", "PasswordCycleFlow", "CycleConfig"]

def __getattr__(name):
    if name == "CycleRunner":
        from .automation.runner import CycleRunner
        return CycleRunner
    if name == "PasswordCycleFlow":
        from .automation.flow import PasswordCycleFlow
        return PasswordCycleFlow
    if name == "CycleConfig":
        from .core.config import CycleConfig
        return CycleConfig
    raise AttributeError(name)
