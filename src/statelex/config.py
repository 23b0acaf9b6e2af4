"""ContextVar-based scan configuration for statelex.

Provides context-local configuration using Python's ContextVars (PEP 567).
A Lexer reads the active config once, at construction, and keeps it for the
scan's lifetime. This matters for threaded scans: worker threads do not
inherit the constructor's context, so the config must travel with the Lexer.

Usage:
    from statelex.config import ScanConfig, scan_config_context

    with scan_config_context(ScanConfig(trace=True, max_idle_steps=100)):
        for item in lex("query", source, lex_start):
            ...

    # Or pass it explicitly
    lexer = Lexer("query", source, lex_start, config=ScanConfig(strict_backup=False))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Attributes:
        strict_backup: Raise CursorMisuseError when backup() is called twice
            in a row or before any next(). When False the extra backup is
            a silent no-op.
        max_idle_steps: If set, raise ScanStalledError after this many
            consecutive transitions that neither move the cursor nor emit.
        trace: Log every state transition at DEBUG level.

    """

    strict_backup: bool = True
    max_idle_steps: int | None = None
    trace: bool = False

    def __post_init__(self) -> None:
        if self.max_idle_steps is not None and self.max_idle_steps < 1:
            raise ValueError(f"max_idle_steps must be positive, got {self.max_idle_steps}")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ScanConfig":
        """Create ScanConfig from dictionary.

        Only includes keys that are valid ScanConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                ScanConfig attribute names.

        Returns:
            New ScanConfig instance with values from dict.

        Example:
            >>> config = ScanConfig.from_dict({"trace": True, "colour": "blue"})
            >>> config.trace
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get the active scan configuration for the current context."""
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for the current context.

    Args:
        config: ScanConfig instance to use for this context.

    """
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to the default configuration."""
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ScanConfig to use within the context.

    Yields:
        None

    Example:
        >>> with scan_config_context(ScanConfig(trace=True)):
        ...     items = list(lex("t", "AA", lex_start))
        >>> # Previous config restored here

    Thread Safety:
        Only affects the current context. Restores the previous config
        even if an exception is raised.

    """
    previous = _scan_config.get()
    _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.set(previous)


__all__ = [
    "ScanConfig",
    "get_scan_config",
    "reset_scan_config",
    "scan_config_context",
    "set_scan_config",
]
