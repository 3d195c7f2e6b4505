"""ContextVar-based conversion configuration for spanmark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per convert() call (or per Formatter instance) and read by
the span builder.

Usage:
    # Direct builder usage (advanced)
    from spanmark.config import ConvertConfig, set_convert_config, reset_convert_config

    set_convert_config(ConvertConfig(support_nesting=False))
    try:
        styled = SpanBuilder(resolver).build(scan(markup))
    finally:
        reset_convert_config()

    # Or use the context manager
    with convert_config_context(ConvertConfig(unmatched_close="drop")):
        styled = SpanBuilder(resolver).build(scan(markup))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from spanmark.errors import InvalidConfigurationError

UNMATCHED_CLOSE_POLICIES = ("literal", "drop")


@dataclass(frozen=True, slots=True)
class ConvertConfig:
    """Immutable conversion configuration.

    Attributes:
        support_nesting: Track open tags on a stack. When False only a single
            span can be active at a time (faster, for inputs known to be flat).
        unmatched_close: What to do with a close tag that has no open tag:
            "literal" keeps its markup in the output text, "drop" discards it.

    """

    support_nesting: bool = True
    unmatched_close: str = "literal"

    def __post_init__(self) -> None:
        if self.unmatched_close not in UNMATCHED_CLOSE_POLICIES:
            raise InvalidConfigurationError(
                f"expected one of {', '.join(UNMATCHED_CLOSE_POLICIES)}, "
                f"got {self.unmatched_close!r}",
                option="unmatched_close",
            )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ConvertConfig":
        """Create ConvertConfig from dictionary.

        Only includes keys that are valid ConvertConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> ConvertConfig.from_dict({"support_nesting": False, "other": 1})
            ConvertConfig(support_nesting=False, unmatched_close='literal')

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ConvertConfig = ConvertConfig()

_convert_config: ContextVar[ConvertConfig] = ContextVar(
    "convert_config",
    default=_DEFAULT_CONFIG,
)


def get_convert_config() -> ConvertConfig:
    """Get current conversion configuration (thread-local)."""
    return _convert_config.get()


def set_convert_config(config: ConvertConfig) -> None:
    """Set conversion configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _convert_config.set(config)


def reset_convert_config() -> None:
    """Reset to the default configuration singleton."""
    _convert_config.set(_DEFAULT_CONFIG)


@contextmanager
def convert_config_context(config: ConvertConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with convert_config_context(ConvertConfig(support_nesting=False)):
        ...     get_convert_config().support_nesting
        False

    """
    previous = _convert_config.get()
    _convert_config.set(config)
    try:
        yield
    finally:
        _convert_config.set(previous)


__all__ = [
    "ConvertConfig",
    "UNMATCHED_CLOSE_POLICIES",
    "get_convert_config",
    "set_convert_config",
    "reset_convert_config",
    "convert_config_context",
]
