"""
Orderly Config — Settings
===========================
Runtime knobs for the listener registry and dispatcher.
Settings are frozen: build a new instance to change them.

Environment variables (all optional):
    ORDERLY_DEFAULT_PRIORITY           int, default 0
    ORDERLY_SUBSCRIBER_PREFIX          str, default "on"
    ORDERLY_PROPAGATE_LISTENER_ERRORS  1/0, true/false, yes/no
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "ORDERLY_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}.")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from None


@dataclass(frozen=True)
class OrderlySettings:
    """
    Registry and dispatch configuration.

    default_priority:          Priority for listeners added without one.
    subscriber_prefix:         Method-name prefix add_subscriber() scans for.
    propagate_listener_errors: Re-raise listener exceptions from dispatch
                               (True) or record them and continue (False).
    """

    default_priority: int = 0
    subscriber_prefix: str = "on"
    propagate_listener_errors: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.default_priority, bool) or not isinstance(
            self.default_priority, int
        ):
            raise ValueError(
                f"default_priority must be an int, got {self.default_priority!r}."
            )
        if not self.subscriber_prefix or not self.subscriber_prefix.strip():
            raise ValueError("subscriber_prefix must be a non-empty string.")

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> OrderlySettings:
        """Build settings from ORDERLY_* variables, defaults otherwise."""
        env = os.environ if environ is None else environ
        kwargs = {}

        raw = env.get(f"{ENV_PREFIX}DEFAULT_PRIORITY")
        if raw is not None:
            kwargs["default_priority"] = _parse_int(
                f"{ENV_PREFIX}DEFAULT_PRIORITY", raw
            )

        raw = env.get(f"{ENV_PREFIX}SUBSCRIBER_PREFIX")
        if raw is not None:
            kwargs["subscriber_prefix"] = raw.strip()

        raw = env.get(f"{ENV_PREFIX}PROPAGATE_LISTENER_ERRORS")
        if raw is not None:
            kwargs["propagate_listener_errors"] = _parse_bool(
                f"{ENV_PREFIX}PROPAGATE_LISTENER_ERRORS", raw
            )

        return cls(**kwargs)


DEFAULT_SETTINGS = OrderlySettings()
