"""Structured error codes for policy-scout.

All errors follow the format PSCT-{category}{number}:
- PSCT-NET*: Remote service errors (catalog and chain index)
- PSCT-POL*: Policy resolution errors
- PSCT-CFG*: Configuration errors

Fetch errors carry a ``stage`` naming the pipeline step that failed:
``directory``, ``enumerate`` or ``metadata``.
"""

from __future__ import annotations

from typing import Any


class ScoutError(Exception):
    """Base class for all policy-scout errors.

    All errors have:
    - code: Structured error code (e.g., PSCT-POL001)
    - message: Human-readable error message
    """

    code: str = "PSCT-000"

    # Reserved attribute names that cannot be overwritten by context
    _RESERVED_ATTRS = frozenset({"code", "message", "context", "args"})

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize a policy-scout error.

        Args:
            message: Human-readable error message.
            **context: Additional context stored as error attributes.
                Reserved keys (code, message, context, args) are ignored.
        """
        self.message = message
        self.context = context
        for key, value in context.items():
            if key not in self._RESERVED_ATTRS:
                setattr(self, key, value)
        super().__init__(f"[{self.code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert error to JSON-serializable dict."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# Fetch Errors (PSCT-NET*)
class FetchError(ScoutError):
    """Base class for failures talking to a remote service."""

    code = "PSCT-NET000"


class BadStatusError(FetchError):
    """Raised when a service answers with a status outside the 2xx range.

    Error code: PSCT-NET001
    """

    code = "PSCT-NET001"

    def __init__(self, url: str, status_code: int, stage: str) -> None:
        super().__init__(
            f"{stage}: {url} returned status {status_code}",
            url=url,
            status_code=status_code,
            stage=stage,
        )


class ResponseParseError(FetchError):
    """Raised when a response body does not have the expected shape.

    Error code: PSCT-NET002
    """

    code = "PSCT-NET002"

    def __init__(self, url: str, reason: str, stage: str, **context: Any) -> None:
        super().__init__(
            f"{stage}: unexpected response from {url}: {reason}",
            url=url,
            reason=reason,
            stage=stage,
            **context,
        )


class TransportError(FetchError):
    """Raised when the request never produced a response (DNS, refused, timeout).

    Error code: PSCT-NET003
    """

    code = "PSCT-NET003"

    def __init__(self, url: str, reason: str, stage: str) -> None:
        super().__init__(
            f"{stage}: could not reach {url}: {reason}",
            url=url,
            reason=reason,
            stage=stage,
        )


# Policy Errors (PSCT-POL*)
class PolicyError(ScoutError):
    """Base class for policy-related errors."""

    code = "PSCT-POL000"


class PolicyNotFoundError(PolicyError):
    """Raised when a policy id is not listed in the collection directory.

    Error code: PSCT-POL001
    """

    code = "PSCT-POL001"

    def __init__(self, policy_id: str) -> None:
        super().__init__(f"policy_id not found: {policy_id}", policy_id=policy_id)


# Configuration Errors (PSCT-CFG*)
class ConfigError(ScoutError):
    """Base class for configuration-related errors."""

    code = "PSCT-CFG000"


class ConfigParseError(ConfigError):
    """Raised when a configuration file cannot be parsed.

    Error code: PSCT-CFG001
    """

    code = "PSCT-CFG001"

    def __init__(self, path: str, parse_error: str) -> None:
        super().__init__(
            f"Failed to parse config file {path}: {parse_error}",
            path=path,
            parse_error=parse_error,
        )


class ConfigInvalidStructureError(ConfigError):
    """Raised when a configuration file has an invalid structure.

    Error code: PSCT-CFG002
    """

    code = "PSCT-CFG002"

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(
            f"Invalid config structure in {path}: {detail}",
            path=path,
            detail=detail,
        )


class MissingCredentialsError(ConfigError):
    """Raised when the chain index project id is needed but not configured.

    Error code: PSCT-CFG003
    """

    code = "PSCT-CFG003"

    def __init__(self, setting: str, env_vars: list[str]) -> None:
        super().__init__(
            f"No {setting} configured; set one of {', '.join(env_vars)} "
            f"or add '{setting}' to the config file",
            setting=setting,
            env_vars=env_vars,
        )


class InvalidSettingError(ConfigError):
    """Raised when a setting has a value of the wrong type or range.

    Error code: PSCT-CFG004
    """

    code = "PSCT-CFG004"

    def __init__(self, key: str, value: Any, reason: str) -> None:
        super().__init__(
            f"Invalid value for '{key}': {value!r} ({reason})",
            key=key,
            value=value,
            reason=reason,
        )
