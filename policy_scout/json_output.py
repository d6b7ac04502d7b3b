"""JSON output envelope for consistent machine-readable CLI output.

Every command run with ``--format json`` prints exactly one envelope:

    {
        "success": true|false,
        "command": "sources",
        "data": { ... },
        "errors": [ ... ]  # Only present when success=false
    }

Usage:
    from policy_scout.json_output import ErrorDetail, error_envelope, success_envelope

    envelope = success_envelope("sources", result.to_dict())
    print(envelope.to_json())

    envelope = error_envelope("sources", [ErrorDetail.from_exception(err)])
    print(envelope.to_json())
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ErrorDetail:
    """One entry of the errors array.

    Attributes:
        type: Error class name (e.g., "PolicyNotFoundError")
        message: Human-readable error description
        code: Structured error code (e.g., "PSCT-POL001"), if any
        context: Structured fields of the error, if any
    """

    type: str
    message: str
    code: str | None = None
    context: dict[str, Any] | None = None

    @classmethod
    def from_exception(cls, err: Exception) -> ErrorDetail:
        """Build an entry from an exception, keeping code and context when present."""
        return cls(
            type=type(err).__name__,
            message=getattr(err, "message", str(err)),
            code=getattr(err, "code", None),
            context=getattr(err, "context", None),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"type": self.type, "message": self.message}
        if self.code is not None:
            result["code"] = self.code
        if self.context:
            result["context"] = self.context
        return result


@dataclass
class OutputEnvelope:
    """The wrapper structure for all JSON command output.

    Attributes:
        success: True if command completed without errors, False otherwise
        command: Name of the command that produced this output
        data: Command-specific payload
        errors: Error objects; present only when success=False
    """

    success: bool
    command: str
    data: dict[str, Any] | None
    errors: list[ErrorDetail] | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary; errors is omitted when None."""
        result: dict[str, Any] = {
            "success": self.success,
            "command": self.command,
            "data": self.data,
        }

        if self.errors is not None:
            result["errors"] = [e.to_dict() for e in self.errors]

        return result

    def to_json(self, *, indent: int | None = 2) -> str:
        """Convert to JSON string. Use indent=None for compact output."""
        return json.dumps(self.to_dict(), indent=indent, default=str)


def success_envelope(command: str, data: dict[str, Any]) -> OutputEnvelope:
    """Create a success envelope with the given command and data."""
    return OutputEnvelope(success=True, command=command, data=data)


def error_envelope(
    command: str,
    errors: list[ErrorDetail],
    *,
    data: dict[str, Any] | None = None,
) -> OutputEnvelope:
    """Create an error envelope; data defaults to an empty dict."""
    return OutputEnvelope(
        success=False,
        command=command,
        data=data if data is not None else {},
        errors=errors,
    )
