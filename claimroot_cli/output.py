"""
Module 09C - CLI Error Output

Failures are reported as a ClaimRootError. With --json the error object is
printed to stdout so scripts can branch on its code; otherwise a one-line
message goes to stderr.
"""

from __future__ import annotations

import json
import sys

from core.schemas.errors import ClaimRootError, ClaimRootException


def error_model(error: Exception) -> ClaimRootError:
    """Structured form of any error a command can hit."""
    if isinstance(error, ClaimRootException):
        return error.to_error_model()
    return ClaimRootError(
        code=getattr(error, "code", "CLAIMROOT_ERROR"),
        message=str(error),
    )


def report_error(error: Exception, output_json: bool = False) -> None:
    if output_json:
        print(json.dumps({"ok": False, "error": error_model(error).model_dump()}, indent=2))
    else:
        print(f"Error: {error}", file=sys.stderr)


__all__ = ["error_model", "report_error"]
