"""Custom exception classes for STIG Viewer.

All exceptions in the application inherit from STIGError base class
to provide consistent error handling and context propagation.
"""

from __future__ import annotations
from typing import Optional, Dict, Any


class STIGError(Exception):
    """Base exception with context.

    Attributes:
        msg: The error message
        ctx: Optional dictionary of contextual information (e.g., file names, rule IDs)
    """

    def __init__(self, msg: str, ctx: Optional[Dict[str, Any]] = None):
        super().__init__(msg)
        self.msg = msg
        self.ctx = ctx or {}

    def __str__(self) -> str:
        if self.ctx:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.ctx.items())
            return f"{self.msg} [{ctx_str}]"
        return self.msg


class ValidationError(STIGError):
    """Raised when a caller passes an out-of-range argument."""


class FileError(STIGError):
    """Raised when file operations fail."""


class ParseError(STIGError):
    """Raised when a document cannot be parsed."""
