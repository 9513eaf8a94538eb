"""Exception hierarchy for intent loading and transformation."""

from typing import List, Optional

from oiml_ir.ir.common import Diagnostic


class OIMLError(Exception):
    """Base class for all errors raised by oiml_ir."""


class InvalidTypeError(OIMLError, ValueError):
    """A field type token could not be resolved to an IR field type."""


class IntentLoadError(OIMLError):
    """An intent file could not be read or parsed."""


class IRTransformError(OIMLError):
    """
    An intent could not be turned into a valid IR envelope.

    Attributes:
        diagnostics: Every diagnostic collected during the call, in order.
            Warnings and info entries are kept next to the errors.
    """

    def __init__(self, message: str, diagnostics: Optional[List[Diagnostic]] = None):
        super().__init__(message)
        self.diagnostics: List[Diagnostic] = list(diagnostics or [])

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "error"]

    def __str__(self) -> str:
        base = super().__str__()
        if not self.errors:
            return base
        details = "; ".join(f"{d.code} at {d.path}: {d.message}" for d in self.errors)
        return f"{base} ({details})"


class UnsupportedIntentError(IRTransformError):
    """The intent ``kind`` has no registered transformer (IR000)."""
