"""Core types shared by the engine, the repository and the outer surfaces."""

from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ErrorKind(StrEnum):
    """Failure kinds recovered at the simulation boundary."""

    INVALID_YEAR = "INVALID_YEAR"
    DEGENERATE_FIT = "DEGENERATE_FIT"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    COMPUTATION_FAULT = "COMPUTATION_FAULT"


class Diag(BaseModel):
    """A structured diagnostic message."""

    severity: Severity
    code: str
    message: str
    hint: str | None = None


class Result(BaseModel, Generic[T]):  # noqa: UP046  Pydantic requires a Generic[T] subclass
    """Pairs an output with diagnostics.

    Simulation and loading functions never raise for bad input or numeric failures.
    Callers inspect `ok` and `diagnostics`; `data` may still be set on failure
    (a rejected simulation carries its zero outcome).
    """

    data: T | None = None
    diagnostics: list[Diag] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)

    @property
    def ok(self) -> bool:
        return not self.has_errors

    @property
    def error_codes(self) -> list[str]:
        return [d.code for d in self.diagnostics if d.severity == Severity.ERROR]

    def error(self, code: str, message: str, *, hint: str | None = None) -> None:
        self.diagnostics.append(Diag(severity=Severity.ERROR, code=code, message=message, hint=hint))

    def warning(self, code: str, message: str, *, hint: str | None = None) -> None:
        self.diagnostics.append(Diag(severity=Severity.WARNING, code=code, message=message, hint=hint))

    def info(self, code: str, message: str, *, hint: str | None = None) -> None:
        self.diagnostics.append(Diag(severity=Severity.INFO, code=code, message=message, hint=hint))
