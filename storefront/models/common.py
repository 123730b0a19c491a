"""Shared result and navigation types"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")

Identifier = Union[int, str]


class WireModel(BaseModel):
    """Base for models exchanged with the API (camelCase on the wire)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Outcome(str, Enum):
    """Provenance of a service result"""
    SUCCESS = "success"    # real data
    DEGRADED = "degraded"  # fallback or partial data
    FAILED = "failed"      # nothing usable


@dataclass
class Result(Generic[T]):
    """Tagged result returned by every fallible service operation"""
    outcome: Outcome
    value: Optional[T] = None
    error: Optional[str] = None
    # Per-field validation messages, keyed by form field name
    field_errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(Outcome.SUCCESS, value)

    @classmethod
    def degraded(cls, value: T, error: Optional[str] = None) -> "Result[T]":
        return cls(Outcome.DEGRADED, value, error)

    @classmethod
    def failed(
        cls,
        error: str,
        value: Optional[T] = None,
        field_errors: Optional[dict[str, str]] = None,
    ) -> "Result[T]":
        return cls(Outcome.FAILED, value, error, field_errors or {})

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.SUCCESS

    @property
    def is_degraded(self) -> bool:
        return self.outcome == Outcome.DEGRADED

    @property
    def is_failed(self) -> bool:
        return self.outcome == Outcome.FAILED

    @property
    def usable(self) -> bool:
        """Real or fallback data is available"""
        return self.outcome != Outcome.FAILED


@dataclass(frozen=True)
class Redirect:
    """Navigation decision made instead of rendering"""
    to: str


class Severity(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Notification:
    """Transient message shown to the user"""
    message: str
    severity: Severity = Severity.INFO
