from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator


@dataclass(frozen=True)
class EvidenceFlag:
    key: str
    reason: str
    weight: float = 1
    explanation: str = ''

    def __post_init__(self):
        if not self.key:
            raise ValueError('Evidence flag key is required.')
        if isinstance(self.weight, bool) or not isinstance(self.weight, (int, float)):
            raise ValueError(f'Evidence flag weight must be a number, got {self.weight!r}.')
        if not math.isfinite(self.weight) or self.weight < 0:
            raise ValueError(f'Evidence flag weight must be non-negative and finite, got {self.weight!r}.')

    def as_dict(self) -> dict[str, Any]:
        return {
            'key': self.key,
            'reason': self.reason,
            'weight': self.weight,
            'explanation': self.explanation,
        }


# Rules that report one flag per distinct finding. Every other key is kept
# once per assessment, whatever its reason text says.
REPEATABLE_FLAG_KEYS = frozenset({'link_new_domain'})


def _identity(flag: EvidenceFlag) -> tuple[str, ...]:
    if flag.key in REPEATABLE_FLAG_KEYS:
        return (flag.key, flag.reason)
    return (flag.key,)


@dataclass(frozen=True)
class EvidenceSet:
    """Ordered, append-only collection of flags for one assessment.

    ``add`` and ``extend`` return a new set. A rule contributes at most one
    flag no matter how often its trigger matched; keys in
    ``REPEATABLE_FLAG_KEYS`` contribute once per distinct reason.
    """

    flags: tuple[EvidenceFlag, ...] = ()

    def add(self, flag: EvidenceFlag) -> EvidenceSet:
        identity = _identity(flag)
        if any(_identity(item) == identity for item in self.flags):
            return self
        return EvidenceSet(flags=(*self.flags, flag))

    def extend(self, flags: Iterable[EvidenceFlag]) -> EvidenceSet:
        evidence = self
        for flag in flags:
            evidence = evidence.add(flag)
        return evidence

    def keys(self) -> list[str]:
        return [flag.key for flag in self.flags]

    def __iter__(self) -> Iterator[EvidenceFlag]:
        return iter(self.flags)

    def __len__(self) -> int:
        return len(self.flags)


@dataclass(frozen=True)
class LookupResult:
    """Outcome of one best-effort external call: a value, or the reason it failed."""

    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> LookupResult:
        return cls(value=value)

    @classmethod
    def failure(cls, error: Any) -> LookupResult:
        return cls(error=str(error) or error.__class__.__name__)


@dataclass(frozen=True)
class AssessmentResult:
    subject_type: str
    extracted_text: str
    flags: tuple[EvidenceFlag, ...]
    score: float
    label: str
