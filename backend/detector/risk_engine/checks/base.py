from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from detector.models import SubjectType
from detector.risk_engine.types import EvidenceFlag, LookupResult


@dataclass(frozen=True)
class CheckContext:
    subject_type: str
    text: str = ''
    url: str = ''
    hostname: str = ''
    pdf_info: LookupResult | None = None
    exif: LookupResult | None = None
    external: Any = None


class BaseEvidenceCheck:
    name = ''
    subject_types: frozenset[str] = frozenset()

    def applies_to(self, subject_type: str) -> bool:
        return SubjectType(subject_type) in self.subject_types

    def run(self, context: CheckContext) -> list[EvidenceFlag]:
        raise NotImplementedError

    def flag(self, *, key: str, reason: str, weight: float, explanation: str = '') -> EvidenceFlag:
        return EvidenceFlag(key=key, reason=reason, weight=weight, explanation=explanation)
