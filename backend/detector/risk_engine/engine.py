from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

from detector.risk_engine.checks.base import BaseEvidenceCheck, CheckContext
from detector.risk_engine.scoring import aggregate
from detector.risk_engine.types import AssessmentResult, EvidenceSet

logger = logging.getLogger(__name__)


@dataclass
class RiskEngine:
    checks: Sequence[type[BaseEvidenceCheck]]

    def run(self, context: CheckContext, extracted_text: str = '') -> AssessmentResult:
        evidence = EvidenceSet()
        for check_class in self.checks:
            check = check_class()
            if not check.applies_to(context.subject_type):
                continue
            evidence = self._run_check(check, context, evidence)

        score, label = aggregate(evidence)
        return AssessmentResult(
            subject_type=context.subject_type,
            extracted_text=extracted_text,
            flags=evidence.flags,
            score=score,
            label=label,
        )

    def _run_check(self, check: BaseEvidenceCheck, context: CheckContext, evidence: EvidenceSet) -> EvidenceSet:
        try:
            flags = check.run(context)
        except Exception:
            # A broken signal source contributes no evidence; the assessment continues.
            logger.exception('Check %r failed for %s subject.', check.name, context.subject_type)
            return evidence
        return evidence.extend(flags or [])
