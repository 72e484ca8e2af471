from detector.models import SubjectType
from detector.risk_engine.checks.base import BaseEvidenceCheck
from detector.risk_engine.rules import match_text


class TextPatternCheck(BaseEvidenceCheck):
    name = 'Text Pattern Rules'
    subject_types = frozenset({
        SubjectType.DOCUMENT,
        SubjectType.IMAGE,
        SubjectType.TEXT,
        SubjectType.EMAIL,
    })

    def run(self, context):
        return match_text(context.text, context.subject_type)
