import re

from detector.domain_utils import email_domain
from detector.models import SubjectType
from detector.risk_engine.checks.base import BaseEvidenceCheck

FROM_HEADER_PATTERN = re.compile(r'^From:[ \t]*(.*)$', re.IGNORECASE | re.MULTILINE)
RETURN_PATH_PATTERN = re.compile(r'^Return-Path:[ \t]*<?([^>\s]+)>?', re.IGNORECASE | re.MULTILINE)


class HeaderSpoofingCheck(BaseEvidenceCheck):
    name = 'Sender Header Consistency Check'
    subject_types = frozenset({SubjectType.EMAIL})

    def run(self, context):
        from_match = FROM_HEADER_PATTERN.search(context.text or '')
        return_path_match = RETURN_PATH_PATTERN.search(context.text or '')
        if not from_match or not return_path_match:
            return []

        from_value = from_match.group(1).strip().lower()
        return_path = return_path_match.group(1).strip()
        if '@' not in return_path:
            return []

        domain = email_domain(return_path)
        if not domain or domain in from_value:
            return []

        return [self.flag(
            key='from_mismatch',
            reason='From header and Return-Path domain mismatch',
            weight=2,
            explanation='Sender headers mismatch may indicate spoofing.',
        )]
