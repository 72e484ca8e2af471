import logging

from detector.domain_utils import email_domain, find_emails
from detector.models import UPLOAD_SUBJECT_TYPES
from detector.risk_engine.checks.base import BaseEvidenceCheck

logger = logging.getLogger(__name__)


class DiscoveredEmailCheck(BaseEvidenceCheck):
    name = 'Discovered Email Domain Check'
    subject_types = UPLOAD_SUBJECT_TYPES

    def run(self, context):
        emails = find_emails(context.text)
        if not emails:
            return []

        address = emails[0]
        flags = [self.flag(
            key='found_email',
            reason=f'Found email: {address}',
            weight=0,
            explanation='Email extracted from document.',
        )]

        domain = email_domain(address)
        resolution = context.external.resolve(domain)
        if not resolution.ok:
            logger.info('DNS lookup for %s gave no evidence: %s', domain, resolution.error)
            return flags

        if resolution.value is False:
            flags.append(self.flag(
                key='email_domain_bad',
                reason=f'Email domain {domain} not resolvable',
                weight=2,
                explanation='Email domain DNS lookup failed.',
            ))
        return flags
