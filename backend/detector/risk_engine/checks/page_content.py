import logging
import re

from detector.models import SubjectType
from detector.risk_engine.checks.base import BaseEvidenceCheck

logger = logging.getLogger(__name__)

CREDENTIAL_FORM_PATTERN = re.compile(
    r'password|confirm\s*password|card number|cvv|otp|verify your account',
    re.IGNORECASE,
)
HIDDEN_CONTENT_PATTERN = re.compile(r'<iframe|data:image/svg\+xml|base64,', re.IGNORECASE)


class PageContentCheck(BaseEvidenceCheck):
    name = 'Page Content Check'
    subject_types = frozenset({SubjectType.URL})

    def run(self, context):
        page = context.external.fetch(context.url)
        if not page.ok:
            logger.info('Could not fetch %s: %s', context.url, page.error)
            return [self.flag(
                key='fetch_fail',
                reason='Could not fetch page content',
                weight=2,
                explanation='The page did not load within the time limit or returned an error.',
            )]

        html = str(page.value or '')
        flags = []
        if CREDENTIAL_FORM_PATTERN.search(html):
            flags.append(self.flag(
                key='asks_credentials',
                reason='Page asks for credentials/payment info',
                weight=3,
                explanation='Page content requests passwords, card numbers, CVV or OTP codes.',
            ))
        if HIDDEN_CONTENT_PATTERN.search(html):
            flags.append(self.flag(
                key='susp_html',
                reason='Hidden iframe / base64 content',
                weight=1,
                explanation='Inline frames and base64 payloads are used to hide content from scanners.',
            ))
        return flags
