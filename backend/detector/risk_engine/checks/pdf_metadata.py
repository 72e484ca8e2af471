import logging
import re

from detector.models import SubjectType
from detector.risk_engine.checks.base import BaseEvidenceCheck

logger = logging.getLogger(__name__)

CONVERTER_PRODUCER_PATTERN = re.compile(r'convert|online|printer|scan', re.IGNORECASE)


class PdfMetadataCheck(BaseEvidenceCheck):
    name = 'PDF Metadata Check'
    subject_types = frozenset({SubjectType.DOCUMENT})

    def run(self, context):
        pdf_info = context.pdf_info
        if pdf_info is None or not pdf_info.ok:
            logger.debug('No PDF metadata available: %s', getattr(pdf_info, 'error', 'not extracted'))
            return []

        info = pdf_info.value or {}
        flags = []

        creation_date = str(info.get('CreationDate') or '').strip()
        modified_date = str(info.get('ModDate') or '').strip()
        if creation_date and modified_date and creation_date != modified_date:
            flags.append(self.flag(
                key='pdf_modified',
                reason='PDF modification date differs from creation date',
                weight=1,
                explanation='PDF modification date not equal to creation date; possible post-creation edit.',
            ))

        producer = str(info.get('Producer') or '').strip()
        if producer and CONVERTER_PRODUCER_PATTERN.search(producer):
            flags.append(self.flag(
                key='pdf_producer',
                reason=f'Producer: {producer}',
                weight=1,
                explanation='Produced/converted by common online tools (possible re-scan).',
            ))

        return flags
