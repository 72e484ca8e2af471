import logging
import re

from detector.models import SubjectType
from detector.risk_engine.checks.base import BaseEvidenceCheck

logger = logging.getLogger(__name__)

EDITING_SOFTWARE_PATTERN = re.compile(r'photoshop|gimp|canva|paint', re.IGNORECASE)
CONVERTER_PRODUCER_PATTERN = re.compile(r'convert|imagemagick', re.IGNORECASE)

# exifread prefixes tags with their IFD; bare names cover other extractors.
CAPTURE_DATE_TAGS = ('EXIF DateTimeOriginal', 'DateTimeOriginal')
CREATE_DATE_TAGS = ('EXIF DateTimeDigitized', 'CreateDate')
SOFTWARE_TAGS = ('Image Software', 'Software')
PRODUCER_TAGS = ('Image ProcessingSoftware', 'Producer')


def _first_value(tags, names):
    for name in names:
        value = str(tags.get(name) or '').strip()
        if value:
            return value
    return ''


class ImageMetadataCheck(BaseEvidenceCheck):
    name = 'Image Metadata Check'
    subject_types = frozenset({SubjectType.IMAGE})

    def run(self, context):
        exif = context.exif
        if exif is None or not exif.ok:
            logger.debug('Image metadata extraction failed: %s', getattr(exif, 'error', 'not extracted'))
            return []

        tags = exif.value or {}
        if not tags:
            return [self.flag(
                key='no_exif',
                reason='Image EXIF metadata missing',
                weight=1,
                explanation='Image lacks camera metadata; suspicious for edited images.',
            )]

        flags = []
        if not _first_value(tags, CAPTURE_DATE_TAGS) and not _first_value(tags, CREATE_DATE_TAGS):
            flags.append(self.flag(
                key='no_dates',
                reason='No camera date in EXIF',
                weight=1,
                explanation='Image EXIF has no creation date.',
            ))

        software = _first_value(tags, SOFTWARE_TAGS)
        producer = _first_value(tags, PRODUCER_TAGS)
        tool = ''
        if software and EDITING_SOFTWARE_PATTERN.search(software):
            tool = software
        elif producer and CONVERTER_PRODUCER_PATTERN.search(producer):
            tool = producer

        if tool:
            flags.append(self.flag(
                key='edited_software',
                reason=f'Image software: {tool}',
                weight=2,
                explanation='Image was processed/edited by software.',
            ))

        return flags
