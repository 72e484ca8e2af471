from __future__ import annotations

from dataclasses import dataclass
import logging
import os
import re

from detector.models import SubjectType
from detector.risk_engine import external
from detector.risk_engine.errors import ArtifactUnavailable
from detector.risk_engine.types import LookupResult

logger = logging.getLogger(__name__)

IMAGE_FILENAME_PATTERN = re.compile(r'\.(jpe?g|png|gif|bmp|tiff)$', re.IGNORECASE)


@dataclass(frozen=True)
class ExtractedArtifact:
    subject_type: str
    text: str = ''
    pdf_info: LookupResult | None = None
    exif: LookupResult | None = None


def detect_subject_type(content_type: str, filename: str) -> str:
    content_type = (content_type or '').lower()
    filename = (filename or '').lower()

    if content_type == 'application/pdf' or filename.endswith('.pdf'):
        return SubjectType.DOCUMENT
    if content_type.startswith('image/') or IMAGE_FILENAME_PATTERN.search(filename):
        return SubjectType.IMAGE
    if content_type == 'text/plain' or filename.endswith('.txt'):
        return SubjectType.TEXT
    return SubjectType.UNKNOWN


def _ocr_text(path: str) -> str:
    result = external.ocr_image(path)
    if not result.ok:
        logger.info('OCR produced no text for %s: %s', os.path.basename(path), result.error)
        return ''
    return str(result.value or '')


def extract_artifact(path: str, content_type: str = '', filename: str = '') -> ExtractedArtifact:
    """Recover text and metadata from a stored upload.

    Only a missing or unreadable file raises ``ArtifactUnavailable``; parser,
    OCR and metadata failures leave the corresponding field empty.
    """
    if not path or not os.path.isfile(path):
        raise ArtifactUnavailable('Uploaded file is missing.')

    subject_type = detect_subject_type(content_type, filename)

    if subject_type == SubjectType.DOCUMENT:
        parsed = external.read_pdf(path)
        if not parsed.ok:
            logger.info('PDF parsing failed for %s: %s', filename, parsed.error)
            return ExtractedArtifact(subject_type=subject_type, pdf_info=parsed)
        payload = parsed.value or {}
        return ExtractedArtifact(
            subject_type=subject_type,
            text=str(payload.get('text') or ''),
            pdf_info=LookupResult.success(payload.get('info') or {}),
        )

    if subject_type == SubjectType.IMAGE:
        exif = external.read_image_exif(path)
        return ExtractedArtifact(subject_type=subject_type, text=_ocr_text(path), exif=exif)

    if subject_type == SubjectType.TEXT:
        return ExtractedArtifact(subject_type=subject_type, text=external.read_text_file(path))

    return ExtractedArtifact(subject_type=subject_type, text=_ocr_text(path))
