from __future__ import annotations

from detector.domain_utils import hostname_of
from detector.models import SubjectType
from detector.risk_engine.checks import EMAIL_CHECKS, UPLOAD_CHECKS, URL_CHECKS
from detector.risk_engine.checks.base import CheckContext
from detector.risk_engine.engine import RiskEngine
from detector.risk_engine.external import ExternalContext
from detector.risk_engine.extraction import extract_artifact
from detector.risk_engine.types import AssessmentResult


def assess_upload(path: str, content_type: str = '', filename: str = '') -> AssessmentResult:
    artifact = extract_artifact(path, content_type=content_type, filename=filename)
    context = CheckContext(
        subject_type=artifact.subject_type,
        text=artifact.text,
        pdf_info=artifact.pdf_info,
        exif=artifact.exif,
        external=ExternalContext(),
    )
    return RiskEngine(checks=UPLOAD_CHECKS).run(context, extracted_text=artifact.text)


def assess_url(url: str) -> AssessmentResult:
    url = url.strip()
    context = CheckContext(
        subject_type=SubjectType.URL,
        url=url,
        hostname=hostname_of(url),
        external=ExternalContext(),
    )
    return RiskEngine(checks=URL_CHECKS).run(context)


def assess_email(raw: str) -> AssessmentResult:
    text = str(raw)
    context = CheckContext(
        subject_type=SubjectType.EMAIL,
        text=text,
        external=ExternalContext(),
    )
    return RiskEngine(checks=EMAIL_CHECKS).run(context)
