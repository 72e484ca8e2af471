from __future__ import annotations

from typing import Any

from detector.hints import hints_for
from detector.risk_engine.types import AssessmentResult


def _serialize_flags(result: AssessmentResult) -> list[dict[str, Any]]:
    return [flag.as_dict() for flag in result.flags]


def build_assessment_payload(result: AssessmentResult) -> dict[str, Any]:
    payload: dict[str, Any] = {
        'flags': _serialize_flags(result),
        'score': result.score,
        'label': str(result.label),
    }
    payload.update(hints_for(result.subject_type, result.label))
    return payload


def build_upload_response(result: AssessmentResult, content_type: str) -> dict[str, Any]:
    return {
        'type': content_type,
        'subjectType': str(result.subject_type),
        'extractedText': result.extracted_text,
        **build_assessment_payload(result),
    }


def build_url_response(result: AssessmentResult, url: str) -> dict[str, Any]:
    return {
        'url': url,
        **build_assessment_payload(result),
    }


def build_email_response(result: AssessmentResult) -> dict[str, Any]:
    return build_assessment_payload(result)
