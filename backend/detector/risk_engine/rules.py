from __future__ import annotations

import re
from dataclasses import dataclass

from detector.models import SubjectType
from detector.risk_engine.types import EvidenceFlag

SUSPICIOUS_CONTENT = 'suspicious_content'
PHISHING_TONE = 'phishing_tone'
CREDENTIAL_REQUEST = 'credential_request'

_SPECIMEN_WORDS = re.compile(r'fake|sample|demo|test|unofficial', re.IGNORECASE)
_EMAIL_PRESSURE_WORDS = re.compile(
    r'urgent|immediately|verify|limited time|click here|reset your password|suspend',
    re.IGNORECASE,
)
_TEXT_PRESSURE_WORDS = re.compile(
    r'verify your account|urgent|immediately|limited time|click here|reset your password|suspend'
    r'|pay now|account number|upi|phonepe|google pay',
    re.IGNORECASE,
)
_CREDENTIAL_WORDS = re.compile(
    r'otp|verify your account|upi|account number|cvv|password|pay now|transfer',
    re.IGNORECASE,
)


@dataclass(frozen=True)
class TextRule:
    key: str
    group: str
    pattern: re.Pattern
    weight: int
    subject_types: frozenset[str]
    reason: str
    explanation: str

    def applies_to(self, subject_type: str) -> bool:
        return SubjectType(subject_type) in self.subject_types

    def matches(self, text: str) -> bool:
        return bool(text) and self.pattern.search(text) is not None

    def flag(self) -> EvidenceFlag:
        return EvidenceFlag(key=self.key, reason=self.reason, weight=self.weight, explanation=self.explanation)


TEXT_RULES: tuple[TextRule, ...] = (
    TextRule(
        key='suspicious_text',
        group=SUSPICIOUS_CONTENT,
        pattern=_SPECIMEN_WORDS,
        weight=3,
        subject_types=frozenset({SubjectType.DOCUMENT}),
        reason='Suspicious words found (fake/sample/demo)',
        explanation="Document contains explicit 'fake/sample/demo' words.",
    ),
    TextRule(
        key='suspicious_text_img',
        group=SUSPICIOUS_CONTENT,
        pattern=_SPECIMEN_WORDS,
        weight=3,
        subject_types=frozenset({SubjectType.IMAGE}),
        reason='Suspicious words found in image text',
        explanation='Image OCR contains explicit suspicious words.',
    ),
    TextRule(
        key='susp_text_txt',
        group=SUSPICIOUS_CONTENT,
        pattern=_SPECIMEN_WORDS,
        weight=3,
        subject_types=frozenset({SubjectType.TEXT}),
        reason='Suspicious words in text',
        explanation='Text contains demo/fake markers.',
    ),
    TextRule(
        key='phishy_tone',
        group=PHISHING_TONE,
        pattern=_EMAIL_PRESSURE_WORDS,
        weight=3,
        subject_types=frozenset({SubjectType.EMAIL}),
        reason='Email uses urgent/pressure language',
        explanation='Typical phishing language found.',
    ),
    TextRule(
        key='phish_txt',
        group=PHISHING_TONE,
        pattern=_TEXT_PRESSURE_WORDS,
        weight=3,
        subject_types=frozenset({SubjectType.TEXT}),
        reason='Phishing-like wording in text',
        explanation='Text contains urgent financial requests.',
    ),
    TextRule(
        key='phishy_text',
        group=CREDENTIAL_REQUEST,
        pattern=_CREDENTIAL_WORDS,
        weight=3,
        subject_types=frozenset({SubjectType.IMAGE}),
        reason='Phishing-like financial text found',
        explanation='Text asks for sensitive financial info.',
    ),
    TextRule(
        key='financial_txt',
        group=CREDENTIAL_REQUEST,
        pattern=_CREDENTIAL_WORDS,
        weight=3,
        subject_types=frozenset({SubjectType.TEXT}),
        reason='Request for credentials or payment details in text',
        explanation='Text asks for OTP, CVV, passwords, account numbers or a payment.',
    ),
)


def rules_for(subject_type: str) -> list[TextRule]:
    return [rule for rule in TEXT_RULES if rule.applies_to(subject_type)]


def match_text(text: str, subject_type: str) -> list[EvidenceFlag]:
    if not text:
        return []
    return [rule.flag() for rule in rules_for(subject_type) if rule.matches(text)]
