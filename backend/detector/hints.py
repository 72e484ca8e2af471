from detector.models import RiskLabel, SubjectType, UPLOAD_SUBJECT_TYPES

UPLOAD_HINTS = {
    RiskLabel.HIGH: {
        'en': 'Likely fake or suspicious. Do not trust, verify externally.',
        'hi': 'Jyada shak hai — bharosa na karein, bahar se verify karein.',
    },
    RiskLabel.MEDIUM: {
        'en': 'Potential risk — investigate further.',
        'hi': 'Janch karein — thoda sa shak hai.',
    },
    RiskLabel.LOW: {
        'en': 'Low risk indicators found.',
        'hi': 'Kuch khas shak nahi mila.',
    },
}

URL_HINTS = {
    RiskLabel.HIGH: {
        'en': 'Avoid, suspicious site.',
        'hi': 'Nahi kholna — shak hai.',
    },
    RiskLabel.MEDIUM: {
        'en': 'Investigate further.',
        'hi': 'Aage janch karein.',
    },
    RiskLabel.LOW: {
        'en': 'Likely safe (not guaranteed).',
        'hi': 'Lagbhag surakshit (poori guarantee nahi).',
    },
}

EMAIL_HINTS = {
    RiskLabel.HIGH: {
        'en': 'Likely phishing — do not click links.',
        'hi': 'Phishing lagta hai — link na click karein.',
    },
    RiskLabel.MEDIUM: {
        'en': 'Potential phishing.',
        'hi': 'Sambhavta phishing.',
    },
    RiskLabel.LOW: {
        'en': 'Looks okay.',
        'hi': 'Thik lagta hai.',
    },
}


def hints_for(subject_type: str, label: str) -> dict[str, str]:
    subject_type = SubjectType(subject_type)
    if subject_type == SubjectType.URL:
        table = URL_HINTS
    elif subject_type == SubjectType.EMAIL:
        table = EMAIL_HINTS
    elif subject_type in UPLOAD_SUBJECT_TYPES:
        table = UPLOAD_HINTS
    else:
        raise ValueError(f'Unknown subject type: {subject_type!r}')

    hints = table[RiskLabel(label)]
    return {'hint_en': hints['en'], 'hint_hi': hints['hi']}
