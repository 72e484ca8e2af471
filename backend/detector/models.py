from django.db import models


class SubjectType(models.TextChoices):
    DOCUMENT = 'document', 'Document'
    IMAGE = 'image', 'Image'
    TEXT = 'text', 'Plain text'
    UNKNOWN = 'unknown', 'Unknown file'
    URL = 'url', 'URL'
    EMAIL = 'email', 'Email text'


UPLOAD_SUBJECT_TYPES = frozenset({
    SubjectType.DOCUMENT,
    SubjectType.IMAGE,
    SubjectType.TEXT,
    SubjectType.UNKNOWN,
})


class RiskLabel(models.TextChoices):
    LOW = 'Low Risk', 'Low Risk'
    MEDIUM = 'Medium Risk', 'Medium Risk'
    HIGH = 'High Risk', 'High Risk'
