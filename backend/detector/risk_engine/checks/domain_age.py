from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
import logging

from django.conf import settings

from detector.domain_utils import find_urls, hostname_of
from detector.models import SubjectType, UPLOAD_SUBJECT_TYPES
from detector.risk_engine.checks.base import BaseEvidenceCheck
from detector.risk_engine.types import LookupResult

logger = logging.getLogger(__name__)

YOUNG_DOMAIN_DAYS = 30


def registration_age_days(lookup: LookupResult, now: datetime | None = None) -> int | None:
    if not lookup.ok:
        return None

    creation_date = (lookup.value or {}).get('creation_date')
    if not isinstance(creation_date, datetime):
        return None

    if creation_date.tzinfo is None:
        creation_date = creation_date.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max((now - creation_date).days, 0)


def is_young(age_days: int | None) -> bool:
    return age_days is not None and age_days < YOUNG_DOMAIN_DAYS


class DomainAgeCheck(BaseEvidenceCheck):
    name = 'Domain Age Check'
    subject_types = frozenset({SubjectType.URL})

    def run(self, context):
        if not context.hostname:
            return []

        age_days = registration_age_days(context.external.whois(context.hostname))
        if not is_young(age_days):
            return []

        return [self.flag(
            key='domain_young',
            reason=f'Domain created {age_days} days ago',
            weight=2,
            explanation='Newly registered domains are commonly used for short-lived scam sites.',
        )]


class DiscoveredUrlCheck(BaseEvidenceCheck):
    name = 'Discovered URL Check'
    subject_types = UPLOAD_SUBJECT_TYPES

    def run(self, context):
        urls = find_urls(context.text)
        if not urls:
            return []

        first_url = urls[0]
        flags = [self.flag(
            key='found_url',
            reason=f'Found URL: {first_url}',
            weight=0,
            explanation='URL extracted from document.',
        )]

        hostname = hostname_of(first_url)
        if not hostname:
            return flags

        age_days = registration_age_days(context.external.whois(hostname))
        if is_young(age_days):
            flags.append(self.flag(
                key='url_young',
                reason=f'Domain created {age_days} days ago',
                weight=2,
                explanation='Domain is very new.',
            ))
        return flags


class EmailLinkAgeCheck(BaseEvidenceCheck):
    name = 'Email Link Domain Age Check'
    subject_types = frozenset({SubjectType.EMAIL})

    def run(self, context):
        limit = int(getattr(settings, 'DETECTOR_MAX_EMAIL_LINKS', 3))
        distinct_urls = list(dict.fromkeys(find_urls(context.text)))[:limit]
        hostnames = list(dict.fromkeys(
            hostname for hostname in (hostname_of(url) for url in distinct_urls) if hostname
        ))
        if not hostnames:
            return []

        # Lookups are independent; map() keeps results in discovery order.
        with ThreadPoolExecutor(max_workers=len(hostnames), thread_name_prefix='detector-links') as pool:
            lookups = list(pool.map(context.external.whois, hostnames))

        flags = []
        for hostname, lookup in zip(hostnames, lookups):
            age_days = registration_age_days(lookup)
            if not is_young(age_days):
                continue
            flags.append(self.flag(
                key='link_new_domain',
                reason=f'Link to young domain ({hostname})',
                weight=2,
                explanation=f'Linked domain {hostname} was registered {age_days} days ago.',
            ))
        return flags
