from __future__ import annotations

import re
from urllib.parse import urlsplit

from tldextract import TLDExtract

URL_PATTERN = re.compile(r'https?://[^\s)\'"`<>]+', re.IGNORECASE)
EMAIL_PATTERN = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-z]{2,}', re.IGNORECASE)
NON_ASCII_PATTERN = re.compile(r'[^\x00-\x7F]')

# Bundled public suffix snapshot only; never fetch the list at request time.
_extract = TLDExtract(suffix_list_urls=())


def find_urls(text: str) -> list[str]:
    return URL_PATTERN.findall(text or '')


def find_emails(text: str) -> list[str]:
    return EMAIL_PATTERN.findall(text or '')


def email_domain(address: str) -> str:
    return (address or '').rsplit('@', 1)[-1].strip().lower()


def hostname_of(url: str) -> str:
    try:
        return (urlsplit(url).hostname or '').strip('.')
    except ValueError:
        return ''


def registered_domain(hostname: str) -> str:
    host = (hostname or '').strip().lower().strip('.')
    parsed = _extract(host)
    if parsed.top_domain_under_public_suffix:
        return parsed.top_domain_under_public_suffix
    return host


def is_internationalized(hostname: str) -> bool:
    host = hostname or ''
    return 'xn--' in host.lower() or bool(NON_ASCII_PATTERN.search(host))


def is_http_url(url: str) -> bool:
    try:
        parts = urlsplit((url or '').strip())
    except ValueError:
        return False
    return parts.scheme.lower() in {'http', 'https'} and bool(parts.hostname)
