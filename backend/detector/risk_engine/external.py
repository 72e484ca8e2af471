from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from datetime import datetime, timezone
import ipaddress
import logging
import socket
import threading
import time
from typing import Any, Callable
from urllib.parse import urljoin

from django.conf import settings
import dns.exception
import dns.resolver
import exifread
from PIL import Image
from PyPDF2 import PdfReader
import pytesseract
import requests
import whois

from detector.domain_utils import hostname_of, registered_domain
from detector.risk_engine.errors import ArtifactUnavailable, PageUnavailable
from detector.risk_engine.types import LookupResult

logger = logging.getLogger(__name__)

_LOOKUP_EXECUTOR = ThreadPoolExecutor(max_workers=16, thread_name_prefix='detector-lookup')

USER_AGENT = 'FakeDocumentDetector/1.0'


def run_with_timeout(func: Callable[..., Any], *args: Any, timeout: float) -> LookupResult:
    """Run a blocking call on the lookup pool, giving up after ``timeout`` seconds."""
    future = _LOOKUP_EXECUTOR.submit(func, *args)
    try:
        return LookupResult.success(future.result(timeout=timeout))
    except FutureTimeoutError:
        future.cancel()
        return LookupResult.failure(f'{getattr(func, "__name__", "lookup")} timed out after {timeout}s')
    except Exception as exc:
        return LookupResult.failure(exc)


def _is_public_ip(ip_text: str) -> bool:
    try:
        ip_value = ipaddress.ip_address(ip_text)
    except ValueError:
        return False

    return ip_value.is_global


def _hostname_resolves_to_public_ips(hostname: str) -> bool:
    try:
        addr_info = socket.getaddrinfo(hostname, None, proto=socket.IPPROTO_TCP)
    except (OSError, UnicodeError, ValueError):
        return False

    addresses = {item[4][0] for item in addr_info if item and item[4]}
    if not addresses:
        return False

    return all(_is_public_ip(address) for address in addresses)


def _normalize_datetime(value: Any) -> datetime | None:
    if isinstance(value, list):
        value = value[0] if value else None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return None
        normalized = candidate.replace('Z', '+00:00')
        try:
            parsed = datetime.fromisoformat(normalized)
            if parsed.tzinfo is None:
                return parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)
        except ValueError:
            pass

        for pattern in ('%Y-%m-%d', '%Y-%m-%d %H:%M:%S', '%d-%b-%Y', '%d/%m/%Y'):
            try:
                parsed = datetime.strptime(candidate, pattern)
                return parsed.replace(tzinfo=timezone.utc)
            except ValueError:
                continue

    return None


def resolve_domain(domain: str) -> LookupResult:
    """Resolve ``domain`` to A or AAAA records.

    The value is ``True`` when an address exists and ``False`` when the name
    definitively has none. Timeouts and resolver errors are failures.
    """
    lifetime = float(getattr(settings, 'DETECTOR_DNS_TIMEOUT', 2.0))
    for record_type in ('A', 'AAAA'):
        try:
            dns.resolver.resolve(domain, record_type, lifetime=lifetime)
            return LookupResult.success(True)
        except dns.resolver.NXDOMAIN:
            return LookupResult.success(False)
        except (dns.resolver.NoAnswer, dns.resolver.NoNameservers):
            continue
        except (dns.exception.DNSException, ValueError) as exc:
            return LookupResult.failure(exc)
    return LookupResult.success(False)


def _query_whois(domain: str) -> dict[str, Any]:
    data = whois.whois(domain)
    if data is None:
        return {}

    if not isinstance(data, dict):
        data = data.__dict__

    raw_creation = data.get('creation_date') or data.get('created')
    registrar = data.get('registrar')
    if isinstance(registrar, list):
        registrar = registrar[0] if registrar else None

    return {
        'creation_date': _normalize_datetime(raw_creation),
        'raw_creation_date': raw_creation,
        'registrar': str(registrar).strip() if registrar else None,
    }


def get_whois_data(hostname: str) -> LookupResult:
    timeout = float(getattr(settings, 'DETECTOR_WHOIS_TIMEOUT', 10.0))
    return run_with_timeout(_query_whois, registered_domain(hostname), timeout=timeout)


def _require_public_host(url: str) -> None:
    hostname = hostname_of(url)
    if not hostname or not _hostname_resolves_to_public_ips(hostname):
        raise PageUnavailable(f'Host {hostname or url!r} does not resolve to public IP space.')


def _read_body(response, max_chars: int, deadline: float) -> str:
    encoding = response.encoding or 'utf-8'
    # A character is at most four bytes in any encoding we decode.
    max_bytes = max_chars * 4
    chunks = []
    received = 0
    for chunk in response.iter_content(chunk_size=8192):
        if time.monotonic() > deadline:
            raise requests.Timeout('Page body was not received within the fetch time limit.')
        if not chunk:
            continue
        chunks.append(chunk)
        received += len(chunk)
        if received >= max_bytes:
            break
    return b''.join(chunks).decode(encoding, errors='replace')[:max_chars]


def _fetch(url: str) -> str:
    timeout = float(getattr(settings, 'DETECTOR_FETCH_TIMEOUT', 8.0))
    max_chars = int(getattr(settings, 'DETECTOR_FETCH_MAX_CHARS', 200_000))
    max_redirects = int(getattr(settings, 'DETECTOR_FETCH_MAX_REDIRECTS', 3))
    deadline = time.monotonic() + timeout

    with requests.Session() as session:
        redirects = 0
        while True:
            # Every hop is checked, not only the submitted URL.
            _require_public_host(url)
            response = session.get(
                url,
                timeout=timeout,
                stream=True,
                allow_redirects=False,
                headers={
                    'User-Agent': USER_AGENT,
                    'Accept': 'text/html,application/xhtml+xml,*/*;q=0.8',
                },
            )
            try:
                if response.is_redirect:
                    redirects += 1
                    if redirects > max_redirects:
                        raise requests.TooManyRedirects(f'Exceeded {max_redirects} redirects.')
                    url = urljoin(url, response.headers.get('Location', ''))
                    continue

                if not 200 <= response.status_code < 300:
                    raise PageUnavailable(f'HTTP {response.status_code}')

                body = _read_body(response, max_chars, deadline)
            finally:
                response.close()

            if not body:
                raise PageUnavailable('Empty response body.')
            return body


def fetch_page(url: str) -> LookupResult:
    """Fetch ``url`` and return its body text, bounded in total time, redirects and size."""
    timeout = float(getattr(settings, 'DETECTOR_FETCH_TIMEOUT', 8.0))
    return run_with_timeout(_fetch, url, timeout=timeout)


def _ocr(path: str) -> str:
    language = getattr(settings, 'DETECTOR_OCR_LANGUAGE', 'eng') or 'eng'
    timeout = float(getattr(settings, 'DETECTOR_OCR_TIMEOUT', 30.0))
    with Image.open(path) as image:
        return pytesseract.image_to_string(image, lang=language, timeout=timeout) or ''


def ocr_image(path: str) -> LookupResult:
    # pytesseract enforces its own timeout; the pool bound also covers Image.open.
    timeout = float(getattr(settings, 'DETECTOR_OCR_TIMEOUT', 30.0)) + 1
    return run_with_timeout(_ocr, path, timeout=timeout)


def _read_pdf(path: str) -> dict[str, Any]:
    with open(path, 'rb') as handle:
        reader = PdfReader(handle)
        text = '\n'.join(page.extract_text() or '' for page in reader.pages)
        info = {
            str(key).lstrip('/'): str(value)
            for key, value in (reader.metadata or {}).items()
        }
    return {'text': text, 'info': info}


def read_pdf(path: str) -> LookupResult:
    timeout = float(getattr(settings, 'DETECTOR_EXTRACT_TIMEOUT', 20.0))
    return run_with_timeout(_read_pdf, path, timeout=timeout)


def _read_exif(path: str) -> dict[str, str]:
    with open(path, 'rb') as handle:
        tags = exifread.process_file(handle, details=False)
    return {str(key): str(value) for key, value in tags.items()}


def read_image_exif(path: str) -> LookupResult:
    timeout = float(getattr(settings, 'DETECTOR_EXTRACT_TIMEOUT', 20.0))
    return run_with_timeout(_read_exif, path, timeout=timeout)


def read_text_file(path: str) -> str:
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as handle:
            return handle.read()
    except OSError as exc:
        raise ArtifactUnavailable(f'Could not read uploaded text file: {exc}') from exc


class ExternalContext:
    """Per-assessment gateway to the lookup functions above.

    Results are memoized for the lifetime of one assessment only.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._resolved: dict[str, LookupResult] = {}
        self._whois: dict[str, LookupResult] = {}
        self._pages: dict[str, LookupResult] = {}

    def _memoized(self, cache: dict[str, LookupResult], key: str, lookup: Callable[[str], LookupResult]) -> LookupResult:
        with self._lock:
            if key in cache:
                return cache[key]
        result = lookup(key)
        if not result.ok:
            logger.debug('Lookup %s(%s) failed: %s', getattr(lookup, '__name__', 'lookup'), key, result.error)
        with self._lock:
            cache.setdefault(key, result)
        return result

    def resolve(self, domain: str) -> LookupResult:
        return self._memoized(self._resolved, domain.lower(), resolve_domain)

    def whois(self, hostname: str) -> LookupResult:
        return self._memoized(self._whois, hostname.lower(), get_whois_data)

    def fetch(self, url: str) -> LookupResult:
        return self._memoized(self._pages, url, fetch_page)
