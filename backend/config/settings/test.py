import tempfile

from .base import *  # noqa: F401,F403

DEBUG = False
SECURE_SSL_REDIRECT = False
SECURE_HSTS_SECONDS = 0
SECURE_HSTS_INCLUDE_SUBDOMAINS = False
SECURE_HSTS_PRELOAD = False

# Keep uploaded test artifacts out of the source tree.
DETECTOR_UPLOAD_DIR = tempfile.mkdtemp(prefix='detector-test-uploads-')

DETECTOR_DNS_TIMEOUT = 1.0
DETECTOR_WHOIS_TIMEOUT = 1.0
DETECTOR_FETCH_TIMEOUT = 1.0
DETECTOR_OCR_TIMEOUT = 1.0
DETECTOR_EXTRACT_TIMEOUT = 1.0
