from detector.risk_engine.checks.domain_age import DiscoveredUrlCheck, DomainAgeCheck, EmailLinkAgeCheck
from detector.risk_engine.checks.email_domain import DiscoveredEmailCheck
from detector.risk_engine.checks.header_spoofing import HeaderSpoofingCheck
from detector.risk_engine.checks.image_metadata import ImageMetadataCheck
from detector.risk_engine.checks.page_content import PageContentCheck
from detector.risk_engine.checks.pdf_metadata import PdfMetadataCheck
from detector.risk_engine.checks.text_patterns import TextPatternCheck
from detector.risk_engine.checks.url_hostname import HomographCheck, SuspiciousTldCheck

# Order defines flag order in the response, not the score.
UPLOAD_CHECKS = [
    TextPatternCheck,
    PdfMetadataCheck,
    ImageMetadataCheck,
    DiscoveredEmailCheck,
    DiscoveredUrlCheck,
]

URL_CHECKS = [
    HomographCheck,
    SuspiciousTldCheck,
    PageContentCheck,
    DomainAgeCheck,
]

EMAIL_CHECKS = [
    HeaderSpoofingCheck,
    TextPatternCheck,
    EmailLinkAgeCheck,
]
