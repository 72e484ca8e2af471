import os
import tempfile
from unittest.mock import patch

from django.test import SimpleTestCase

from detector.models import RiskLabel, SubjectType
from detector.risk_engine.checks.base import BaseEvidenceCheck, CheckContext
from detector.risk_engine.engine import RiskEngine
from detector.risk_engine.errors import ArtifactUnavailable
from detector.risk_engine.extraction import detect_subject_type, extract_artifact
from detector.risk_engine.pipelines import assess_email, assess_upload, assess_url
from detector.risk_engine.types import LookupResult


class _ExplodingCheck(BaseEvidenceCheck):
    name = 'Exploding Check'
    subject_types = frozenset({SubjectType.TEXT})

    def run(self, context):
        raise RuntimeError('parser crashed')


class _StaticCheck(BaseEvidenceCheck):
    name = 'Static Check'
    subject_types = frozenset({SubjectType.TEXT})

    def run(self, context):
        return [self.flag(key='static', reason='always', weight=3)]


class _UrlOnlyCheck(BaseEvidenceCheck):
    name = 'Url Only Check'
    subject_types = frozenset({SubjectType.URL})

    def run(self, context):
        return [self.flag(key='url_only', reason='never for text', weight=5)]


class DetectSubjectTypeTests(SimpleTestCase):
    def test_classification(self):
        cases = [
            ('application/pdf', 'scan.bin', SubjectType.DOCUMENT),
            ('', 'Offer-Letter.PDF', SubjectType.DOCUMENT),
            ('image/jpeg', 'upload', SubjectType.IMAGE),
            ('', 'photo.JPEG', SubjectType.IMAGE),
            ('', 'scan.tiff', SubjectType.IMAGE),
            ('text/plain', 'notes', SubjectType.TEXT),
            ('', 'notes.txt', SubjectType.TEXT),
            ('application/zip', 'archive.zip', SubjectType.UNKNOWN),
            ('', '', SubjectType.UNKNOWN),
        ]
        for content_type, filename, expected in cases:
            with self.subTest(content_type=content_type, filename=filename):
                self.assertEqual(detect_subject_type(content_type, filename), expected)


class ExtractArtifactTests(SimpleTestCase):
    def setUp(self):
        handle, self.path = tempfile.mkstemp(suffix='.bin')
        with os.fdopen(handle, 'wb') as destination:
            destination.write(b'payload')

    def tearDown(self):
        if os.path.exists(self.path):
            os.remove(self.path)

    def test_missing_file_is_unavailable(self):
        os.remove(self.path)
        with self.assertRaises(ArtifactUnavailable):
            extract_artifact(self.path, 'text/plain', 'notes.txt')

    @patch('detector.risk_engine.external.read_pdf')
    def test_pdf_text_and_info_are_returned(self, read_pdf):
        read_pdf.return_value = LookupResult.success({'text': 'Page one', 'info': {'Producer': 'Word'}})
        artifact = extract_artifact(self.path, 'application/pdf', 'offer.pdf')

        self.assertEqual(artifact.subject_type, SubjectType.DOCUMENT)
        self.assertEqual(artifact.text, 'Page one')
        self.assertEqual(artifact.pdf_info.value, {'Producer': 'Word'})

    @patch('detector.risk_engine.external.read_pdf', return_value=LookupResult.failure('EOF marker not found'))
    def test_pdf_parse_failure_leaves_text_empty(self, _read_pdf):
        artifact = extract_artifact(self.path, 'application/pdf', 'offer.pdf')

        self.assertEqual(artifact.text, '')
        self.assertFalse(artifact.pdf_info.ok)

    @patch('detector.risk_engine.external.ocr_image', return_value=LookupResult.failure('ocr timed out'))
    @patch('detector.risk_engine.external.read_image_exif', return_value=LookupResult.success({'Image Make': 'Canon'}))
    def test_image_ocr_failure_leaves_text_empty(self, _exif, _ocr):
        artifact = extract_artifact(self.path, 'image/png', 'shot.png')

        self.assertEqual(artifact.subject_type, SubjectType.IMAGE)
        self.assertEqual(artifact.text, '')
        self.assertEqual(artifact.exif.value, {'Image Make': 'Canon'})

    def test_text_file_is_read_verbatim(self):
        artifact = extract_artifact(self.path, 'text/plain', 'notes.txt')
        self.assertEqual(artifact.text, 'payload')
        self.assertIsNone(artifact.pdf_info)
        self.assertIsNone(artifact.exif)

    @patch('detector.risk_engine.external.read_image_exif')
    @patch('detector.risk_engine.external.ocr_image', return_value=LookupResult.success('scanned words'))
    def test_unknown_type_uses_ocr_without_metadata(self, _ocr, read_exif):
        artifact = extract_artifact(self.path, 'application/octet-stream', 'blob')

        self.assertEqual(artifact.subject_type, SubjectType.UNKNOWN)
        self.assertEqual(artifact.text, 'scanned words')
        read_exif.assert_not_called()


class RiskEngineTests(SimpleTestCase):
    def test_failing_check_contributes_nothing_and_others_still_run(self):
        engine = RiskEngine(checks=[_ExplodingCheck, _StaticCheck])
        with self.assertLogs('detector.risk_engine.engine', level='ERROR'):
            result = engine.run(CheckContext(subject_type=SubjectType.TEXT, text='x'))

        self.assertEqual([flag.key for flag in result.flags], ['static'])
        self.assertEqual(result.score, 3)
        self.assertEqual(result.label, RiskLabel.MEDIUM)

    def test_checks_for_other_subject_types_are_skipped(self):
        result = RiskEngine(checks=[_UrlOnlyCheck]).run(CheckContext(subject_type=SubjectType.TEXT))
        self.assertEqual(result.flags, ())
        self.assertEqual(result.label, RiskLabel.LOW)

    def test_duplicate_findings_across_checks_count_once(self):
        result = RiskEngine(checks=[_StaticCheck, _StaticCheck]).run(CheckContext(subject_type=SubjectType.TEXT))
        self.assertEqual(result.score, 3)

    def test_extracted_text_is_carried_through(self):
        result = RiskEngine(checks=[]).run(CheckContext(subject_type=SubjectType.TEXT), extracted_text='hello')
        self.assertEqual(result.extracted_text, 'hello')


class PipelineTests(SimpleTestCase):
    @patch('detector.risk_engine.external.get_whois_data', return_value=LookupResult.failure('whois timed out'))
    @patch('detector.risk_engine.external.fetch_page', return_value=LookupResult.success('<html></html>'))
    def test_assess_url_strips_whitespace_and_uses_hostname(self, fetch, whois_lookup):
        result = assess_url('  https://Shop.Example.com/cart  ')

        self.assertEqual(result.subject_type, SubjectType.URL)
        fetch.assert_called_once_with('https://Shop.Example.com/cart')
        whois_lookup.assert_called_once_with('shop.example.com')

    @patch('detector.risk_engine.external.get_whois_data', return_value=LookupResult.failure('whois timed out'))
    @patch('detector.risk_engine.external.socket.getaddrinfo', side_effect=UnicodeError('label empty or too long'))
    def test_unencodable_host_is_reported_as_fetch_failure(self, _getaddrinfo, _whois):
        result = assess_url('http://a..com/')

        self.assertEqual([(flag.key, flag.weight) for flag in result.flags], [('fetch_fail', 2)])
        self.assertEqual(result.score, 2)

    @patch('detector.risk_engine.external.get_whois_data', return_value=LookupResult.failure('whois timed out'))
    @patch('detector.risk_engine.external._hostname_resolves_to_public_ips', return_value=True)
    @patch('detector.risk_engine.external.requests.Session')
    def test_crashing_http_client_is_reported_as_fetch_failure(self, session_class, _public, _whois):
        session_class.return_value.__enter__.return_value.get.side_effect = RuntimeError('socket exploded')
        result = assess_url('http://prize.tk')

        self.assertEqual([flag.key for flag in result.flags], ['tld_susp', 'fetch_fail'])
        self.assertEqual(result.score, 3)

    def test_assess_email_without_links_performs_no_lookups(self):
        with patch('detector.risk_engine.external.get_whois_data') as whois_lookup:
            result = assess_email('Please verify your details.')

        self.assertEqual([flag.key for flag in result.flags], ['phishy_tone'])
        whois_lookup.assert_not_called()

    def test_assess_upload_of_missing_path_is_unavailable(self):
        with self.assertRaises(ArtifactUnavailable):
            assess_upload('/nonexistent/upload.txt', 'text/plain', 'upload.txt')
