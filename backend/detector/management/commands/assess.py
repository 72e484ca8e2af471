from __future__ import annotations

import json
import mimetypes
import os

from django.core.management.base import BaseCommand, CommandError

from detector.domain_utils import is_http_url
from detector.risk_engine.errors import ArtifactUnavailable
from detector.risk_engine.pipelines import assess_email, assess_upload, assess_url
from detector.services import build_email_response, build_upload_response, build_url_response


class Command(BaseCommand):
    help = 'Run one risk assessment for a file, a URL or raw email text and print the result as JSON.'

    def add_arguments(self, parser):
        target = parser.add_mutually_exclusive_group(required=True)
        target.add_argument('--file', type=str, help='Path of a document, image or text file to assess.')
        target.add_argument('--url', type=str, help='URL to assess.')
        target.add_argument('--email-file', type=str, help='Path of a file holding raw email text (headers and body).')
        parser.add_argument('--content-type', type=str, default='', help='Override the guessed content type of --file.')

    def handle(self, *args, **options):
        if options['file']:
            payload = self._assess_file(options['file'], options['content_type'])
        elif options['url']:
            url = options['url'].strip()
            if not is_http_url(url):
                raise CommandError('A valid http(s) URL is required.')
            payload = build_url_response(assess_url(url), url)
        else:
            payload = build_email_response(assess_email(self._read_text(options['email_file'])))

        self.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False))
        self.stdout.write(self.style.SUCCESS(f"{payload['label']} (score {payload['score']})"))

    def _assess_file(self, path: str, content_type: str) -> dict:
        content_type = content_type or mimetypes.guess_type(path)[0] or ''
        try:
            result = assess_upload(path, content_type=content_type, filename=os.path.basename(path))
        except ArtifactUnavailable as exc:
            raise CommandError(str(exc)) from exc
        return build_upload_response(result, content_type)

    def _read_text(self, path: str) -> str:
        try:
            with open(path, 'r', encoding='utf-8', errors='replace') as handle:
                return handle.read()
        except OSError as exc:
            raise CommandError(f'Could not read {path}: {exc}') from exc
