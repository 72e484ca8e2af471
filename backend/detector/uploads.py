from __future__ import annotations

from contextlib import contextmanager
import logging
import os
import tempfile
from typing import Iterator

from django.conf import settings

from detector.risk_engine.errors import ArtifactUnavailable

logger = logging.getLogger(__name__)


@contextmanager
def stored_upload(uploaded_file) -> Iterator[str]:
    """Copy an upload to a private temporary file and remove it on exit, whatever happens."""
    upload_dir = str(getattr(settings, 'DETECTOR_UPLOAD_DIR', '') or tempfile.gettempdir())
    _, suffix = os.path.splitext(getattr(uploaded_file, 'name', '') or '')
    path = ''
    try:
        try:
            os.makedirs(upload_dir, exist_ok=True)
            handle, path = tempfile.mkstemp(prefix='upload-', suffix=suffix.lower()[:16], dir=upload_dir)
            with os.fdopen(handle, 'wb') as destination:
                for chunk in uploaded_file.chunks():
                    destination.write(chunk)
        except OSError as exc:
            raise ArtifactUnavailable(f'Could not store uploaded file: {exc}') from exc
        yield path
    finally:
        if path:
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
            except OSError:
                logger.exception('Could not remove temporary upload %s.', path)
