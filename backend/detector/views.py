import logging

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from detector.risk_engine.errors import ArtifactUnavailable
from detector.risk_engine.pipelines import assess_email, assess_upload, assess_url
from detector.serializers import AnalyzeEmailRequestSerializer, CheckUrlRequestSerializer, UploadRequestSerializer
from detector.services import build_email_response, build_upload_response, build_url_response
from detector.uploads import stored_upload

logger = logging.getLogger(__name__)


def _error_response(message: str, http_status: int, detail=None) -> Response:
    payload = {'error': message}
    if detail:
        payload['detail'] = detail
    return Response(payload, status=http_status)


class HealthAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'status': 'ok', 'timestamp': timezone.now(), 'version': settings.APP_VERSION})


class UploadAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def post(self, request):
        serializer = UploadRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return _error_response('No file uploaded', status.HTTP_400_BAD_REQUEST, serializer.errors)

        uploaded = serializer.validated_data['file']
        content_type = getattr(uploaded, 'content_type', '') or ''
        try:
            with stored_upload(uploaded) as path:
                result = assess_upload(path, content_type=content_type, filename=uploaded.name)
        except ArtifactUnavailable as exc:
            logger.warning('Upload %r could not be acquired for analysis: %s', uploaded.name, exc)
            return _error_response('Analysis failed', status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
        except Exception:
            logger.exception('Unexpected failure analysing upload %r.', uploaded.name)
            return _error_response('Analysis failed', status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(build_upload_response(result, content_type), status=status.HTTP_200_OK)


class CheckUrlAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]

    def post(self, request):
        serializer = CheckUrlRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return _error_response('No url provided', status.HTTP_400_BAD_REQUEST, serializer.errors)

        url = serializer.validated_data['url']
        try:
            result = assess_url(url)
        except Exception:
            logger.exception('Unexpected failure analysing url %r.', url)
            return _error_response('URL analysis failed', status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(build_url_response(result, url), status=status.HTTP_200_OK)


class AnalyzeEmailAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]

    def post(self, request):
        serializer = AnalyzeEmailRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return _error_response('No email text provided', status.HTTP_400_BAD_REQUEST, serializer.errors)

        try:
            result = assess_email(serializer.validated_data['raw'])
        except Exception:
            logger.exception('Unexpected failure analysing email text.')
            return _error_response('Email analysis failed', status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(build_email_response(result), status=status.HTTP_200_OK)
