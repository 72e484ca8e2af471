from rest_framework import serializers

from detector.domain_utils import is_http_url


class UploadRequestSerializer(serializers.Serializer):
    file = serializers.FileField(allow_empty_file=True)


class CheckUrlRequestSerializer(serializers.Serializer):
    url = serializers.CharField(max_length=2048, trim_whitespace=True)

    def validate_url(self, value: str) -> str:
        if not is_http_url(value):
            raise serializers.ValidationError('A valid http(s) URL is required.')
        return value


class AnalyzeEmailRequestSerializer(serializers.Serializer):
    raw = serializers.CharField(trim_whitespace=False)
