from django.urls import path

from detector import views

urlpatterns = [
    path('upload', views.UploadAPIView.as_view(), name='upload-api'),
    path('check-url', views.CheckUrlAPIView.as_view(), name='check-url-api'),
    path('analyze-email', views.AnalyzeEmailAPIView.as_view(), name='analyze-email-api'),
    path('health', views.HealthAPIView.as_view(), name='health-api'),
]
