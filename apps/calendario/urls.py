"""
URLs del módulo de calendario
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

router = SimpleRouter()
router.register(r'bloqueos', views.BloqueoViewSet, basename='bloqueo')
router.register(r'', views.CalendarioViewSet, basename='calendario')

urlpatterns = [
    path('', include(router.urls)),
]
