"""
URLs del módulo de parámetros globales
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

router = SimpleRouter()
router.register(r'estados', views.EstadoSistemaViewSet, basename='estado-sistema')
router.register(r'', views.ParametroViewSet, basename='parametro')

urlpatterns = [
    path('', include(router.urls)),
]
