"""
URLs del módulo de solicitudes
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

# 'mias' se registra primero para que no lo capture el detalle de prefijo ''
router = SimpleRouter()
router.register(r'mias', views.MisSolicitudesViewSet, basename='mi-solicitud')
router.register(r'', views.SolicitudViewSet, basename='solicitud')

urlpatterns = [
    path('', include(router.urls)),
]
