"""
URLs del módulo de reportes
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

# SimpleRouter: la vista raíz de DefaultRouter taparía el list en prefijo ''
router = SimpleRouter()
router.register(r'', views.ReporteViewSet, basename='reporte')

urlpatterns = [
    path('', include(router.urls)),
]
