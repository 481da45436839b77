"""
URLs del módulo de mensajes
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

# SimpleRouter: la vista raíz de DefaultRouter taparía el list en prefijo ''
router = SimpleRouter()
router.register(r'', views.MensajeViewSet, basename='mensaje')

urlpatterns = [
    path('', include(router.urls)),
]
