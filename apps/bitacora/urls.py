"""
URLs del módulo de bitácora
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

# SimpleRouter: la vista raíz de DefaultRouter taparía el list en prefijo ''
router = SimpleRouter()
router.register(r'', views.BitacoraViewSet, basename='bitacora')

urlpatterns = [
    path('', include(router.urls)),
]
