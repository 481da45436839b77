"""
URLs del módulo de inventario
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

# SimpleRouter: la vista raíz de DefaultRouter taparía el list en prefijo ''
router = SimpleRouter()
router.register(r'', views.RecursoViewSet, basename='recurso')

urlpatterns = [
    path('', include(router.urls)),
]
