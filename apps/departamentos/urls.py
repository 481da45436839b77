"""
URLs del módulo de departamentos
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

# SimpleRouter: la vista raíz de DefaultRouter taparía el list en prefijo ''
router = SimpleRouter()
router.register(r'', views.DepartamentoViewSet, basename='departamento')

urlpatterns = [
    path('', include(router.urls)),
]
