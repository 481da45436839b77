"""
URLs del módulo de proyectos
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

router = SimpleRouter()
router.register(r'', views.ProyectoViewSet, basename='proyecto')

urlpatterns = [
    path('', include(router.urls)),
]
