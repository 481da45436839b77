"""
URLs del módulo de donaciones
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

router = SimpleRouter()
router.register(r'', views.DonacionViewSet, basename='donacion')

urlpatterns = [
    path('', include(router.urls)),
]
