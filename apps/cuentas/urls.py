"""
URLs del módulo de cuentas (Crowdfunding)
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

router = SimpleRouter()
router.register(r'usuarios', views.UsuarioCrowdfundingViewSet, basename='usuario-crowdfunding')
router.register(r'', views.CuentaViewSet, basename='cuenta')

urlpatterns = [
    path('', include(router.urls)),
]
