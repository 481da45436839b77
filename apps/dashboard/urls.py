"""URLs del módulo de dashboard"""

from django.urls import path
from . import views

urlpatterns = [
    path('admin/', views.admin_dashboard, name='dashboard-admin'),
    path('tecnico/', views.tecnico_dashboard, name='dashboard-tecnico'),
    path('usuario/', views.usuario_dashboard, name='dashboard-usuario'),
]
