"""
Campus URL Configuration

Este archivo define todas las rutas principales del proyecto.
Cada app tiene su propio archivo urls.py que se incluye aquí.

- /api/... : sistema de laboratorios AP-LABS
- /api/crowdfunding/... : plataforma de donaciones
"""

from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse
from apps.proyectos.views import estadisticas as estadisticas_crowdfunding


def api_root(request):
    """Vista raíz de la API"""
    return JsonResponse({
        'message': 'Campus API funcionando correctamente',
        'version': '1.0.0',
        'endpoints': {
            'auth': '/api/auth/',
            'usuarios': '/api/usuarios/',
            'departamentos': '/api/departamentos/',
            'laboratorios': '/api/laboratorios/',
            'inventario': '/api/inventario/',
            'mantenimientos': '/api/mantenimientos/',
            'solicitudes': '/api/solicitudes/',
            'calendario': '/api/calendario/',
            'notificaciones': '/api/notificaciones/',
            'mensajes': '/api/mensajes/',
            'bitacora': '/api/bitacora/',
            'parametros': '/api/parametros/',
            'reportes': '/api/reportes/',
            'dashboard': '/api/dashboard/',
            'crowdfunding': '/api/crowdfunding/',
        }
    })


crowdfunding_patterns = [
    path('cuentas/', include('apps.cuentas.urls')),
    path('proyectos/', include('apps.proyectos.urls')),
    path('donaciones/', include('apps.donaciones.urls')),
    path('estadisticas/', estadisticas_crowdfunding, name='crowdfunding-estadisticas'),
]

urlpatterns = [
    # API Root
    path('', api_root, name='api-root'),
    path('api/', api_root, name='api-root-with-prefix'),

    # Django Admin
    path('admin/', admin.site.urls),

    # AP-LABS
    path('api/auth/', include('apps.auth.urls')),
    path('api/usuarios/', include('apps.usuarios.urls')),
    path('api/departamentos/', include('apps.departamentos.urls')),
    path('api/laboratorios/', include('apps.laboratorios.urls')),
    path('api/inventario/', include('apps.inventario.urls')),
    path('api/mantenimientos/', include('apps.mantenimientos.urls')),
    path('api/solicitudes/', include('apps.solicitudes.urls')),
    path('api/calendario/', include('apps.calendario.urls')),
    path('api/notificaciones/', include('apps.notificaciones.urls')),
    path('api/mensajes/', include('apps.mensajes.urls')),
    path('api/bitacora/', include('apps.bitacora.urls')),
    path('api/parametros/', include('apps.parametros.urls')),
    path('api/reportes/', include('apps.reportes.urls')),
    path('api/dashboard/', include('apps.dashboard.urls')),

    # Crowdfunding
    path('api/crowdfunding/', include(crowdfunding_patterns)),
]
