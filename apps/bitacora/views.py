"""
Vistas de Bitácora

Consulta y exportación del registro de actividades (solo administradores).
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsAdmin
from apps.reportes import exportadores
from services.errors import primer_error
from services.fechas import ahora, formatear_fecha_hora
from .serializers import ExportarBitacoraSerializer
from . import services
import logging

logger = logging.getLogger(__name__)

ENCABEZADOS = ['Fecha', 'Hora', 'Usuario', 'Email', 'Rol', 'Acción', 'Detalle', 'Módulo', 'Recurso']


class BitacoraViewSet(viewsets.ViewSet):
    """
    ViewSet de la bitácora.

    Endpoints:
        GET /api/bitacora/?search=&modulo= - Últimos 200 registros
        GET /api/bitacora/exportar/?fecha_inicio=&fecha_fin=&formato= - PDF/Excel
    """

    permission_classes = [IsAdmin]

    def list(self, request):
        """Lista los registros con búsqueda y filtro por módulo"""
        try:
            resultado = services.listar_registros(
                busqueda=request.query_params.get('search', ''),
                modulo=request.query_params.get('modulo', ''),
            )
            return Response(resultado)

        except Exception as e:
            logger.error(f"Error al obtener bitácora: {str(e)}")
            return Response(
                {'error': 'Error al obtener la bitácora'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['get'])
    def exportar(self, request):
        """Exporta los registros de un rango de fechas"""
        serializer = ExportarBitacoraSerializer(data=request.query_params.dict())
        if not serializer.is_valid():
            return Response(
                {'error': primer_error(serializer.errors)},
                status=status.HTTP_400_BAD_REQUEST
            )

        inicio = serializer.validated_data['fecha_inicio']
        fin = serializer.validated_data['fecha_fin']

        try:
            registros = services.registros_en_rango(inicio, fin)
            if not registros:
                return Response(
                    {'error': 'No hay registros en el rango de fechas seleccionado'},
                    status=status.HTTP_404_NOT_FOUND
                )

            filas = [
                [
                    r.get('fecha_formateada', ''),
                    r.get('hora_formateada', ''),
                    r.get('usuario_nombre', ''),
                    r.get('usuario_email', ''),
                    r.get('usuario_rol', ''),
                    r.get('accion', ''),
                    r.get('accion_detalle', ''),
                    r.get('modulo', ''),
                    r.get('recurso_nombre', ''),
                ]
                for r in registros
            ]
            seccion = exportadores.Seccion('Bitácora', ENCABEZADOS, filas)
            nombre = f"Bitacora_{inicio.isoformat()}_{fin.isoformat()}"

            return exportadores.exportar(
                serializer.validated_data['formato'],
                nombre,
                'BITÁCORA DE ACTIVIDADES - SISTEMA AP-LABS',
                [
                    f"Periodo: {inicio.strftime('%d/%m/%Y')} - {fin.strftime('%d/%m/%Y')}",
                    f"Generado: {formatear_fecha_hora(ahora())}",
                    f"Total de registros: {len(registros)}",
                ],
                [seccion],
            )

        except Exception as e:
            logger.error(f"Error al exportar bitácora: {str(e)}")
            return Response(
                {'error': 'Error al exportar la bitácora'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
