"""
Vistas de Reportes
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsAdmin, usuario_actual
from apps.bitacora.services import registrar_accion
from services.errors import primer_error
from services.fechas import ahora, formatear_fecha_hora
from .serializers import GenerarReporteSerializer
from . import exportadores, services
import logging

logger = logging.getLogger(__name__)


class ReporteViewSet(viewsets.ViewSet):
    """
    ViewSet de reportes (solo administrador).

    Endpoints:
        GET /api/reportes/estadisticas/ - Indicadores generales
        POST /api/reportes/generar/ - Descarga PDF, XLSX o ZIP
    """

    permission_classes = [IsAdmin]

    @action(detail=False, methods=['get'])
    def estadisticas(self, request):
        try:
            return Response(services.obtener_estadisticas())

        except Exception as e:
            logger.error(f"Error obteniendo estadísticas: {str(e)}")
            return Response(
                {'error': 'Error al obtener estadísticas'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['post'])
    def generar(self, request):
        """Genera el reporte en el formato solicitado"""
        serializer = GenerarReporteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        filtros = serializer.validated_data
        inicio, fin = filtros['fechaInicio'], filtros['fechaFin']

        try:
            estadisticas = services.obtener_estadisticas()
            datos = services.obtener_datos_reporte(
                filtros['tipoReporte'],
                fecha_inicio=inicio,
                fecha_fin=fin,
                id_departamento=filtros['idDepartamento'],
                id_estado=filtros['idEstado'],
            )

            respuesta = exportadores.exportar(
                filtros['formato'],
                f"Reporte_General_{inicio.isoformat()}_{fin.isoformat()}",
                'REPORTE GENERAL - SISTEMA AP-LABS',
                [
                    f"Periodo: {inicio.strftime('%d/%m/%Y')} - {fin.strftime('%d/%m/%Y')}",
                    f"Generado: {formatear_fecha_hora(ahora())}",
                ],
                services.secciones_reporte(datos),
                services.pares_estadisticas(estadisticas),
            )

            registrar_accion(
                usuario_actual(request),
                'Generar Reporte',
                f"Generó reporte de {filtros['tipoReporte']} en formato {filtros['formato']}",
                'Reportes',
            )
            return respuesta

        except Exception as e:
            logger.error(f"Error generando reporte: {str(e)}")
            return Response(
                {'error': 'Error al generar el reporte'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
