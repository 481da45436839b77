"""
Servicio de Bitácora

Registra las acciones de los usuarios en la colección 'bitacora'.
Registrar nunca interrumpe el flujo principal: los errores se
escriben en el log y la función retorna None.
"""

import logging
from datetime import date
from typing import Dict, List, Optional

from django.utils import timezone
from services import colecciones
from services import firebase_service as fs
from services.fechas import ahora, en_rango

logger = logging.getLogger(__name__)

# Máximo de registros que muestra el listado
LIMITE_LISTADO = 200

CAMPOS_BUSQUEDA = [
    'usuario_nombre', 'usuario_email', 'accion_detalle',
    'modulo', 'recurso_nombre', 'recurso_codigo',
]


def registrar_en_bitacora(
    usuario_nombre: str,
    usuario_email: str,
    usuario_rol: str,
    accion: str,
    accion_detalle: str,
    modulo: str,
    recurso_nombre: Optional[str] = None,
    recurso_codigo: Optional[str] = None,
    recurso_id: Optional[str] = None,
    observaciones: Optional[str] = None,
) -> Optional[str]:
    """
    Agrega una entrada a la bitácora.

    Returns:
        id del documento creado, o None si falló
    """
    try:
        instante = ahora()
        local = timezone.localtime(instante)
        entrada = {
            'usuario_nombre': usuario_nombre or 'Usuario',
            'usuario_email': usuario_email or '',
            'usuario_rol': usuario_rol or '',
            'accion': accion,
            'accion_detalle': accion_detalle,
            'modulo': modulo,
            'timestamp': instante,
            'fecha_formateada': local.strftime('%d/%m/%Y'),
            'hora_formateada': local.strftime('%H:%M'),
        }
        opcionales = {
            'recurso_nombre': recurso_nombre,
            'recurso_codigo': recurso_codigo,
            'recurso_id': recurso_id,
            'observaciones': observaciones,
        }
        entrada.update({k: v for k, v in opcionales.items() if v})

        creado = fs.crear(colecciones.BITACORA, entrada)
        logger.info(f"Bitácora: {accion} en {modulo} por {usuario_email}")
        return creado['id']

    except Exception as e:
        logger.error(f"Error al registrar en bitácora ({accion}): {str(e)}")
        return None


def registrar_accion(usuario: Optional[Dict], accion: str, accion_detalle: str, modulo: str, **extra) -> Optional[str]:
    """Atajo que toma nombre, email y rol del usuario autenticado."""
    usuario = usuario or {}
    return registrar_en_bitacora(
        usuario.get('nombre', 'Usuario'),
        usuario.get('email', ''),
        usuario.get('rol', ''),
        accion,
        accion_detalle,
        modulo,
        **extra,
    )


def listar_registros(busqueda: str = '', modulo: str = '') -> Dict:
    """
    Últimos 200 registros, más recientes primero, filtrados en memoria.

    Returns:
        {'registros': [...], 'modulos': [...], 'total': n}
    """
    registros = fs.listar(colecciones.BITACORA, orden='timestamp', descendente=True, limite=LIMITE_LISTADO)
    modulos = sorted({r.get('modulo') for r in registros if r.get('modulo')})

    termino = (busqueda or '').strip().lower()
    if termino:
        registros = [
            r for r in registros
            if any(termino in str(r.get(campo, '')).lower() for campo in CAMPOS_BUSQUEDA)
        ]
    if modulo:
        registros = [r for r in registros if r.get('modulo') == modulo]

    return {'registros': registros, 'modulos': modulos, 'total': len(registros)}


def registros_en_rango(inicio: date, fin: date) -> List[Dict]:
    """Registros cuyo timestamp cae entre inicio y fin (días completos)."""
    registros = fs.listar(colecciones.BITACORA, orden='timestamp', descendente=True)
    return [r for r in registros if en_rango(r.get('timestamp'), inicio, fin, incluir_sin_fecha=False)]
