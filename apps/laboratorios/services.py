"""
Servicio de Laboratorios
"""

import logging
from typing import Dict, List, Optional

from apps.auth.middleware import nombre_completo
from apps.bitacora.services import registrar_accion
from services import catalogos, colecciones
from services import firebase_service as fs
from services.errors import NoEncontradoError
from services.fechas import ahora_iso

logger = logging.getLogger(__name__)

MODULO = 'Laboratorios'


def _encargados(laboratorios: List[Dict]) -> Dict[str, str]:
    nombres = {}
    for usuario_id in {lab.get('encargado') for lab in laboratorios if lab.get('encargado')}:
        usuario = fs.obtener(colecciones.USUARIOS, usuario_id)
        nombres[usuario_id] = nombre_completo(usuario) if usuario else 'Sin asignar'
    return nombres


def _decorar(laboratorios: List[Dict]) -> List[Dict]:
    encargados = _encargados(laboratorios)
    departamentos = catalogos.mapa_nombres(colecciones.DEPARTAMENTOS)
    return [
        {
            **lab,
            'activo': lab.get('activo', True) is not False,
            'encargado_nombre': encargados.get(lab.get('encargado'), 'Sin asignar'),
            'departamento_nombre': departamentos.get(lab.get('id_departamento'), ''),
        }
        for lab in laboratorios
    ]


def listar_laboratorios(
    estado: str = '',
    departamento: str = '',
    activo: Optional[bool] = None,
    busqueda: str = '',
) -> List[Dict]:
    laboratorios = _decorar(fs.listar(colecciones.LABORATORIOS))

    if estado:
        laboratorios = [lab for lab in laboratorios if lab.get('estado') == estado]
    if departamento:
        laboratorios = [lab for lab in laboratorios if lab.get('id_departamento') == departamento]
    if activo is not None:
        laboratorios = [lab for lab in laboratorios if lab['activo'] == activo]

    termino = (busqueda or '').strip().lower()
    if termino:
        laboratorios = [
            lab for lab in laboratorios
            if termino in str(lab.get('nombre', '')).lower()
            or termino in str(lab.get('codigo', '')).lower()
            or termino in str(lab.get('ubicacion', '')).lower()
        ]

    laboratorios.sort(key=lambda lab: str(lab.get('nombre', '')).lower())
    return laboratorios


def obtener_laboratorio(laboratorio_id: str) -> Dict:
    laboratorio = fs.obtener(colecciones.LABORATORIOS, laboratorio_id)
    if laboratorio is None:
        raise NoEncontradoError('Laboratorio no encontrado')
    return _decorar([laboratorio])[0]


def crear_laboratorio(datos: Dict, actor: Dict) -> Dict:
    laboratorio = fs.crear(colecciones.LABORATORIOS, {**datos, 'fecha_creacion': ahora_iso()})
    registrar_accion(
        actor, 'Crear Laboratorio', f"Creó el laboratorio {datos['nombre']}", MODULO,
        recurso_nombre=datos['nombre'], recurso_codigo=datos['codigo'], recurso_id=laboratorio['id'],
    )
    return laboratorio


def actualizar_laboratorio(laboratorio_id: str, cambios: Dict, actor: Dict) -> Dict:
    if not fs.actualizar(colecciones.LABORATORIOS, laboratorio_id, cambios):
        raise NoEncontradoError('Laboratorio no encontrado')

    laboratorio = obtener_laboratorio(laboratorio_id)
    registrar_accion(
        actor, 'Editar Laboratorio', f"Actualizó el laboratorio {laboratorio.get('nombre')}", MODULO,
        recurso_nombre=laboratorio.get('nombre'), recurso_codigo=laboratorio.get('codigo'),
        recurso_id=laboratorio_id,
    )
    return laboratorio


def cambiar_estado(laboratorio_id: str, actor: Dict) -> Dict:
    laboratorio = fs.obtener(colecciones.LABORATORIOS, laboratorio_id)
    if laboratorio is None:
        raise NoEncontradoError('Laboratorio no encontrado')

    nuevo_estado = laboratorio.get('activo', True) is False
    fs.actualizar(colecciones.LABORATORIOS, laboratorio_id, {'activo': nuevo_estado})
    registrar_accion(
        actor,
        'Activar Laboratorio' if nuevo_estado else 'Desactivar Laboratorio',
        f"Laboratorio {laboratorio.get('nombre')} {'activado' if nuevo_estado else 'desactivado'}",
        MODULO,
        recurso_nombre=laboratorio.get('nombre'), recurso_id=laboratorio_id,
    )
    return {'id': laboratorio_id, 'activo': nuevo_estado}


def eliminar_laboratorio(laboratorio_id: str, actor: Dict) -> None:
    laboratorio = fs.obtener(colecciones.LABORATORIOS, laboratorio_id)
    if laboratorio is None:
        raise NoEncontradoError('Laboratorio no encontrado')
    fs.eliminar(colecciones.LABORATORIOS, laboratorio_id)
    registrar_accion(
        actor, 'Eliminar Laboratorio', f"Eliminó el laboratorio {laboratorio.get('nombre')}", MODULO,
        recurso_nombre=laboratorio.get('nombre'), recurso_id=laboratorio_id,
    )
