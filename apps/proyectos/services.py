"""
Servicio de Proyectos (Crowdfunding)
"""

import logging
from typing import Dict, List

from services import colecciones
from services import firebase_service as fs
from services.email_service import enviar_correo
from services.errors import NoEncontradoError, PermisoError

logger = logging.getLogger(__name__)

SISTEMA = fs.CROWDFUNDING

# Carácter de uso privado alto: cierra el rango de búsqueda por prefijo
FIN_PREFIJO = '\uf8ff'


def _por_prefijo(campo: str, prefijo: str) -> List[Dict]:
    return fs.listar(
        colecciones.PROYECTOS,
        [(campo, '>=', prefijo), (campo, '<=', prefijo + FIN_PREFIJO)],
        sistema=SISTEMA,
    )


def listar_proyectos(busqueda: str = '', fecha_limite: str = '') -> List[Dict]:
    """
    Lista proyectos.

    Con busqueda, une las coincidencias por prefijo de nombre y de
    categoría sin repetir (primero las de nombre). Con fecha_limite,
    solo los que vencen en esa fecha o antes.
    """
    if busqueda:
        proyectos = _por_prefijo('nombre', busqueda)
        vistos = {p['id'] for p in proyectos}
        proyectos += [p for p in _por_prefijo('categoria', busqueda) if p['id'] not in vistos]
    elif fecha_limite:
        proyectos = fs.listar(colecciones.PROYECTOS, [('fechaLimite', '<=', fecha_limite)], sistema=SISTEMA)
    else:
        proyectos = fs.listar(colecciones.PROYECTOS, sistema=SISTEMA)
    return proyectos


def _obtener(proyecto_id: str) -> Dict:
    proyecto = fs.obtener(colecciones.PROYECTOS, proyecto_id, sistema=SISTEMA)
    if proyecto is None:
        raise NoEncontradoError('Proyecto no encontrado')
    return proyecto


def obtener_proyecto(proyecto_id: str, usuario: Dict) -> Dict:
    """Proyecto con banderas para la vista de detalle."""
    proyecto = _obtener(proyecto_id)
    es_creador = proyecto.get('idCreador') == usuario['id']
    return {**proyecto, 'es_creador': es_creador, 'puede_donar': not es_creador}


def crear_proyecto(datos: Dict, usuario: Dict) -> Dict:
    proyecto = fs.crear(
        colecciones.PROYECTOS,
        {**datos, 'idCreador': usuario['id'], 'montoRecaudado': 0},
        sistema=SISTEMA,
    )
    logger.info(f"Proyecto '{proyecto['nombre']}' creado por {usuario['email']}")
    return proyecto


def actualizar_proyecto(proyecto_id: str, cambios: Dict, usuario: Dict) -> Dict:
    """
    Reemplaza los datos editables del proyecto.

    El creador y el monto recaudado se conservan; solo el creador o
    un administrador pueden editar.
    """
    proyecto = _obtener(proyecto_id)
    if proyecto.get('idCreador') != usuario['id'] and not usuario.get('admin'):
        raise PermisoError('Solo el creador puede editar este proyecto')

    actualizado = {**proyecto, **cambios}
    actualizado['objetivo'] = float(actualizado.get('objetivo') or 0)
    actualizado['idCreador'] = proyecto.get('idCreador')
    actualizado['montoRecaudado'] = proyecto.get('montoRecaudado', 0)

    resultado = fs.guardar(colecciones.PROYECTOS, proyecto_id, actualizado, sistema=SISTEMA)
    enviar_correo(
        usuario['email'],
        'Proyecto actualizado',
        'Los cambios en tu proyecto se han guardado correctamente.',
    )
    return resultado


def obtener_estadisticas() -> Dict:
    """Totales para el panel del administrador."""
    return {
        'total_proyectos': fs.contar(colecciones.PROYECTOS, sistema=SISTEMA),
        'total_donaciones': fs.contar(colecciones.DONACIONES, sistema=SISTEMA),
        'usuarios_activos': fs.contar(colecciones.USUARIOS, [('activo', '==', True)], sistema=SISTEMA),
    }
