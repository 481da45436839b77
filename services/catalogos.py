"""
Catálogos compartidos

Lecturas de colecciones pequeñas (roles, estados, medidas, tipos) que
los módulos usan para resolver ids a nombres.
"""

import logging
from typing import Dict, List

from services import colecciones
from services import firebase_service as fs

logger = logging.getLogger(__name__)


def mapa_nombres(coleccion: str, campo: str = 'nombre') -> Dict[str, str]:
    """{id: nombre} de todos los documentos de una colección."""
    return {doc['id']: doc.get(campo, '') for doc in fs.listar(coleccion)}


def listar_catalogo(coleccion: str) -> List[Dict]:
    """Documentos de un catálogo ordenados por nombre."""
    documentos = fs.listar(coleccion)
    documentos.sort(key=lambda d: str(d.get('nombre', '')).lower())
    return documentos


def roles() -> List[Dict]:
    """
    Roles del sistema.

    Usa la colección 'rol' si tiene datos; si no, los cuatro roles fijos.
    """
    documentos = fs.listar(colecciones.ROLES)
    if documentos:
        return sorted(documentos, key=lambda r: str(r['id']))
    return [{'id': k, 'nombre': v} for k, v in colecciones.NOMBRES_ROL.items()]


def nombre_rol(id_rol: str, roles_por_id: Dict[str, str] = None) -> str:
    if roles_por_id and id_rol in roles_por_id:
        return roles_por_id[id_rol]
    return colecciones.NOMBRES_ROL.get(str(id_rol), 'Sin rol')


def normalizar_estado(nombre: str) -> str:
    """
    Normaliza el nombre de un estado de recurso.

    disponible/activo → Disponible; *mantenimiento* → En Mantenimiento;
    inactivo/*fuera*/*servicio* → Fuera de Servicio; reservado → Reservado.
    Otros nombres se devuelven tal cual.
    """
    texto = (nombre or '').strip().lower()
    if texto in ('disponible', 'activo'):
        return 'Disponible'
    if 'mantenimiento' in texto:
        return 'En Mantenimiento'
    if texto == 'inactivo' or 'fuera' in texto or 'servicio' in texto:
        return 'Fuera de Servicio'
    if texto == 'reservado':
        return 'Reservado'
    return (nombre or '').strip()


def buscar_estado(*nombres: str) -> Dict:
    """
    Documento de la colección 'estado' cuyo nombre coincide con alguno
    de los dados (sin distinguir mayúsculas). Vacío si no existe.
    """
    buscados = {n.lower() for n in nombres}
    for estado in fs.listar(colecciones.ESTADOS):
        if str(estado.get('nombre', '')).strip().lower() in buscados:
            return estado
    return {}
