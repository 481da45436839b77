"""
Servicio de Parámetros Globales

- parametros_globales: valores configurables del sistema (tipados)
- estados_sistema: catálogo de estados por categoría

Los documentos que aún no existen en Firestore se completan con los
valores por defecto de defaults.py.
"""

import logging
import time
from typing import Dict, List, Optional

from apps.bitacora.services import registrar_accion
from services import colecciones
from services import firebase_service as fs
from services.errors import NoEncontradoError, ValidacionError
from . import defaults

logger = logging.getLogger(__name__)

MODULO = 'Parámetros Globales'
MODULO_ESTADOS = 'Parámetros Globales - Estados'

TIPOS_ESTADO = ['equipos', 'solicitudes', 'mantenimientos', 'reservas']


def _con_defaults(coleccion: str, por_defecto: List[Dict]) -> List[Dict]:
    """Documentos guardados más los valores por defecto que falten."""
    guardados = {doc['id']: doc for doc in fs.listar(coleccion)}
    resultado = [{**d, **guardados.pop(d['id'], {})} for d in por_defecto]
    return resultado + list(guardados.values())


def listar_parametros(categoria: str = '', activo: Optional[bool] = None) -> List[Dict]:
    parametros = _con_defaults(colecciones.PARAMETROS, defaults.PARAMETROS)
    if categoria:
        parametros = [p for p in parametros if p.get('categoria') == categoria]
    if activo is not None:
        parametros = [p for p in parametros if (p.get('activo', True) is not False) == activo]
    return parametros


def obtener_parametro(parametro_id: str) -> Dict:
    for parametro in listar_parametros():
        if parametro['id'] == parametro_id:
            return parametro
    raise NoEncontradoError('Parámetro no encontrado')


def convertir_valor(parametro: Dict, valor):
    """
    Convierte el valor recibido al tipo del parámetro y valida sus límites.

    Raises:
        ValidacionError: Si el valor no corresponde al tipo o está fuera de rango
    """
    tipo = parametro.get('tipo', 'texto')

    if tipo == 'numero':
        if isinstance(valor, bool):
            raise ValidacionError('El valor debe ser numérico')
        try:
            numero = float(valor)
        except (TypeError, ValueError):
            raise ValidacionError('El valor debe ser numérico')
        minimo, maximo = parametro.get('min'), parametro.get('max')
        if (minimo is not None and numero < minimo) or (maximo is not None and numero > maximo):
            raise ValidacionError(f'El valor debe estar entre {minimo} y {maximo}')
        return int(numero) if numero.is_integer() else numero

    if tipo == 'booleano':
        if isinstance(valor, bool):
            return valor
        texto = str(valor).strip().lower()
        if texto in ('true', '1', 'si', 'sí'):
            return True
        if texto in ('false', '0', 'no'):
            return False
        raise ValidacionError('El valor debe ser verdadero o falso')

    return '' if valor is None else str(valor)


def actualizar_parametro(parametro_id: str, valor, actor: Dict, activo: Optional[bool] = None) -> Dict:
    parametro = obtener_parametro(parametro_id)
    parametro['valor'] = convertir_valor(parametro, valor)
    if activo is not None:
        parametro['activo'] = activo

    guardado = fs.guardar(colecciones.PARAMETROS, parametro_id, parametro)
    registrar_accion(
        actor, 'Actualizar', f"Actualizó parámetro \"{parametro['nombre']}\" a: {parametro['valor']}", MODULO,
    )
    return guardado


def listar_estados(tipo: str = '') -> List[Dict]:
    estados = _con_defaults(colecciones.ESTADOS_SISTEMA, [{**e, 'activo': True} for e in defaults.ESTADOS])
    if tipo:
        estados = [e for e in estados if e.get('tipo') == tipo]
    return estados


def guardar_estado(datos: Dict, actor: Dict, estado_id: Optional[str] = None) -> Dict:
    """Crea o actualiza un estado del sistema."""
    editando = estado_id is not None
    if not editando:
        estado_id = f"{datos['tipo']}_{int(time.time() * 1000)}"
    elif not any(e['id'] == estado_id for e in listar_estados()):
        raise NoEncontradoError('Estado no encontrado')

    estado = fs.guardar(colecciones.ESTADOS_SISTEMA, estado_id, {
        'nombre': datos['nombre'],
        'descripcion': datos['descripcion'],
        'color': datos.get('color') or defaults.COLOR_DEFECTO,
        'activo': datos.get('activo', True),
        'tipo': datos['tipo'],
    })
    registrar_accion(
        actor, 'Actualizar' if editando else 'Crear',
        f"{'Actualizó' if editando else 'Creó'} estado \"{datos['nombre']}\" en categoría {datos['tipo']}", MODULO_ESTADOS,
    )
    return estado


def sembrar_catalogos(forzar: bool = False) -> Dict[str, int]:
    """
    Crea los documentos base (roles, estados, medidas, tipos, parámetros
    y estados del sistema) que no existan.

    Returns:
        {colección: documentos creados}
    """
    conjuntos = {
        **defaults.CATALOGOS,
        colecciones.PARAMETROS: defaults.PARAMETROS,
        colecciones.ESTADOS_SISTEMA: [{**e, 'activo': True} for e in defaults.ESTADOS],
    }
    creados = {}
    for coleccion, documentos in conjuntos.items():
        creados[coleccion] = 0
        for documento in documentos:
            if not forzar and fs.obtener(coleccion, documento['id']) is not None:
                continue
            fs.guardar(coleccion, documento['id'], documento)
            creados[coleccion] += 1
        logger.info(f"{creados[coleccion]} documentos sembrados en {coleccion}")
    return creados
