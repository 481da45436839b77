"""
Servicio de Mensajería

Mensajes internos entre usuarios de AP-LABS (colección 'mensaje').
Los campos remitente y destinatario guardan ids de usuario.
"""

import logging
from typing import Dict, Iterable, List

from apps.auth.middleware import nombre_completo
from apps.notificaciones.services import crear_notificacion_mensaje
from services import colecciones
from services import firebase_service as fs
from services.errors import NoEncontradoError, PermisoError, ValidacionError
from services.fechas import ahora_iso, clave_orden, formatear_fecha_hora

logger = logging.getLogger(__name__)

LARGO_RESUMEN = 100

CARPETAS = ('entrada', 'enviados', 'archivados')


def resumen_contenido(contenido: str, largo: int = LARGO_RESUMEN) -> str:
    """Primeros caracteres del contenido con puntos suspensivos."""
    contenido = contenido or ''
    if len(contenido) <= largo:
        return contenido
    return contenido[:largo] + '...'


def asunto_respuesta(asunto: str) -> str:
    """Agrega 'Re: ' al asunto si aún no lo tiene."""
    asunto = asunto or ''
    if asunto.lower().startswith('re:'):
        return asunto
    return f'Re: {asunto}'


def enviar_mensaje(remitente: Dict, destinatario_id: str, asunto: str, contenido: str) -> Dict:
    """
    Crea un mensaje y notifica al destinatario.

    Raises:
        ValidacionError: Destinatario inexistente o inactivo
    """
    destinatario = fs.obtener(colecciones.USUARIOS, destinatario_id)
    if destinatario is None or destinatario.get('activo') is False:
        raise ValidacionError('El destinatario no existe o está inactivo')

    mensaje = fs.crear(colecciones.MENSAJES, {
        'remitente': remitente['id'],
        'destinatario': destinatario_id,
        'asunto': asunto.strip(),
        'contenido': contenido.strip(),
        'fecha_envio': ahora_iso(),
        'recibido': False,
        'archivado': False,
        'enviado': True,
    })
    logger.info(f"Mensaje {mensaje['id']} enviado de {remitente['id']} a {destinatario_id}")

    crear_notificacion_mensaje(destinatario_id, remitente.get('nombre', 'Usuario'), mensaje['id'])
    return mensaje


def responder_mensaje(remitente: Dict, mensaje_id: str, contenido: str) -> Dict:
    """Responde al remitente de un mensaje recibido."""
    original = obtener_mensaje(mensaje_id, remitente['id'])
    if original.get('destinatario') != remitente['id']:
        raise PermisoError('Solo puede responder mensajes recibidos')
    return enviar_mensaje(remitente, original['remitente'], asunto_respuesta(original.get('asunto')), contenido)


def usuarios_por_id(ids: Iterable[str]) -> Dict[str, Dict]:
    """Carga los usuarios referenciados, una lectura por id distinto."""
    usuarios = {}
    for usuario_id in set(i for i in ids if i):
        usuario = fs.obtener(colecciones.USUARIOS, usuario_id)
        if usuario:
            usuarios[usuario_id] = usuario
    return usuarios


def decorar(mensajes: List[Dict]) -> List[Dict]:
    """Agrega nombres, emails, fecha formateada y resumen (MensajeDisplay)."""
    usuarios = usuarios_por_id(
        [m.get('remitente') for m in mensajes] + [m.get('destinatario') for m in mensajes]
    )
    resultado = []
    for mensaje in mensajes:
        remitente = usuarios.get(mensaje.get('remitente'))
        destinatario = usuarios.get(mensaje.get('destinatario'))
        resultado.append({
            **mensaje,
            'remitenteNombre': nombre_completo(remitente) if remitente else 'Usuario desconocido',
            'remitenteEmail': (remitente or {}).get('email', ''),
            'remitenteDepartamento': (remitente or {}).get('id_departamento', ''),
            'destinatarioNombre': nombre_completo(destinatario) if destinatario else 'Usuario desconocido',
            'destinatarioEmail': (destinatario or {}).get('email', ''),
            'fechaFormateada': formatear_fecha_hora(mensaje.get('fecha_envio')),
            'resumenContenido': resumen_contenido(mensaje.get('contenido', '')),
        })
    return resultado


def filtrar_mensajes(mensajes: List[Dict], consulta: str) -> List[Dict]:
    """Busca en asunto, contenido, nombre y email del remitente."""
    termino = (consulta or '').strip().lower()
    if not termino:
        return mensajes
    return [
        m for m in mensajes
        if termino in (m.get('asunto') or '').lower()
        or termino in (m.get('contenido') or '').lower()
        or termino in (m.get('remitenteNombre') or '').lower()
        or termino in (m.get('remitenteEmail') or '').lower()
    ]


def listar_carpeta(usuario_id: str, carpeta: str, consulta: str = '') -> List[Dict]:
    """
    Mensajes de una carpeta, más recientes primero.

    - entrada: recibidos y no archivados
    - enviados: enviados por el usuario
    - archivados: recibidos y archivados
    """
    if carpeta == 'enviados':
        filtros = [('remitente', '==', usuario_id), ('enviado', '==', True)]
    elif carpeta == 'archivados':
        filtros = [('destinatario', '==', usuario_id), ('archivado', '==', True)]
    else:
        filtros = [('destinatario', '==', usuario_id), ('archivado', '==', False)]

    mensajes = fs.listar(colecciones.MENSAJES, filtros)
    mensajes.sort(key=lambda m: clave_orden(m.get('fecha_envio')), reverse=True)
    return filtrar_mensajes(decorar(mensajes), consulta)


def contar_no_leidos(usuario_id: str) -> int:
    return fs.contar(colecciones.MENSAJES, [
        ('destinatario', '==', usuario_id),
        ('recibido', '==', False),
    ])


def obtener_mensaje(mensaje_id: str, usuario_id: str) -> Dict:
    """Mensaje visible para el usuario (remitente o destinatario)."""
    mensaje = fs.obtener(colecciones.MENSAJES, mensaje_id)
    if mensaje is None:
        raise NoEncontradoError('Mensaje no encontrado')
    if usuario_id not in (mensaje.get('remitente'), mensaje.get('destinatario')):
        raise PermisoError('No tiene acceso a este mensaje')
    return mensaje


def _actualizar_recibido(mensaje_id: str, usuario_id: str, cambios: Dict) -> None:
    mensaje = obtener_mensaje(mensaje_id, usuario_id)
    if mensaje.get('destinatario') != usuario_id:
        raise PermisoError('Solo el destinatario puede modificar este mensaje')
    fs.actualizar(colecciones.MENSAJES, mensaje_id, cambios)


def marcar_leido(mensaje_id: str, usuario_id: str) -> None:
    _actualizar_recibido(mensaje_id, usuario_id, {'recibido': True})


def archivar(mensaje_id: str, usuario_id: str) -> None:
    _actualizar_recibido(mensaje_id, usuario_id, {'archivado': True})


def desarchivar(mensaje_id: str, usuario_id: str) -> None:
    _actualizar_recibido(mensaje_id, usuario_id, {'archivado': False})


def eliminar_mensaje(mensaje_id: str, usuario_id: str) -> None:
    obtener_mensaje(mensaje_id, usuario_id)
    fs.eliminar(colecciones.MENSAJES, mensaje_id)


def destinatarios_disponibles(usuario_id: str) -> List[Dict]:
    """Usuarios activos, excepto el usuario actual, ordenados por nombre."""
    usuarios = fs.listar(colecciones.USUARIOS, [('activo', '==', True)])
    resultado = [
        {
            'id': u['id'],
            'nombre': nombre_completo(u),
            'email': u.get('email', ''),
            'id_departamento': u.get('id_departamento', ''),
        }
        for u in usuarios if u['id'] != usuario_id
    ]
    resultado.sort(key=lambda u: u['nombre'].lower())
    return resultado
