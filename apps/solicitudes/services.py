"""
Servicio de Solicitudes

Solicitudes de laboratorios (colección 'solicitudes_labs') y de recursos
(colección 'solicitudes_recursos').

Lado del usuario:
- crear_solicitud_laboratorio() / crear_solicitud_recurso()
- listar_mis_solicitudes(), cancelar_solicitud(), devolver()

Lado del administrador:
- listar_solicitudes_gestion(): vista unificada con prioridad
- aprobar_solicitud() / rechazar_solicitud(): crean la reserva y notifican
"""

import logging
from typing import Dict, List, Optional, Tuple

from apps.auth.middleware import nombre_completo
from apps.bitacora.services import registrar_accion
from apps.notificaciones.services import crear_notificacion_solicitud
from services import catalogos, colecciones
from services import firebase_service as fs
from services.errors import ConflictoError, NoEncontradoError, PermisoError, ValidacionError
from services.fechas import a_datetime, a_fecha, ahora, ahora_iso, formatear_fecha, hoy

logger = logging.getLogger(__name__)

LABORATORIO = 'LABORATORIO'
RECURSO = 'RECURSO'

# tipo → (colección de solicitudes, colección de reservas, campo que enlaza la reserva)
COLECCIONES = {
    LABORATORIO: (colecciones.SOLICITUDES_LABS, colecciones.RESERVAS_LABS, 'id_solicitud_lab'),
    RECURSO: (colecciones.SOLICITUDES_RECURSOS, colecciones.RESERVAS_RECURSOS, 'id_solicitud_recurso'),
}

PRIORIDADES = ['Alta', 'Media', 'Baja']


def calcular_prioridad(tipo: str, dia) -> str:
    """
    Laboratorios: Alta si faltan 1 día o menos, Media si faltan 3 o menos,
    Baja en otro caso. Los recursos siempre tienen prioridad Media.
    """
    if tipo == RECURSO:
        return 'Media'
    fecha = a_fecha(dia)
    if fecha is None:
        return 'Baja'
    dias = (fecha - hoy()).days
    if dias <= 1:
        return 'Alta'
    if dias <= 3:
        return 'Media'
    return 'Baja'


def _buscar_solicitud(solicitud_id: str) -> Tuple[str, Dict]:
    """Busca la solicitud en ambas colecciones. Retorna (tipo, documento)."""
    for tipo, (coleccion, _, _) in COLECCIONES.items():
        solicitud = fs.obtener(coleccion, solicitud_id)
        if solicitud is not None:
            return tipo, solicitud
    raise NoEncontradoError('Solicitud no encontrada')


def _reserva_de(tipo: str, solicitud_id: str) -> Optional[Dict]:
    _, coleccion_reservas, campo = COLECCIONES[tipo]
    return fs.buscar_uno(coleccion_reservas, [(campo, '==', solicitud_id)])


def _nombre_objetivo(tipo: str, solicitud: Dict) -> str:
    if tipo == LABORATORIO:
        laboratorio = fs.obtener(colecciones.LABORATORIOS, solicitud.get('id_lab'))
        return (laboratorio or {}).get('nombre') or 'Laboratorio desconocido'
    recurso = fs.obtener(colecciones.RECURSOS, solicitud.get('id_recurso'))
    return (recurso or {}).get('nombre') or 'Recurso desconocido'


# Lado del usuario

def crear_solicitud_laboratorio(usuario: Dict, datos: Dict) -> Dict:
    laboratorio = fs.obtener(colecciones.LABORATORIOS, datos['id_lab'])
    if laboratorio is None:
        raise NoEncontradoError('Laboratorio no encontrado')

    capacidad = laboratorio.get('capacidad')
    if capacidad and datos['participantes'] > int(capacidad):
        raise ValidacionError(
            f'El número de participantes excede la capacidad del laboratorio ({capacidad})'
        )

    solicitud = fs.crear(colecciones.SOLICITUDES_LABS, {
        'id_usuario': usuario['id'],
        'id_lab': datos['id_lab'],
        'dia': datos['dia'].isoformat(),
        'fecha_solicitud': ahora(),
        'horarios': [dict(h) for h in datos['horarios']],
        'motivo': datos['motivo'],
        'participantes': datos['participantes'],
        'recursos': list(datos.get('recursos', [])),
        'estado_solicitud': colecciones.SOLICITUD_PENDIENTE,
    })
    registrar_accion(
        usuario, 'Crear Solicitud', f"Solicitud de laboratorio: {laboratorio.get('nombre')}",
        'Solicitudes', recurso_nombre=laboratorio.get('nombre'), recurso_id=datos['id_lab'],
    )
    return solicitud


def crear_solicitud_recurso(usuario: Dict, datos: Dict) -> Dict:
    recurso = fs.obtener(colecciones.RECURSOS, datos['id_recurso'])
    if recurso is None:
        raise NoEncontradoError('Recurso no encontrado')

    disponible = recurso.get('cantidad_disponible', recurso.get('cantidad'))
    if disponible is not None and datos['cantidad'] > int(disponible):
        unidad = f" {recurso['unidad']}" if recurso.get('unidad') else ''
        raise ValidacionError(f'La cantidad solicitada excede la disponibilidad ({disponible}{unidad})')

    fecha_devolucion = datos.get('fecha_devolucion')
    solicitud = fs.crear(colecciones.SOLICITUDES_RECURSOS, {
        'id_usuario': usuario['id'],
        'id_recurso': datos['id_recurso'],
        'fecha_solicitud': ahora(),
        'fecha_reserva': datos['fecha_reserva'].isoformat(),
        'fecha_devolucion': fecha_devolucion.isoformat() if fecha_devolucion else '',
        'motivo': datos['motivo'],
        'cantidad': datos['cantidad'],
        'id_medida': datos.get('id_medida') or recurso.get('id_medida', ''),
        'estado_solicitud': colecciones.SOLICITUD_PENDIENTE,
    })
    registrar_accion(
        usuario, 'Crear Solicitud', f"Solicitud de recurso: {recurso.get('nombre')}",
        'Solicitudes', recurso_nombre=recurso.get('nombre'),
        recurso_codigo=recurso.get('codigo_inventario'), recurso_id=datos['id_recurso'],
    )
    return solicitud


def _mi_solicitud(tipo: str, solicitud: Dict) -> Dict:
    reserva = _reserva_de(tipo, solicitud['id'])
    estado = solicitud.get('estado_solicitud') or colecciones.SOLICITUD_PENDIENTE
    motivo_rechazo = None
    if reserva and estado == colecciones.SOLICITUD_RECHAZADA:
        motivo_rechazo = reserva.get('comentario') or 'No se especificó motivo'

    fecha_solicitud = a_datetime(solicitud.get('fecha_solicitud'))
    return {
        'id': solicitud['id'],
        'tipo': tipo.lower(),
        'nombre': _nombre_objetivo(tipo, solicitud),
        'fecha_solicitud': fecha_solicitud.isoformat() if fecha_solicitud else '',
        'fecha_inicio': solicitud.get('dia') if tipo == LABORATORIO else solicitud.get('fecha_reserva'),
        'fecha_fin': None if tipo == LABORATORIO else solicitud.get('fecha_devolucion'),
        'horarios': solicitud.get('horarios', []),
        'cantidad': solicitud.get('cantidad'),
        'motivo': solicitud.get('motivo', ''),
        'estado': estado,
        'motivo_rechazo': motivo_rechazo,
        'devuelto': bool(reserva) and reserva.get('estado') == colecciones.RESERVA_DEVUELTA,
    }


def listar_mis_solicitudes(usuario_id: str) -> List[Dict]:
    solicitudes = []
    for tipo, (coleccion, _, _) in COLECCIONES.items():
        for solicitud in fs.listar(coleccion, [('id_usuario', '==', usuario_id)]):
            solicitudes.append(_mi_solicitud(tipo, solicitud))

    solicitudes.sort(key=lambda s: s['fecha_solicitud'], reverse=True)
    return solicitudes


def _solicitud_propia(solicitud_id: str, usuario: Dict) -> Tuple[str, Dict]:
    tipo, solicitud = _buscar_solicitud(solicitud_id)
    if solicitud.get('id_usuario') != usuario['id']:
        raise PermisoError('No tiene permiso para modificar esta solicitud')
    return tipo, solicitud


def cancelar_solicitud(solicitud_id: str, usuario: Dict) -> None:
    """Cancela y elimina una solicitud pendiente propia."""
    tipo, solicitud = _solicitud_propia(solicitud_id, usuario)
    if solicitud.get('estado_solicitud', colecciones.SOLICITUD_PENDIENTE) != colecciones.SOLICITUD_PENDIENTE:
        raise ConflictoError('Solo se pueden cancelar solicitudes pendientes')

    nombre = _nombre_objetivo(tipo, solicitud)
    registrar_accion(
        usuario, 'Cancelación',
        f"Canceló y eliminó la solicitud de {tipo.lower()}: {nombre}",
        'Mis Solicitudes',
    )
    fs.eliminar(COLECCIONES[tipo][0], solicitud_id)


def devolver(solicitud_id: str, usuario: Dict) -> Dict:
    """
    Registra la devolución de un laboratorio o recurso aprobado.

    La reserva pasa a estado 2 y el laboratorio o recurso vuelve a
    estar disponible.
    """
    tipo, solicitud = _solicitud_propia(solicitud_id, usuario)
    if solicitud.get('estado_solicitud') != colecciones.SOLICITUD_APROBADA:
        raise ConflictoError('Solo se pueden devolver solicitudes aprobadas')

    reserva = _reserva_de(tipo, solicitud_id)
    if reserva is None:
        raise NoEncontradoError('No se encontró la reserva de esta solicitud')
    if reserva.get('estado') == colecciones.RESERVA_DEVUELTA:
        raise ConflictoError(f'Este {tipo.lower()} ya fue devuelto')

    coleccion_reservas = COLECCIONES[tipo][1]
    fs.actualizar(coleccion_reservas, reserva['id'], {
        'estado': colecciones.RESERVA_DEVUELTA,
        'fecha_devolucion_real': ahora_iso(),
    })

    nombre = _nombre_objetivo(tipo, solicitud)
    if tipo == LABORATORIO:
        if reserva.get('id_lab'):
            fs.actualizar(colecciones.LABORATORIOS, reserva['id_lab'], {'estado': 'Disponible'})
    elif reserva.get('id_recurso'):
        disponible = catalogos.buscar_estado('disponible')
        fs.actualizar(colecciones.RECURSOS, reserva['id_recurso'], {
            'id_estado': disponible.get('id', colecciones.RECURSO_DISPONIBLE),
            'estado': colecciones.NOMBRES_ESTADO_RECURSO[colecciones.RECURSO_DISPONIBLE],
        })

    registrar_accion(
        usuario, 'Devolución', f"Devolvió el {tipo.lower()}: {nombre}", 'Mis Solicitudes',
        recurso_nombre=nombre,
    )
    return {'id': solicitud_id, 'devuelto': True}


# Lado del administrador

def _gestion(tipo: str, solicitud: Dict, roles: Dict[str, str]) -> Dict:
    """Construye una SolicitudGestion a partir del documento original."""
    usuario = fs.obtener(colecciones.USUARIOS, solicitud['id_usuario'])
    tipo_usuario = roles.get(str(usuario.get('id_rol'))) if usuario else None

    fecha_solicitud = a_datetime(solicitud.get('fecha_solicitud'))
    gestion = {
        'id': solicitud['id'],
        'tipo': tipo,
        'nombreUsuario': nombre_completo(usuario) if usuario else 'Usuario desconocido',
        'emailUsuario': (usuario or {}).get('email', ''),
        'tipoUsuario': tipo_usuario or 'Usuario',
        'fechaSolicitud': fecha_solicitud.isoformat() if fecha_solicitud else '',
        'prioridad': calcular_prioridad(tipo, solicitud.get('dia')),
        'estado': solicitud.get('estado_solicitud', colecciones.SOLICITUD_PENDIENTE),
        'datosOriginales': solicitud,
    }

    if tipo == LABORATORIO:
        laboratorio = fs.obtener(colecciones.LABORATORIOS, solicitud['id_lab'])
        horarios = ', '.join(f"{h.get('hora_inicio')}-{h.get('hora_fin')}" for h in solicitud.get('horarios') or [])
        recursos = solicitud.get('recursos') or []
        gestion.update({
            'nombreRecursoLab': (laboratorio or {}).get('nombre') or 'Lab desconocido',
            'detalles': {
                'dia': solicitud.get('dia', ''),
                'horarios': horarios or 'N/A',
                'participantes': str(solicitud.get('participantes') or 0),
                'motivo': solicitud.get('motivo', ''),
                'recursos': f'{len(recursos)} recursos' if recursos else 'Ninguno',
            },
        })
    else:
        recurso = fs.obtener(colecciones.RECURSOS, solicitud['id_recurso'])
        tipo_recurso = fs.obtener(colecciones.TIPOS_RECURSO, (recurso or {}).get('id_tipo_recurso'))
        medida = fs.obtener(colecciones.MEDIDAS, solicitud.get('id_medida'))
        gestion.update({
            'tipoRecurso': (tipo_recurso or {}).get('nombre', ''),
            'nombreRecursoLab': (recurso or {}).get('nombre') or 'Recurso desconocido',
            'detalles': {
                'cantidad': f"{solicitud.get('cantidad')} {(medida or {}).get('nombre', '')}".strip(),
                'fecha_reserva': solicitud.get('fecha_reserva') or 'No especificada',
                'fecha_devolucion': solicitud.get('fecha_devolucion') or 'No especificada',
                'motivo': solicitud.get('motivo', ''),
            },
        })
    return gestion


def listar_solicitudes_gestion(
    busqueda: str = '',
    tipo: str = '',
    estado: str = colecciones.SOLICITUD_PENDIENTE,
    prioridad: str = '',
) -> List[Dict]:
    """
    Lista unificada de solicitudes para el administrador.

    Las solicitudes sin usuario o sin laboratorio/recurso se omiten.
    estado='todos' desactiva el filtro de estado.
    """
    roles = {r['id']: r.get('nombre', '') for r in catalogos.roles()}
    campos_objetivo = {LABORATORIO: 'id_lab', RECURSO: 'id_recurso'}
    solicitudes = []

    for tipo_solicitud, (coleccion, _, _) in COLECCIONES.items():
        if tipo and tipo.upper() != tipo_solicitud:
            continue
        for solicitud in fs.listar(coleccion):
            if not solicitud.get('id_usuario') or not solicitud.get(campos_objetivo[tipo_solicitud]):
                logger.warning(f"Solicitud {solicitud['id']} sin usuario o sin objetivo, se omite")
                continue
            try:
                solicitudes.append(_gestion(tipo_solicitud, solicitud, roles))
            except Exception as e:
                logger.error(f"Error procesando solicitud {solicitud['id']}: {str(e)}")

    if estado and estado != 'todos':
        solicitudes = [s for s in solicitudes if s['estado'] == estado]
    if prioridad and prioridad != 'todos':
        solicitudes = [s for s in solicitudes if s['prioridad'] == prioridad]

    termino = (busqueda or '').strip().lower()
    if termino:
        solicitudes = [
            s for s in solicitudes
            if termino in s['nombreUsuario'].lower()
            or termino in s['nombreRecursoLab'].lower()
            or termino in s['emailUsuario'].lower()
        ]

    solicitudes.sort(key=lambda s: s['fechaSolicitud'], reverse=True)
    return solicitudes


def _pendiente(solicitud_id: str) -> Tuple[str, Dict]:
    tipo, solicitud = _buscar_solicitud(solicitud_id)
    if solicitud.get('estado_solicitud', colecciones.SOLICITUD_PENDIENTE) != colecciones.SOLICITUD_PENDIENTE:
        raise ConflictoError('La solicitud ya fue procesada')
    return tipo, solicitud


def _crear_reserva(tipo: str, solicitud: Dict, comentario: str, estado: int) -> Dict:
    _, coleccion_reservas, campo = COLECCIONES[tipo]
    if tipo == LABORATORIO:
        datos = {
            'id_lab': solicitud.get('id_lab'),
            'dia': solicitud.get('dia'),
            'horarios': solicitud.get('horarios', []),
            'participantes': solicitud.get('participantes'),
            'recursos': solicitud.get('recursos', []),
        }
    else:
        datos = {
            'id_recurso': solicitud.get('id_recurso'),
            'cantidad': solicitud.get('cantidad'),
            'id_medida': solicitud.get('id_medida', ''),
            'fecha_reserva': solicitud.get('fecha_reserva', ''),
            'fecha_devolucion': solicitud.get('fecha_devolucion', ''),
        }
    return fs.crear(coleccion_reservas, {
        campo: solicitud['id'],
        'id_usuario': solicitud.get('id_usuario'),
        **datos,
        'motivo': solicitud.get('motivo', ''),
        'comentario': comentario,
        'estado': estado,
        'fecha_accion': formatear_fecha(hoy()),
        'fecha_creacion': ahora(),
    })


def _texto_notificacion(tipo: str, solicitud: Dict, nombre: str) -> Tuple[str, Dict]:
    if tipo == LABORATORIO:
        texto = f"Tu solicitud del laboratorio {nombre} para el día {formatear_fecha(solicitud.get('dia'))}"
        datos = {'id_solicitud': solicitud['id'], 'laboratorio': nombre, 'fecha': solicitud.get('dia')}
    else:
        texto = (
            f"Tu solicitud del recurso {nombre} para el período "
            f"{formatear_fecha(solicitud.get('fecha_reserva'))} - {formatear_fecha(solicitud.get('fecha_devolucion'))}"
        )
        datos = {
            'id_solicitud': solicitud['id'],
            'recurso': nombre,
            'fecha_inicio': solicitud.get('fecha_reserva'),
            'fecha_fin': solicitud.get('fecha_devolucion'),
        }
    return texto, datos


def aprobar_solicitud(solicitud_id: str, actor: Dict) -> Dict:
    tipo, solicitud = _pendiente(solicitud_id)
    coleccion = COLECCIONES[tipo][0]

    reserva = _crear_reserva(tipo, solicitud, 'Aceptada', colecciones.RESERVA_APROBADA)
    fs.actualizar(coleccion, solicitud_id, {'estado_solicitud': colecciones.SOLICITUD_APROBADA})

    if tipo == RECURSO:
        reservado = catalogos.buscar_estado('reservado', 'en reserva')
        fs.actualizar(colecciones.RECURSOS, solicitud['id_recurso'], {
            'id_estado': reservado.get('id', colecciones.RECURSO_RESERVADO),
            'estado': reservado.get('nombre', colecciones.NOMBRES_ESTADO_RECURSO[colecciones.RECURSO_RESERVADO]),
        })

    nombre = _nombre_objetivo(tipo, solicitud)
    texto, datos = _texto_notificacion(tipo, solicitud, nombre)
    crear_notificacion_solicitud(solicitud['id_usuario'], True, f'{texto} ha sido aprobada.', datos)

    registrar_accion(
        actor, 'Aprobar Solicitud', f"Aprobó la solicitud de {tipo.lower()}: {nombre}", 'Solicitudes',
        recurso_nombre=nombre, recurso_id=solicitud_id,
    )
    return {'id': solicitud_id, 'estado': colecciones.SOLICITUD_APROBADA, 'id_reserva': reserva['id']}


def rechazar_solicitud(solicitud_id: str, motivo: str, actor: Dict) -> Dict:
    motivo = (motivo or '').strip()
    if not motivo:
        raise ValidacionError('Debe proporcionar un motivo para el rechazo')

    tipo, solicitud = _pendiente(solicitud_id)
    coleccion = COLECCIONES[tipo][0]

    reserva = _crear_reserva(tipo, solicitud, motivo, colecciones.RESERVA_RECHAZADA)
    fs.actualizar(coleccion, solicitud_id, {'estado_solicitud': colecciones.SOLICITUD_RECHAZADA})

    nombre = _nombre_objetivo(tipo, solicitud)
    texto, datos = _texto_notificacion(tipo, solicitud, nombre)
    crear_notificacion_solicitud(
        solicitud['id_usuario'], False, f'{texto} ha sido rechazada. Motivo: {motivo}',
        {**datos, 'motivo_rechazo': motivo},
    )

    registrar_accion(
        actor, 'Rechazar Solicitud', f"Rechazó la solicitud de {tipo.lower()}: {nombre}", 'Solicitudes',
        recurso_nombre=nombre, recurso_id=solicitud_id, observaciones=motivo,
    )
    return {'id': solicitud_id, 'estado': colecciones.SOLICITUD_RECHAZADA, 'id_reserva': reserva['id']}
