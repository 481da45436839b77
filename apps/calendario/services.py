"""
Servicio de Calendario

Vista mensual de reservas (laboratorios por 'dia', recursos por
'fecha_reserva') y bloqueos de laboratorios o recursos.
"""

import calendar
import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from apps.auth.middleware import nombre_completo
from apps.bitacora.services import registrar_accion
from services import colecciones
from services import firebase_service as fs
from services.errors import NoEncontradoError, ValidacionError
from services.fechas import a_fecha, ahora, hoy

logger = logging.getLogger(__name__)

MODULO = 'Calendario Admin'

ESTADOS_RESERVA = {
    colecciones.RESERVA_PENDIENTE: 'Pendiente',
    colecciones.RESERVA_APROBADA: 'Aprobada',
    colecciones.RESERVA_DEVUELTA: 'Devuelta',
    colecciones.RESERVA_RECHAZADA: 'Rechazada',
}


def rango_mes(mes: Optional[str] = None) -> Tuple[date, date]:
    """Primer y último día de un mes 'YYYY-MM' (por defecto el actual)."""
    if not mes:
        referencia = hoy()
        anio, numero = referencia.year, referencia.month
    else:
        try:
            anio, numero = (int(parte) for parte in mes.split('-'))
            date(anio, numero, 1)
        except (ValueError, TypeError):
            raise ValidacionError('Formato de mes inválido, use YYYY-MM')

    ultimo = calendar.monthrange(anio, numero)[1]
    return date(anio, numero, 1), date(anio, numero, ultimo)


def _nombres(coleccion: str, ids) -> Dict[str, str]:
    nombres = {}
    for doc_id in ids:
        documento = fs.obtener(coleccion, doc_id)
        if documento is None:
            continue
        nombres[doc_id] = nombre_completo(documento) if coleccion == colecciones.USUARIOS else documento.get('nombre', '')
    return nombres


def reservas_del_mes(inicio: date, fin: date, tipo: str = '', estado: str = '') -> List[Dict]:
    fuentes = [
        ('laboratorio', colecciones.RESERVAS_LABS, colecciones.LABORATORIOS, 'id_lab', 'dia', 'Laboratorio'),
        ('recurso', colecciones.RESERVAS_RECURSOS, colecciones.RECURSOS, 'id_recurso', 'fecha_reserva', 'Recurso'),
    ]
    reservas = []

    for tipo_reserva, coleccion, coleccion_item, campo_item, campo_fecha, nombre_defecto in fuentes:
        if tipo and tipo not in ('todas', tipo_reserva):
            continue

        del_mes = []
        for reserva in fs.listar(coleccion):
            fecha = a_fecha(reserva.get(campo_fecha))
            if fecha is not None and inicio <= fecha <= fin:
                del_mes.append((reserva, fecha))

        items = _nombres(coleccion_item, {r.get(campo_item) for r, _ in del_mes if r.get(campo_item)})
        usuarios = _nombres(colecciones.USUARIOS, {r.get('id_usuario') for r, _ in del_mes if r.get('id_usuario')})

        for reserva, fecha in del_mes:
            reservas.append({
                'id': reserva['id'],
                'tipo': tipo_reserva,
                'nombre': items.get(reserva.get(campo_item)) or nombre_defecto,
                'usuario': usuarios.get(reserva.get('id_usuario'), 'Usuario'),
                'fecha': fecha.isoformat(),
                'horarios': reserva.get('horarios', []),
                'estado': ESTADOS_RESERVA.get(reserva.get('estado'), 'Pendiente'),
                'id_item': reserva.get(campo_item, ''),
                'id_usuario': reserva.get('id_usuario', ''),
            })

    if estado and estado != 'todos':
        reservas = [r for r in reservas if r['estado'].lower() == estado.lower()]

    reservas.sort(key=lambda r: r['fecha'])
    return reservas


def listar_bloqueos(activo: Optional[bool] = None) -> List[Dict]:
    bloqueos = [{**b, 'activo': b.get('activo') is not False} for b in fs.listar(colecciones.BLOQUEOS)]
    if activo is not None:
        bloqueos = [b for b in bloqueos if b['activo'] == activo]
    bloqueos.sort(key=lambda b: str(b.get('fecha_inicio', '')))
    return bloqueos


def bloqueos_en_rango(inicio: date, fin: date) -> List[Dict]:
    """Bloqueos activos que se traslapan con [inicio, fin]."""
    resultado = []
    for bloqueo in listar_bloqueos(activo=True):
        desde = a_fecha(bloqueo.get('fecha_inicio'))
        hasta = a_fecha(bloqueo.get('fecha_fin')) or desde
        if desde is not None and desde <= fin and hasta >= inicio:
            resultado.append(bloqueo)
    return resultado


def calendario_mes(mes: Optional[str] = None, tipo: str = '', estado: str = '') -> Dict:
    inicio, fin = rango_mes(mes)
    reservas = reservas_del_mes(inicio, fin, tipo, estado)
    bloqueos = bloqueos_en_rango(inicio, fin)

    return {
        'mes': inicio.strftime('%Y-%m'),
        'fecha_inicio': inicio.isoformat(),
        'fecha_fin': fin.isoformat(),
        'reservas': reservas,
        'bloqueos': bloqueos,
        'resumen': {
            'total_reservas': len(reservas),
            'laboratorios': sum(1 for r in reservas if r['tipo'] == 'laboratorio'),
            'recursos': sum(1 for r in reservas if r['tipo'] == 'recurso'),
            'aprobadas': sum(1 for r in reservas if r['estado'] == 'Aprobada'),
            'pendientes': sum(1 for r in reservas if r['estado'] == 'Pendiente'),
            'bloqueos_activos': len(bloqueos),
        },
    }


def crear_bloqueo(datos: Dict, actor: Dict) -> Dict:
    """
    Crea un bloqueo. Bloquear un laboratorio lo deja En Mantenimiento.
    """
    coleccion = colecciones.LABORATORIOS if datos['tipo'] == 'laboratorio' else colecciones.RECURSOS
    item = fs.obtener(coleccion, datos['id_item'])
    if item is None:
        raise NoEncontradoError(f"{datos['tipo'].capitalize()} no encontrado")

    inicio = datos['fecha_inicio'].isoformat()
    fin = datos['fecha_fin'].isoformat()
    bloqueo = fs.crear(colecciones.BLOQUEOS, {
        'tipo': datos['tipo'],
        'id_item': datos['id_item'],
        'nombre_item': item.get('nombre', ''),
        'fecha_inicio': inicio,
        'fecha_fin': fin,
        'motivo': datos['motivo'],
        'activo': True,
        'creado_por': (actor or {}).get('email') or 'admin',
        'fecha_creacion': ahora(),
    })

    if datos['tipo'] == 'laboratorio':
        fs.actualizar(colecciones.LABORATORIOS, datos['id_item'], {'estado': 'En Mantenimiento'})

    registrar_accion(
        actor, 'Crear Bloqueo',
        f"Bloqueo de {datos['tipo']}: {item.get('nombre')} del {inicio} al {fin}",
        MODULO, recurso_nombre=item.get('nombre'), recurso_id=datos['id_item'],
        observaciones=datos['motivo'],
    )
    return bloqueo


def desactivar_bloqueo(bloqueo_id: str, actor: Dict) -> Dict:
    bloqueo = fs.obtener(colecciones.BLOQUEOS, bloqueo_id)
    if bloqueo is None:
        raise NoEncontradoError('Bloqueo no encontrado')

    fs.actualizar(colecciones.BLOQUEOS, bloqueo_id, {'activo': False})
    registrar_accion(
        actor, 'Desactivar Bloqueo',
        f"Desactivó el bloqueo de {bloqueo.get('tipo')}: {bloqueo.get('nombre_item')}",
        MODULO, recurso_nombre=bloqueo.get('nombre_item'), recurso_id=bloqueo.get('id_item'),
    )
    return {'id': bloqueo_id, 'activo': False}
