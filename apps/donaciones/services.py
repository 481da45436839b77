"""
Servicio de Donaciones (Crowdfunding)

Una donación descuenta el dinero del donante, suma al monto recaudado
del proyecto y deja un documento en 'donaciones'. Ambos saldos se
modifican con Increment de Firestore para no pisar cambios
concurrentes.
"""

import logging
from typing import Dict, List

from services import colecciones
from services import firebase_service as fs
from services.email_service import enviar_correo
from services.errors import NoEncontradoError, PermisoError, ValidacionError
from services.fechas import ahora_iso

logger = logging.getLogger(__name__)

SISTEMA = fs.CROWDFUNDING

SIN_PROYECTO = 'Proyecto no encontrado'


def donar(proyecto_id: str, monto: float, comprobante: bool, usuario: Dict) -> Dict:
    proyecto = fs.obtener(colecciones.PROYECTOS, proyecto_id, sistema=SISTEMA)
    if proyecto is None:
        raise NoEncontradoError(SIN_PROYECTO)
    if proyecto.get('idCreador') == usuario['id']:
        raise PermisoError('No puede donar a su propio proyecto')

    donante = fs.obtener(colecciones.USUARIOS, usuario['id'], sistema=SISTEMA)
    if donante is None:
        raise NoEncontradoError('Usuario no encontrado')
    if monto > float(donante.get('dinero') or 0):
        raise ValidacionError('No tiene suficiente dinero')

    fs.actualizar(colecciones.USUARIOS, donante['id'], {'dinero': fs.incremento(-monto)}, sistema=SISTEMA)
    fs.actualizar(colecciones.PROYECTOS, proyecto_id, {'montoRecaudado': fs.incremento(monto)}, sistema=SISTEMA)

    donacion = fs.crear(colecciones.DONACIONES, {
        'correoDonador': donante.get('email', usuario['email']),
        'idDonador': donante['id'],
        'idProyecto': proyecto_id,
        'montoDonado': monto,
        'nombreDonador': donante.get('nombre', ''),
        'telefonoDonador': donante.get('telefono', ''),
        'fecha': ahora_iso(),
    }, sistema=SISTEMA)
    logger.info(f"Donación de {monto} de {donacion['correoDonador']} al proyecto {proyecto_id}")

    creador = fs.obtener(colecciones.USUARIOS, proyecto.get('idCreador'), sistema=SISTEMA)
    if creador:
        enviar_correo(
            creador.get('email'),
            'Nueva donación recibida',
            f"Has recibido una donación de {donacion['nombreDonador']} por un monto de {monto}.",
        )
    if comprobante:
        enviar_correo(
            donacion['correoDonador'],
            'Confirmación de donación',
            f"Gracias por tu donación de {monto} al proyecto {proyecto.get('nombre', '')}.",
        )
    return donacion


def _con_proyecto(donaciones: List[Dict]) -> List[Dict]:
    nombres = {}
    for proyecto_id in {d.get('idProyecto') for d in donaciones}:
        proyecto = fs.obtener(colecciones.PROYECTOS, proyecto_id, sistema=SISTEMA)
        nombres[proyecto_id] = proyecto.get('nombre', SIN_PROYECTO) if proyecto else SIN_PROYECTO
    return [{**d, 'nombreProyecto': nombres[d.get('idProyecto')]} for d in donaciones]


def listar_donaciones() -> List[Dict]:
    """Todas las donaciones, para el monitoreo del administrador."""
    donaciones = _con_proyecto(fs.listar(colecciones.DONACIONES, sistema=SISTEMA))
    donaciones.sort(key=lambda d: str(d.get('fecha', '')), reverse=True)
    return donaciones


def donaciones_de(donador_id: str) -> Dict:
    donador = fs.obtener(colecciones.USUARIOS, donador_id, sistema=SISTEMA)
    if donador is None:
        raise NoEncontradoError('Usuario no encontrado')

    donaciones = _con_proyecto(
        fs.listar(colecciones.DONACIONES, [('idDonador', '==', donador_id)], sistema=SISTEMA)
    )
    donaciones.sort(key=lambda d: str(d.get('fecha', '')), reverse=True)
    return {
        'donador': {
            'id': donador['id'],
            'nombre': donador.get('nombre', ''),
            'email': donador.get('email', ''),
            'telefono': donador.get('telefono', ''),
            'dinero': float(donador.get('dinero') or 0),
        },
        'donaciones': donaciones,
        'total_donado': sum(float(d.get('montoDonado') or 0) for d in donaciones),
    }
