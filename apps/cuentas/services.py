"""
Servicio de Cuentas (Crowdfunding)

Registro en Firebase Auth + documento en 'usuarios' del proyecto de
crowdfunding, perfil propio y administración de cuentas.
"""

import logging
from typing import Dict, List

from firebase_admin import auth as firebase_auth
from services import colecciones
from services import firebase_service as fs
from services.email_service import enviar_correo
from services.errors import NoEncontradoError, PermisoError, ValidacionError
from services.fechas import ahora_iso

logger = logging.getLogger(__name__)

SISTEMA = fs.CROWDFUNDING

MENSAJE_INACTIVO = 'Error al iniciar sesión. Este usuario se encuentra inactivo.'


def _publico(usuario: Dict) -> Dict:
    return {
        **usuario,
        'admin': bool(usuario.get('admin', False)),
        'activo': usuario.get('activo', True) is not False,
        'dinero': float(usuario.get('dinero') or 0),
    }


def registrar(datos: Dict) -> Dict:
    """
    Crea la cuenta de Firebase Auth y luego el documento del usuario.

    Si falla el documento se elimina la cuenta recién creada para no
    dejar un login sin perfil.
    """
    if fs.buscar_uno(colecciones.USUARIOS, [('email', '==', datos['email'])], sistema=SISTEMA):
        raise ValidacionError('Este email ya está registrado')

    try:
        cuenta = fs.crear_usuario_auth(datos['email'], datos['contrasenna'], datos['nombre'], sistema=SISTEMA)
    except firebase_auth.EmailAlreadyExistsError:
        raise ValidacionError('Este email ya está registrado')
    except ValueError as e:
        logger.warning(f"Datos rechazados por Firebase Auth: {str(e)}")
        raise ValidacionError('La contraseña es muy débil o el email es inválido')

    documento = {k: v for k, v in datos.items() if k != 'contrasenna'}
    documento.update({
        'dinero': float(datos['dinero']),
        'activo': True,
        'admin': False,
        'fecha_registro': ahora_iso(),
    })

    try:
        usuario = fs.crear(colecciones.USUARIOS, documento, sistema=SISTEMA)
    except Exception:
        try:
            fs.eliminar_usuario_auth(cuenta.uid, sistema=SISTEMA)
        except Exception as e:
            logger.error(f"No se pudo revertir la cuenta {cuenta.uid}: {str(e)}")
        raise

    enviar_correo(
        usuario['email'],
        'Bienvenido a la plataforma',
        'Tu cuenta ha sido registrada exitosamente en nuestro sistema.',
    )
    logger.info(f"Cuenta de crowdfunding registrada: {usuario['email']}")
    return _publico(usuario)


def sesion(usuario: Dict) -> Dict:
    """Confirma el inicio de sesión y le indica al cliente a dónde ir."""
    if not usuario.get('activo', True):
        raise PermisoError(MENSAJE_INACTIVO)
    return {'usuario': usuario, 'admin': bool(usuario.get('admin'))}


def obtener_perfil(usuario_id: str) -> Dict:
    usuario = fs.obtener(colecciones.USUARIOS, usuario_id, sistema=SISTEMA)
    if usuario is None:
        raise NoEncontradoError('Usuario no encontrado')
    return _publico(usuario)


def actualizar_perfil(usuario: Dict, cambios: Dict) -> Dict:
    """
    Edita nombre, email, teléfono y área de trabajo.

    Un cambio de email también se aplica a la cuenta de Firebase Auth,
    porque el middleware ubica el perfil por ese campo.
    """
    nuevo_email = cambios.get('email')
    if nuevo_email and nuevo_email != usuario.get('email'):
        existente = fs.buscar_uno(colecciones.USUARIOS, [('email', '==', nuevo_email)], sistema=SISTEMA)
        if existente and existente['id'] != usuario['id']:
            raise ValidacionError('Este email ya está registrado')
        try:
            fs.actualizar_email_auth(usuario['uid'], nuevo_email, sistema=SISTEMA)
        except firebase_auth.EmailAlreadyExistsError:
            raise ValidacionError('Este email ya está registrado')

    if cambios and not fs.actualizar(colecciones.USUARIOS, usuario['id'], cambios, sistema=SISTEMA):
        raise NoEncontradoError('Usuario no encontrado')
    return obtener_perfil(usuario['id'])


def listar_usuarios() -> List[Dict]:
    usuarios = [_publico(u) for u in fs.listar(colecciones.USUARIOS, sistema=SISTEMA)]
    usuarios.sort(key=lambda u: str(u.get('nombre', '')).lower())
    return usuarios


def cambiar_estado(usuario_id: str) -> Dict:
    usuario = fs.obtener(colecciones.USUARIOS, usuario_id, sistema=SISTEMA)
    if usuario is None:
        raise NoEncontradoError('Usuario no encontrado')

    nuevo_estado = usuario.get('activo', True) is False
    fs.actualizar(colecciones.USUARIOS, usuario_id, {'activo': nuevo_estado}, sistema=SISTEMA)
    logger.info(f"Usuario {usuario.get('email', usuario_id)} {'activado' if nuevo_estado else 'desactivado'}")
    return {'id': usuario_id, 'activo': nuevo_estado}
