"""
Servicio de Usuarios de AP-LABS

Alta en Firebase Auth + documento en 'usuarios', edición, activación
y consultas con nombres de rol y departamento resueltos.
"""

import logging
from typing import Dict, List, Optional

from firebase_admin import auth as firebase_auth
from apps.auth.middleware import nombre_completo
from apps.bitacora.services import registrar_accion
from services import catalogos, colecciones
from services import firebase_service as fs
from services.errors import NoEncontradoError, ValidacionError
from services.fechas import ahora_iso

logger = logging.getLogger(__name__)

MODULO = 'Usuarios'


def _decorar(usuario: Dict, roles: Dict[str, str], departamentos: Dict[str, str]) -> Dict:
    id_rol = str(usuario.get('id_rol') or usuario.get('roleId') or '')
    return {
        **usuario,
        'id_rol': id_rol,
        'nombre_completo': nombre_completo(usuario),
        'rol_nombre': catalogos.nombre_rol(id_rol, roles),
        'departamento_nombre': departamentos.get(usuario.get('id_departamento'), 'Sin departamento'),
        'activo': usuario.get('activo', True) is not False,
    }


def listar_usuarios(
    rol: str = '',
    departamento: str = '',
    activo: Optional[bool] = None,
    busqueda: str = '',
) -> List[Dict]:
    """Usuarios con rol y departamento resueltos, filtrados en memoria."""
    roles = {r['id']: r.get('nombre', '') for r in catalogos.roles()}
    departamentos = catalogos.mapa_nombres(colecciones.DEPARTAMENTOS)

    usuarios = [_decorar(u, roles, departamentos) for u in fs.listar(colecciones.USUARIOS)]

    if rol:
        usuarios = [u for u in usuarios if u['id_rol'] == rol]
    if departamento:
        usuarios = [u for u in usuarios if u.get('id_departamento') == departamento]
    if activo is not None:
        usuarios = [u for u in usuarios if u['activo'] == activo]

    termino = (busqueda or '').strip().lower()
    if termino:
        usuarios = [
            u for u in usuarios
            if termino in u['nombre_completo'].lower()
            or termino in str(u.get('email', '')).lower()
            or termino in str(u.get('identificador', '')).lower()
        ]

    usuarios.sort(key=lambda u: u['nombre_completo'].lower())
    return usuarios


def obtener_usuario(usuario_id: str) -> Dict:
    usuario = fs.obtener(colecciones.USUARIOS, usuario_id)
    if usuario is None:
        raise NoEncontradoError('Usuario no encontrado')
    roles = {r['id']: r.get('nombre', '') for r in catalogos.roles()}
    return _decorar(usuario, roles, catalogos.mapa_nombres(colecciones.DEPARTAMENTOS))


def crear_usuario(datos: Dict, actor: Dict) -> Dict:
    """
    Crea la cuenta en Firebase Auth y luego el documento.

    Si falla el documento, se elimina la cuenta recién creada.
    """
    if fs.buscar_uno(colecciones.USUARIOS, [('email', '==', datos['email'])]):
        raise ValidacionError('Este email ya está registrado')

    nombre = ' '.join(p for p in [datos['primer_nombre'], datos['primer_apellido']] if p)

    try:
        cuenta = fs.crear_usuario_auth(datos['email'], datos['password'], nombre)
    except firebase_auth.EmailAlreadyExistsError:
        raise ValidacionError('Este email ya está registrado')
    except ValueError as e:
        # firebase_admin valida localmente formato de email y largo de contraseña
        logger.warning(f"Datos rechazados por Firebase Auth: {str(e)}")
        raise ValidacionError('La contraseña es muy débil o el email es inválido')

    documento = {k: v for k, v in datos.items() if k != 'password'}
    documento['uid'] = cuenta.uid
    documento['fecha_creacion'] = ahora_iso()

    try:
        usuario = fs.crear(colecciones.USUARIOS, documento)
    except Exception:
        try:
            fs.eliminar_usuario_auth(cuenta.uid)
        except Exception as e:
            logger.error(f"No se pudo revertir la cuenta {cuenta.uid}: {str(e)}")
        raise

    registrar_accion(
        actor, 'Crear Usuario', f"Registró al usuario {documento['email']}", MODULO,
        recurso_nombre=nombre, recurso_id=usuario['id'],
    )
    return usuario


def actualizar_usuario(usuario_id: str, cambios: Dict, actor: Dict) -> Dict:
    if not fs.actualizar(colecciones.USUARIOS, usuario_id, cambios):
        raise NoEncontradoError('Usuario no encontrado')
    usuario = obtener_usuario(usuario_id)
    registrar_accion(
        actor, 'Editar Usuario', f"Actualizó al usuario {usuario.get('email', usuario_id)}", MODULO,
        recurso_nombre=usuario['nombre_completo'], recurso_id=usuario_id,
    )
    return usuario


def cambiar_estado(usuario_id: str, actor: Dict) -> Dict:
    """Activa o desactiva un usuario."""
    usuario = fs.obtener(colecciones.USUARIOS, usuario_id)
    if usuario is None:
        raise NoEncontradoError('Usuario no encontrado')

    nuevo_estado = usuario.get('activo', True) is False
    fs.actualizar(colecciones.USUARIOS, usuario_id, {'activo': nuevo_estado})
    registrar_accion(
        actor,
        'Activar Usuario' if nuevo_estado else 'Desactivar Usuario',
        f"Usuario {usuario.get('email', usuario_id)} {'activado' if nuevo_estado else 'desactivado'}",
        MODULO,
        recurso_id=usuario_id,
    )
    return {'id': usuario_id, 'activo': nuevo_estado}


def eliminar_usuario(usuario_id: str, actor: Dict) -> None:
    usuario = fs.obtener(colecciones.USUARIOS, usuario_id)
    if usuario is None:
        raise NoEncontradoError('Usuario no encontrado')
    fs.eliminar(colecciones.USUARIOS, usuario_id)

    # documentos sin uid, como los creados desde la consola, se buscan por email
    try:
        fs.eliminar_usuario_auth(usuario.get('uid') or fs.buscar_uid_auth(usuario.get('email', '')))
    except Exception as e:
        logger.error(f"No se pudo eliminar la cuenta de Auth de {usuario_id}: {str(e)}")

    registrar_accion(
        actor, 'Eliminar Usuario', f"Eliminó al usuario {usuario.get('email', usuario_id)}", MODULO,
        recurso_id=usuario_id,
    )


def listar_tecnicos() -> List[Dict]:
    """Usuarios con rol Técnico, para asignar mantenimientos."""
    tecnicos = fs.listar(colecciones.USUARIOS, [('id_rol', '==', colecciones.ROL_TECNICO)])
    resultado = [
        {'id': t['id'], 'nombre': nombre_completo(t), 'email': t.get('email', '')}
        for t in tecnicos if t.get('activo', True) is not False
    ]
    resultado.sort(key=lambda t: t['nombre'].lower())
    return resultado


def actualizar_perfil(usuario: Dict, cambios: Dict) -> Dict:
    """El usuario edita sus propios datos personales."""
    if not fs.actualizar(colecciones.USUARIOS, usuario['id'], cambios):
        raise NoEncontradoError('Usuario no encontrado')
    registrar_accion(usuario, 'Editar Perfil', 'Actualizó su perfil', 'Perfil', recurso_id=usuario['id'])
    return obtener_usuario(usuario['id'])
