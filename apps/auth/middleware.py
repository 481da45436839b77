"""
Firebase Authentication Middleware

Este middleware intercepta todas las requests y valida el token de Firebase.
Si el token es válido, agrega el usuario al request.

Flujo:
1. Determina el sistema según la ruta (/api/crowdfunding/ o AP-LABS)
2. Extrae el token del header Authorization
3. Valida el token con el proyecto de Firebase del sistema
4. Busca el documento del usuario por email en Firestore
5. Agrega el usuario a request.firebase_user
"""

from django.utils.deprecation import MiddlewareMixin
from django.http import JsonResponse
from firebase_admin import auth as firebase_auth
from services import colecciones
from services.firebase_service import (
    APLABS, CROWDFUNDING, verificar_token, buscar_uno,
)
import logging

logger = logging.getLogger(__name__)


def sistema_de_ruta(path: str) -> str:
    """Sistema (proyecto de Firebase) al que pertenece una ruta."""
    if path.startswith('/api/crowdfunding/'):
        return CROWDFUNDING
    return APLABS


def nombre_completo(usuario: dict) -> str:
    """Une nombres y apellidos omitiendo los vacíos."""
    partes = [
        usuario.get('primer_nombre'),
        usuario.get('segundo_nombre'),
        usuario.get('primer_apellido'),
        usuario.get('segundo_apellido'),
    ]
    nombre = ' '.join(p.strip() for p in partes if p and p.strip())
    return nombre or usuario.get('nombre') or 'Usuario'


def buscar_usuario_por_email(email: str, sistema: str):
    """Documento de usuarios por email (algunos usan el campo 'correo')."""
    usuario = buscar_uno(colecciones.USUARIOS, [('email', '==', email)], sistema=sistema)
    if usuario is None:
        usuario = buscar_uno(colecciones.USUARIOS, [('correo', '==', email)], sistema=sistema)
    return usuario


def construir_usuario(uid: str, email: str, datos: dict, sistema: str) -> dict:
    """Arma el dict que se guarda en request.firebase_user."""
    if sistema == CROWDFUNDING:
        return {
            'uid': uid,
            'id': datos['id'],
            'email': datos.get('email', email),
            'nombre': datos.get('nombre', ''),
            'telefono': datos.get('telefono', ''),
            'admin': bool(datos.get('admin', False)),
            'activo': datos.get('activo', True) is not False,
            'sistema': CROWDFUNDING,
        }

    id_rol = str(datos.get('id_rol', ''))
    return {
        'uid': uid,
        'id': datos['id'],
        'email': datos.get('email', email),
        'nombre': nombre_completo(datos),
        'rol': colecciones.NOMBRES_ROL.get(id_rol, 'Usuario'),
        'id_rol': id_rol,
        'activo': datos.get('activo', True) is not False,
        'sistema': APLABS,
    }


class FirebaseAuthMiddleware(MiddlewareMixin):
    """
    Middleware para autenticación con Firebase.

    Valida el token JWT de Firebase en cada request y carga
    los datos del usuario desde Firestore.
    """

    # Rutas que no requieren autenticación
    EXEMPT_URLS = [
        '/admin/',
        '/api/auth/',
        '/api/crowdfunding/cuentas/registro/',
    ]

    # Raíces de la API, exentas solo como ruta exacta
    EXEMPT_EXACT = ['/', '/api/']

    def process_request(self, request):
        """
        Procesa cada request para validar autenticación.

        Returns:
            None si la autenticación es exitosa o no hay token
            JsonResponse con error si el token es inválido
        """
        request.firebase_user = None

        is_exempt = (
            request.path in self.EXEMPT_EXACT
            or any(request.path.startswith(url) for url in self.EXEMPT_URLS)
        )

        auth_header = request.META.get('HTTP_AUTHORIZATION', '')

        if not auth_header.startswith('Bearer '):
            # Sin token: los permisos de cada vista deciden
            return None

        token = auth_header.split('Bearer ')[1].strip()
        sistema = sistema_de_ruta(request.path)

        try:
            decoded_token = verificar_token(token, sistema)
            uid = decoded_token['uid']
            email = decoded_token.get('email', '')

            user_data = buscar_usuario_por_email(email, sistema) if email else None

            if user_data:
                request.firebase_user = construir_usuario(uid, email, user_data, sistema)
                logger.debug(f"Usuario autenticado: {email} ({sistema})")
                return None

            logger.warning(f"Usuario {email} ({uid}) no encontrado en {sistema}")
            if is_exempt:
                return None
            return JsonResponse({
                'error': 'Usuario no encontrado en el sistema'
            }, status=404)

        except firebase_auth.ExpiredIdTokenError:
            logger.warning("Token de Firebase expirado")
            if is_exempt:
                return None
            return JsonResponse({
                'error': 'Token expirado'
            }, status=401)

        except firebase_auth.InvalidIdTokenError:
            logger.warning("Token de Firebase inválido")
            if is_exempt:
                return None
            return JsonResponse({
                'error': 'Token inválido'
            }, status=401)

        except Exception as e:
            logger.error(f"Error en autenticación: {str(e)}")
            if is_exempt:
                return None
            return JsonResponse({
                'error': 'Error de autenticación'
            }, status=500)
