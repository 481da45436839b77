"""
Vistas de Autenticación

Endpoints para validar tokens de Firebase y obtener información del usuario.
"""

from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework import status
from firebase_admin import auth as firebase_auth
from services.firebase_service import APLABS, SISTEMAS, verificar_token
from .middleware import buscar_usuario_por_email, construir_usuario
from .permissions import usuario_actual
import logging

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([])  # No requiere autenticación previa
def verify_token(request):
    """
    Verifica un token de Firebase y retorna información del usuario.

    Body: {"token": "...", "sistema": "aplabs" | "crowdfunding"}
    """
    token = request.data.get('token')
    sistema = request.data.get('sistema', APLABS)

    if not token:
        return Response({
            'error': 'Token no proporcionado'
        }, status=status.HTTP_400_BAD_REQUEST)

    if sistema not in SISTEMAS:
        return Response({
            'error': f'Sistema desconocido: {sistema}'
        }, status=status.HTTP_400_BAD_REQUEST)

    try:
        decoded_token = verificar_token(token, sistema)
        uid = decoded_token['uid']
        email = decoded_token.get('email', '')

        user_data = buscar_usuario_por_email(email, sistema) if email else None

        if not user_data:
            logger.warning(f"Usuario {email} no encontrado en {sistema}")
            return Response({
                'error': 'Usuario no encontrado en el sistema'
            }, status=status.HTTP_404_NOT_FOUND)

        usuario = construir_usuario(uid, email, user_data, sistema)
        logger.info(f"Token verificado para usuario: {email}")
        return Response({'user': usuario}, status=status.HTTP_200_OK)

    except firebase_auth.ExpiredIdTokenError:
        logger.warning("Token de Firebase expirado")
        return Response({
            'error': 'Token expirado'
        }, status=status.HTTP_401_UNAUTHORIZED)

    except firebase_auth.InvalidIdTokenError:
        logger.warning("Token de Firebase inválido")
        return Response({
            'error': 'Token inválido'
        }, status=status.HTTP_401_UNAUTHORIZED)

    except Exception as e:
        logger.error(f"Error al verificar token: {str(e)}")
        return Response({
            'error': 'Error al verificar token'
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET'])
def get_current_user(request):
    """Retorna el usuario autenticado por el middleware."""
    return Response({'user': usuario_actual(request)})
