"""
Firebase Service

Este módulo centraliza todas las interacciones con Firebase (Auth y
Firestore) para los dos sistemas que atiende la API:

- 'aplabs': sistema de gestión de laboratorios (app por defecto)
- 'crowdfunding': plataforma de donaciones (app con nombre propio)

Funciones principales:
- initialize_firebase(sistema): Inicializa Firebase Admin SDK
- get_firestore_client(sistema): Cliente de Firestore del sistema
- listar / obtener / buscar_uno / contar: lecturas de colecciones
- crear / guardar / actualizar / eliminar: escrituras de documentos
- verificar_token / crear_usuario_auth / actualizar_email_auth /
  buscar_uid_auth / eliminar_usuario_auth: Firebase Auth
"""

import os
import logging
from typing import Dict, List, Optional, Tuple, Any

import firebase_admin
from firebase_admin import credentials, firestore, auth as firebase_auth
from google.cloud.firestore_v1.base_query import FieldFilter
from django.conf import settings

logger = logging.getLogger(__name__)

APLABS = 'aplabs'
CROWDFUNDING = 'crowdfunding'

# Settings y nombre de app de Firebase por sistema
SISTEMAS = {
    APLABS: {
        'credentials_path': 'FIREBASE_CREDENTIALS_PATH',
        'config': 'FIREBASE_CONFIG',
        'app_name': None,
    },
    CROWDFUNDING: {
        'credentials_path': 'CROWDFUNDING_FIREBASE_CREDENTIALS_PATH',
        'config': 'CROWDFUNDING_FIREBASE_CONFIG',
        'app_name': 'crowdfunding',
    },
}

# Apps de Firebase ya inicializadas, por sistema
_firebase_apps = {}

Filtro = Tuple[str, str, Any]


def initialize_firebase(sistema: str = APLABS) -> bool:
    """
    Inicializa Firebase Admin SDK con las credenciales del sistema.

    Es seguro llamarla múltiples veces: cada sistema se inicializa una
    sola vez y la app queda guardada en caché.

    Args:
        sistema: 'aplabs' o 'crowdfunding'

    Returns:
        bool: True si la inicialización fue exitosa
    """
    if sistema in _firebase_apps:
        return True

    opciones = SISTEMAS[sistema]
    app_name = opciones['app_name']

    try:
        # Intentar usar archivo de credenciales si existe
        creds_path = getattr(settings, opciones['credentials_path'], None)
        cred = None
        if creds_path:
            full_path = os.path.join(settings.BASE_DIR, creds_path)
            if os.path.exists(full_path):
                cred = credentials.Certificate(full_path)
                logger.info(f"Credenciales de {sistema} cargadas desde archivo JSON")

        if cred is None:
            config = getattr(settings, opciones['config'], {})

            if not config.get('project_id'):
                logger.warning(f"Firebase de {sistema} no está configurado")
                return False

            cred = credentials.Certificate({
                "type": "service_account",
                "project_id": config['project_id'],
                "private_key_id": config.get('private_key_id', ''),
                "private_key": config.get('private_key', ''),
                "client_email": config.get('client_email', ''),
                "client_id": config.get('client_id', ''),
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
                "auth_provider_x509_cert_url": "https://www.googleapis.com/oauth2/v1/certs",
            })

        if app_name:
            app = firebase_admin.initialize_app(cred, name=app_name)
        else:
            app = firebase_admin.initialize_app(cred)

        _firebase_apps[sistema] = app
        logger.info(f"Firebase Admin SDK inicializado para {sistema}")
        return True

    except Exception as e:
        logger.error(f"Error al inicializar Firebase ({sistema}): {str(e)}")
        return False


def get_firebase_app(sistema: str = APLABS):
    """Retorna la app de Firebase del sistema, inicializándola si hace falta."""
    if not initialize_firebase(sistema):
        raise RuntimeError(f'Firebase no está configurado para {sistema}')
    return _firebase_apps[sistema]


def get_firestore_client(sistema: str = APLABS):
    """Cliente de Firestore ligado al proyecto del sistema."""
    return firestore.client(app=get_firebase_app(sistema))


def _a_dict(snapshot) -> Dict:
    """Convierte un DocumentSnapshot en dict incluyendo su id."""
    datos = snapshot.to_dict() or {}
    datos['id'] = snapshot.id
    return datos


def _construir_query(coleccion: str, filtros: Optional[List[Filtro]], sistema: str):
    query = get_firestore_client(sistema).collection(coleccion)
    for campo, operador, valor in filtros or []:
        query = query.where(filter=FieldFilter(campo, operador, valor))
    return query


def listar(
    coleccion: str,
    filtros: Optional[List[Filtro]] = None,
    orden: Optional[str] = None,
    descendente: bool = False,
    limite: Optional[int] = None,
    sistema: str = APLABS,
) -> List[Dict]:
    """
    Lista los documentos de una colección.

    Args:
        coleccion: Nombre de la colección
        filtros: Lista de tuplas (campo, operador, valor)
        orden: Campo por el que ordenar
        descendente: Orden descendente si es True
        limite: Máximo de documentos a retornar

    Returns:
        Lista de dicts, cada uno con su 'id'

    Example:
        >>> listar('solicitudes_labs', [('estado_solicitud', '==', 'pendiente')])
    """
    query = _construir_query(coleccion, filtros, sistema)

    if orden:
        direccion = firestore.Query.DESCENDING if descendente else firestore.Query.ASCENDING
        query = query.order_by(orden, direction=direccion)
    if limite:
        query = query.limit(limite)

    documentos = [_a_dict(doc) for doc in query.stream()]
    logger.debug(f"{len(documentos)} documentos leídos de {coleccion}")
    return documentos


def obtener(coleccion: str, doc_id: str, sistema: str = APLABS) -> Optional[Dict]:
    """Obtiene un documento por id. None si no existe."""
    if not doc_id:
        return None

    snapshot = get_firestore_client(sistema).collection(coleccion).document(str(doc_id)).get()
    if not snapshot.exists:
        logger.debug(f"Documento {coleccion}/{doc_id} no existe")
        return None
    return _a_dict(snapshot)


def buscar_uno(coleccion: str, filtros: List[Filtro], sistema: str = APLABS) -> Optional[Dict]:
    """Primer documento que cumple los filtros. None si no hay."""
    resultados = listar(coleccion, filtros, limite=1, sistema=sistema)
    return resultados[0] if resultados else None


def contar(coleccion: str, filtros: Optional[List[Filtro]] = None, sistema: str = APLABS) -> int:
    """Cuenta documentos usando la agregación count() de Firestore."""
    query = _construir_query(coleccion, filtros, sistema)
    resultado = query.count().get()
    return int(resultado[0][0].value)


def crear(coleccion: str, datos: Dict, doc_id: Optional[str] = None, sistema: str = APLABS) -> Dict:
    """
    Crea un documento. Si no se indica doc_id Firestore genera uno.

    Returns:
        Los datos guardados con su 'id'
    """
    ref = get_firestore_client(sistema).collection(coleccion).document(doc_id)
    datos = {k: v for k, v in datos.items() if k != 'id'}
    ref.set(datos)
    logger.info(f"Documento creado en {coleccion}: {ref.id}")
    return {**datos, 'id': ref.id}


def guardar(coleccion: str, doc_id: str, datos: Dict, sistema: str = APLABS) -> Dict:
    """Reemplaza el documento completo (equivalente a setDoc)."""
    ref = get_firestore_client(sistema).collection(coleccion).document(str(doc_id))
    datos = {k: v for k, v in datos.items() if k != 'id'}
    ref.set(datos)
    logger.info(f"Documento reemplazado {coleccion}/{doc_id}")
    return {**datos, 'id': ref.id}


def actualizar(coleccion: str, doc_id: str, cambios: Dict, sistema: str = APLABS) -> bool:
    """
    Actualiza campos de un documento existente.

    Returns:
        bool: False si el documento no existe
    """
    ref = get_firestore_client(sistema).collection(coleccion).document(str(doc_id))
    if not ref.get().exists:
        logger.warning(f"No se puede actualizar {coleccion}/{doc_id}: no existe")
        return False

    ref.update({k: v for k, v in cambios.items() if k != 'id'})
    logger.info(f"Documento actualizado {coleccion}/{doc_id}")
    return True


def eliminar(coleccion: str, doc_id: str, sistema: str = APLABS) -> bool:
    """Elimina un documento. False si no existía."""
    ref = get_firestore_client(sistema).collection(coleccion).document(str(doc_id))
    if not ref.get().exists:
        logger.warning(f"No se puede eliminar {coleccion}/{doc_id}: no existe")
        return False

    ref.delete()
    logger.info(f"Documento eliminado {coleccion}/{doc_id}")
    return True


def incremento(valor: float):
    """Transformación atómica de suma para usar con actualizar()."""
    return firestore.Increment(valor)


def verificar_token(token: str, sistema: str = APLABS) -> Dict:
    """Verifica un ID token contra el proyecto de Firebase del sistema."""
    return firebase_auth.verify_id_token(token, app=get_firebase_app(sistema))


def crear_usuario_auth(email: str, password: str, nombre: str, sistema: str = APLABS):
    """Crea la cuenta de Firebase Auth. Retorna el UserRecord."""
    usuario = firebase_auth.create_user(
        email=email,
        password=password,
        display_name=nombre,
        app=get_firebase_app(sistema),
    )
    logger.info(f"Usuario creado en Firebase Auth ({sistema}): {usuario.uid}")
    return usuario


def buscar_uid_auth(email: str, sistema: str = APLABS) -> str:
    """Uid de la cuenta de Firebase Auth registrada con ese email."""
    return firebase_auth.get_user_by_email(email, app=get_firebase_app(sistema)).uid


def eliminar_usuario_auth(uid: str, sistema: str = APLABS) -> None:
    firebase_auth.delete_user(uid, app=get_firebase_app(sistema))
    logger.info(f"Usuario eliminado de Firebase Auth ({sistema}): {uid}")


def actualizar_email_auth(uid: str, email: str, sistema: str = APLABS) -> None:
    """Cambia el email de inicio de sesión de una cuenta."""
    firebase_auth.update_user(uid, email=email, app=get_firebase_app(sistema))
    logger.info(f"Email actualizado en Firebase Auth ({sistema}): {uid}")
