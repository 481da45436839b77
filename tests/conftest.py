"""
Campus - Configuración y fixtures de pruebas

Firestore y Firebase Auth se reemplazan por dobles en memoria: un
token 'token-<email>' se verifica como el usuario con ese email.
"""

import types

import pytest
from firebase_admin import auth as firebase_auth
from services import colecciones
from services import firebase_service as fs
from tests.mocks.clientes import PREFIJO_TOKEN, cliente_para
from tests.mocks.fake_firestore import FakeFirestore


class FakeAuth:
    """Cuentas de Firebase Auth registradas durante la prueba."""

    def __init__(self):
        self.cuentas = {}

    def verify_id_token(self, token, app=None, **kwargs):
        if token == 'expirado':
            raise firebase_auth.ExpiredIdTokenError('Token expirado', None)
        if not token.startswith(PREFIJO_TOKEN):
            raise firebase_auth.InvalidIdTokenError('Token inválido')
        email = token[len(PREFIJO_TOKEN):]
        return {'uid': f'uid-{email}', 'email': email}

    def create_user(self, email=None, password=None, display_name=None, app=None, **kwargs):
        if email in self.cuentas.values():
            raise firebase_auth.EmailAlreadyExistsError('El email ya existe', None, None)
        if password is not None and len(password) < 6:
            raise ValueError('Invalid password string. Password must be a string at least 6 characters long.')
        uid = f'uid-{email}'
        self.cuentas[uid] = email
        return types.SimpleNamespace(uid=uid, email=email, display_name=display_name)

    def update_user(self, uid, email=None, app=None, **kwargs):
        self.cuentas[uid] = email

    def get_user_by_email(self, email, app=None):
        for uid, registrado in self.cuentas.items():
            if registrado == email:
                return types.SimpleNamespace(uid=uid, email=email)
        raise firebase_auth.UserNotFoundError(f'No existe una cuenta para {email}')

    def delete_user(self, uid, app=None):
        if uid not in self.cuentas:
            raise firebase_auth.UserNotFoundError(f'No existe la cuenta {uid}')
        del self.cuentas[uid]


@pytest.fixture(autouse=True)
def firestore_falso(monkeypatch):
    """Un Firestore en memoria por sistema, nuevo en cada prueba."""
    clientes = {fs.APLABS: FakeFirestore(), fs.CROWDFUNDING: FakeFirestore()}
    monkeypatch.setattr(fs, 'get_firebase_app', lambda sistema=fs.APLABS: object())
    monkeypatch.setattr(fs, 'get_firestore_client', lambda sistema=fs.APLABS: clientes[sistema])
    return clientes


@pytest.fixture(autouse=True)
def auth_falso(monkeypatch):
    falso = FakeAuth()
    monkeypatch.setattr(firebase_auth, 'verify_id_token', falso.verify_id_token)
    monkeypatch.setattr(firebase_auth, 'create_user', falso.create_user)
    monkeypatch.setattr(firebase_auth, 'update_user', falso.update_user)
    monkeypatch.setattr(firebase_auth, 'delete_user', falso.delete_user)
    monkeypatch.setattr(firebase_auth, 'get_user_by_email', falso.get_user_by_email)
    return falso


@pytest.fixture
def store(firestore_falso):
    """Firestore de AP-LABS."""
    return firestore_falso[fs.APLABS]


@pytest.fixture
def store_cf(firestore_falso):
    """Firestore de Crowdfunding."""
    return firestore_falso[fs.CROWDFUNDING]


@pytest.fixture
def api_client():
    """Cliente sin token."""
    return cliente_para()


# AP-LABS

def _usuario_aplabs(store, doc_id, email, id_rol, nombre, apellido, **extra):
    return store.sembrar(colecciones.USUARIOS, doc_id, {
        'email': email,
        'primer_nombre': nombre,
        'segundo_nombre': '',
        'primer_apellido': apellido,
        'segundo_apellido': '',
        'id_rol': id_rol,
        'activo': True,
        **extra,
    })


@pytest.fixture
def admin_user(store):
    return _usuario_aplabs(store, 'admin1', 'admin@itcr.ac.cr', colecciones.ROL_ADMINISTRADOR, 'Ana', 'Rojas')


@pytest.fixture
def tecnico_user(store):
    return _usuario_aplabs(store, 'tec1', 'tecnico@itcr.ac.cr', colecciones.ROL_TECNICO, 'Tomás', 'Vargas')


@pytest.fixture
def estudiante_user(store):
    return _usuario_aplabs(store, 'est1', 'estudiante@estudiantec.cr', colecciones.ROL_ESTUDIANTE, 'Elena', 'Mora')


@pytest.fixture
def admin_client(admin_user):
    return cliente_para(admin_user['email'])


@pytest.fixture
def tecnico_client(tecnico_user):
    return cliente_para(tecnico_user['email'])


@pytest.fixture
def estudiante_client(estudiante_user):
    return cliente_para(estudiante_user['email'])


@pytest.fixture
def laboratorio(store):
    return store.sembrar(colecciones.LABORATORIOS, 'lab1', {
        'nombre': 'Laboratorio de Redes',
        'codigo': 'LAB-01',
        'ubicacion': 'Edificio B',
        'capacidad': 20,
        'estado': 'Disponible',
        'activo': True,
    })


@pytest.fixture
def recurso(store):
    store.sembrar(colecciones.ESTADOS, '1', {'nombre': 'Disponible'})
    store.sembrar(colecciones.ESTADOS, '2', {'nombre': 'Reservado'})
    store.sembrar(colecciones.ESTADOS, '3', {'nombre': 'En Mantenimiento'})
    store.sembrar(colecciones.MEDIDAS, 'u', {'nombre': 'Unidad'})
    return store.sembrar(colecciones.RECURSOS, 'rec1', {
        'nombre': 'Osciloscopio',
        'codigo_inventario': 'OSC-001',
        'id_estado': '1',
        'estado': 'Disponible',
        'cantidad': 5,
        'cantidad_disponible': 5,
        'id_medida': 'u',
    })


# Crowdfunding

def _usuario_cf(store_cf, doc_id, email, nombre, dinero=0, admin=False, activo=True):
    return store_cf.sembrar(colecciones.USUARIOS, doc_id, {
        'nombre': nombre,
        'email': email,
        'cedula': '101110111',
        'telefono': '8888-0000',
        'areaDeTrabajo': 'Computación',
        'dinero': dinero,
        'admin': admin,
        'activo': activo,
    })


@pytest.fixture
def cf_admin(store_cf):
    return _usuario_cf(store_cf, 'cfadmin', 'admin@itcr.cr', 'Admin Plataforma', admin=True)


@pytest.fixture
def cf_creador(store_cf):
    return _usuario_cf(store_cf, 'creador1', 'creadora@estudiantec.cr', 'Carla Creadora', dinero=200)


@pytest.fixture
def cf_donante(store_cf):
    return _usuario_cf(store_cf, 'donante1', 'donante@estudiantec.cr', 'Diego Donante', dinero=1000)


@pytest.fixture
def cf_admin_client(cf_admin):
    return cliente_para(cf_admin['email'])


@pytest.fixture
def cf_creador_client(cf_creador):
    return cliente_para(cf_creador['email'])


@pytest.fixture
def cf_donante_client(cf_donante):
    return cliente_para(cf_donante['email'])


@pytest.fixture
def proyecto(store_cf, cf_creador):
    return store_cf.sembrar(colecciones.PROYECTOS, 'proy1', {
        'nombre': 'Robot reciclador',
        'descripcion': 'Clasifica residuos del campus',
        'categoria': 'Tecnología',
        'objetivo': 5000.0,
        'fechaLimite': '2099-12-31',
        'idCreador': cf_creador['id'],
        'montoRecaudado': 0,
    })
