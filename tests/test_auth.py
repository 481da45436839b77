"""
Pruebas de autenticación: verificación de token, middleware y permisos.
"""

import pytest

from services import colecciones
from tests.mocks.clientes import cliente_para


class TestVerifyToken:
    """POST /api/auth/verify-token/"""

    def test_token_valido(self, api_client, admin_user):
        response = api_client.post(
            '/api/auth/verify-token/', {'token': 'token-admin@itcr.ac.cr'}, format='json'
        )

        assert response.status_code == 200
        user = response.json()['user']
        assert user['id'] == admin_user['id']
        assert user['rol'] == 'Administrador'
        assert user['nombre'] == 'Ana Rojas'
        assert user['sistema'] == 'aplabs'

    def test_token_crowdfunding(self, api_client, cf_admin):
        response = api_client.post(
            '/api/auth/verify-token/',
            {'token': 'token-admin@itcr.cr', 'sistema': 'crowdfunding'},
            format='json',
        )

        assert response.status_code == 200
        assert response.json()['user']['admin'] is True

    def test_sin_token(self, api_client):
        response = api_client.post('/api/auth/verify-token/', {}, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'Token no proporcionado'

    def test_sistema_desconocido(self, api_client):
        response = api_client.post('/api/auth/verify-token/', {'token': 'x', 'sistema': 'otro'}, format='json')

        assert response.status_code == 400

    @pytest.mark.parametrize('token, mensaje', [
        ('basura', 'Token inválido'),
        ('expirado', 'Token expirado'),
    ])
    def test_token_rechazado(self, api_client, token, mensaje):
        response = api_client.post('/api/auth/verify-token/', {'token': token}, format='json')

        assert response.status_code == 401
        assert response.json()['error'] == mensaje

    def test_usuario_sin_documento(self, api_client):
        response = api_client.post('/api/auth/verify-token/', {'token': 'token-nadie@itcr.ac.cr'}, format='json')

        assert response.status_code == 404


class TestMiddleware:
    """FirebaseAuthMiddleware sobre rutas protegidas"""

    def test_usuario_actual(self, estudiante_client):
        response = estudiante_client.get('/api/auth/me/')

        assert response.status_code == 200
        assert response.json()['user']['email'] == 'estudiante@estudiantec.cr'

    def test_busca_por_campo_correo(self, store):
        """Documentos antiguos guardan el email en 'correo'"""
        store.sembrar(colecciones.USUARIOS, 'viejo', {'correo': 'viejo@itcr.ac.cr', 'id_rol': '2'})

        response = cliente_para('viejo@itcr.ac.cr').get('/api/auth/me/')

        assert response.status_code == 200
        assert response.json()['user']['rol'] == 'Docente'

    def test_token_invalido_en_ruta_protegida(self):
        response = cliente_para(token='basura').get('/api/laboratorios/')

        assert response.status_code == 401
        assert response.json()['error'] == 'Token inválido'

    def test_sin_token_en_ruta_protegida(self, api_client):
        response = api_client.get('/api/laboratorios/')

        assert response.status_code == 403

    def test_usuario_inactivo_no_pasa(self, store, estudiante_user, estudiante_client):
        store.sembrar(colecciones.USUARIOS, estudiante_user['id'], {**estudiante_user, 'activo': False})

        response = estudiante_client.get('/api/laboratorios/')

        assert response.status_code == 403

    def test_raiz_de_la_api(self, api_client):
        response = api_client.get('/api/')

        assert response.status_code == 200
        assert 'crowdfunding' in response.json()['endpoints']


class TestPermisosPorRol:
    """IsAdmin / IsTecnicoOrAdmin / IsAdminOrReadOnly"""

    def test_estudiante_lee_pero_no_crea_departamentos(self, estudiante_client):
        assert estudiante_client.get('/api/departamentos/').status_code == 200

        response = estudiante_client.post('/api/departamentos/', {'nombre': 'X', 'codigo': 'X'}, format='json')
        assert response.status_code == 403

    def test_tecnico_accede_a_mantenimientos(self, tecnico_client):
        assert tecnico_client.get('/api/mantenimientos/').status_code == 200

    def test_estudiante_no_accede_a_mantenimientos(self, estudiante_client):
        assert estudiante_client.get('/api/mantenimientos/').status_code == 403

    def test_tecnico_no_administra_usuarios(self, tecnico_client):
        assert tecnico_client.get('/api/usuarios/').status_code == 403
