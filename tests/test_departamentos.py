"""
Pruebas del CRUD de departamentos.
"""

from services import colecciones

URL = '/api/departamentos/'


class TestDepartamentos:

    def test_crear_guarda_codigo_en_mayusculas(self, store, admin_client):
        response = admin_client.post(URL, {'nombre': 'Electrónica', 'codigo': ' el '}, format='json')

        assert response.status_code == 201
        documento = store.documento(colecciones.DEPARTAMENTOS, response.json()['id'])
        assert documento['codigo'] == 'EL'
        assert documento['activo'] is True
        assert store.todos(colecciones.BITACORA)[0]['modulo'] == 'Departamentos'

    def test_campos_obligatorios(self, admin_client):
        response = admin_client.post(URL, {'nombre': 'Sin código'}, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'Por favor complete todos los campos obligatorios'

    def test_codigo_duplicado(self, store, admin_client):
        store.sembrar(colecciones.DEPARTAMENTOS, 'd1', {'nombre': 'Electrónica', 'codigo': 'EL'})

        response = admin_client.post(URL, {'nombre': 'Otro', 'codigo': 'el'}, format='json')

        assert response.status_code == 409

    def test_actualizar_mismo_codigo(self, store, admin_client):
        store.sembrar(colecciones.DEPARTAMENTOS, 'd1', {'nombre': 'Electrónica', 'codigo': 'EL'})

        response = admin_client.patch(f'{URL}d1/', {'codigo': 'EL', 'jefe': 'Dra. Soto'}, format='json')

        assert response.status_code == 200
        assert response.json()['jefe'] == 'Dra. Soto'

    def test_busqueda_y_filtro_activo(self, store, estudiante_client):
        store.sembrar(colecciones.DEPARTAMENTOS, 'd1', {'nombre': 'Electrónica', 'codigo': 'EL', 'activo': True})
        store.sembrar(colecciones.DEPARTAMENTOS, 'd2', {'nombre': 'Física', 'codigo': 'FI', 'activo': False})

        assert [d['id'] for d in estudiante_client.get(URL, {'search': 'Fís'}).json()] == ['d2']
        assert [d['id'] for d in estudiante_client.get(URL, {'activo': 'true'}).json()] == ['d1']

    def test_toggle_y_eliminar(self, store, admin_client):
        store.sembrar(colecciones.DEPARTAMENTOS, 'd1', {'nombre': 'Electrónica', 'codigo': 'EL'})

        assert admin_client.post(f'{URL}d1/toggle_activo/').json()['activo'] is False
        assert admin_client.delete(f'{URL}d1/').status_code == 204
        assert admin_client.delete(f'{URL}d1/').status_code == 404
