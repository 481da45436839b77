"""
Pruebas del CRUD de laboratorios.
"""

from services import colecciones

URL = '/api/laboratorios/'


def nuevo_laboratorio(**cambios):
    datos = {'nombre': 'Lab de Química', 'codigo': 'q-2', 'ubicacion': 'Edificio C', 'capacidad': 25}
    datos.update(cambios)
    return datos


class TestLaboratorios:

    def test_crear(self, store, admin_client):
        response = admin_client.post(URL, nuevo_laboratorio(), format='json')

        assert response.status_code == 201
        documento = store.documento(colecciones.LABORATORIOS, response.json()['id'])
        assert documento['codigo'] == 'Q-2'
        assert documento['estado'] == 'Disponible'

    def test_capacidad_positiva(self, admin_client):
        response = admin_client.post(URL, nuevo_laboratorio(capacidad=0), format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'La capacidad debe ser mayor a 0'

    def test_estado_invalido(self, admin_client):
        response = admin_client.post(URL, nuevo_laboratorio(estado='Cerrado'), format='json')

        assert response.status_code == 400

    def test_detalle_con_encargado_y_departamento(self, store, estudiante_client, tecnico_user):
        store.sembrar(colecciones.DEPARTAMENTOS, 'd1', {'nombre': 'Química'})
        store.sembrar(colecciones.LABORATORIOS, 'lab9', {
            **nuevo_laboratorio(), 'encargado': tecnico_user['id'], 'id_departamento': 'd1',
        })

        data = estudiante_client.get(f'{URL}lab9/').json()

        assert data['encargado_nombre'] == 'Tomás Vargas'
        assert data['departamento_nombre'] == 'Química'
        assert data['activo'] is True

    def test_filtros(self, store, estudiante_client, laboratorio):
        store.sembrar(colecciones.LABORATORIOS, 'lab2', {**nuevo_laboratorio(), 'estado': 'En Mantenimiento'})

        data = estudiante_client.get(URL, {'estado': 'Disponible'}).json()
        assert [lab['id'] for lab in data] == [laboratorio['id']]

        data = estudiante_client.get(URL, {'search': 'edificio c'}).json()
        assert [lab['id'] for lab in data] == ['lab2']

    def test_solo_admin_escribe(self, estudiante_client, laboratorio):
        response = estudiante_client.patch(f"{URL}{laboratorio['id']}/", {'capacidad': 5}, format='json')

        assert response.status_code == 403

    def test_toggle_activo(self, store, admin_client, laboratorio):
        response = admin_client.post(f"{URL}{laboratorio['id']}/toggle_activo/")

        assert response.json()['activo'] is False
        assert store.todos(colecciones.BITACORA)[0]['accion'] == 'Desactivar Laboratorio'
