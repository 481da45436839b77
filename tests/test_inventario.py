"""
Pruebas del inventario de recursos.
"""

from services import colecciones

URL = '/api/inventario/'


def nuevo_recurso(**cambios):
    datos = {'nombre': 'Multímetro', 'codigo_inventario': 'mul-01', 'cantidad': 3, 'id_estado': '1', 'id_medida': 'u'}
    datos.update(cambios)
    return datos


class TestRecursos:

    def test_crear_resuelve_catalogos(self, store, tecnico_client, recurso):
        response = tecnico_client.post(URL, nuevo_recurso(), format='json')

        assert response.status_code == 201
        documento = store.documento(colecciones.RECURSOS, response.json()['id'])
        assert documento['codigo_inventario'] == 'MUL-01'
        assert documento['estado'] == 'Disponible'
        assert documento['unidad'] == 'Unidad'
        assert documento['cantidad_disponible'] == 3
        assert store.todos(colecciones.BITACORA)[0]['accion'] == 'Crear Recurso'

    def test_codigo_duplicado(self, tecnico_client, recurso):
        response = tecnico_client.post(URL, nuevo_recurso(codigo_inventario='osc-001'), format='json')

        assert response.status_code == 409
        assert response.json()['error'] == 'El código de inventario ya existe'

    def test_cantidad_positiva(self, tecnico_client):
        response = tecnico_client.post(URL, nuevo_recurso(cantidad=0), format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'La cantidad debe ser mayor a 0'

    def test_campos_obligatorios(self, tecnico_client):
        response = tecnico_client.post(URL, nuevo_recurso(id_estado=''), format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'Por favor complete los campos obligatorios'

    def test_estudiante_solo_lee(self, estudiante_client, recurso):
        assert estudiante_client.get(URL).status_code == 200
        assert estudiante_client.post(URL, nuevo_recurso(), format='json').status_code == 403

    def test_estado_normalizado_en_listado(self, store, estudiante_client, recurso):
        store.sembrar(colecciones.ESTADOS, '9', {'nombre': 'inactivo'})
        store.sembrar(colecciones.RECURSOS, 'rec2', {'nombre': 'Fuente', 'codigo_inventario': 'FU-1', 'id_estado': '9'})

        data = {r['id']: r for r in estudiante_client.get(URL).json()}

        assert data['rec2']['estado'] == 'Fuera de Servicio'
        assert data['rec1']['estado'] == 'Disponible'

    def test_busqueda(self, store, estudiante_client, recurso):
        store.sembrar(colecciones.RECURSOS, 'rec2', {'nombre': 'Fuente', 'codigo_inventario': 'FU-1', 'id_estado': '1'})

        data = estudiante_client.get(URL, {'search': 'osc'}).json()

        assert [r['id'] for r in data] == ['rec1']

    def test_actualizar_cambia_estado(self, store, tecnico_client, recurso):
        response = tecnico_client.patch(f"{URL}{recurso['id']}/", {'id_estado': '3'}, format='json')

        assert response.status_code == 200
        assert response.json()['estado'] == 'En Mantenimiento'

    def test_cambiar_cantidad_descuenta_reservas_activas(self, store, tecnico_client, recurso):
        store.sembrar(colecciones.RESERVAS_RECURSOS, 'rr1', {'id_recurso': 'rec1', 'cantidad': 2, 'estado': 1})
        store.sembrar(colecciones.RESERVAS_RECURSOS, 'rr2', {'id_recurso': 'rec1', 'cantidad': 4, 'estado': 2})
        store.sembrar(colecciones.RESERVAS_RECURSOS, 'rr3', {'id_recurso': 'otro', 'cantidad': 3, 'estado': 1})

        response = tecnico_client.patch(f"{URL}{recurso['id']}/", {'cantidad': 8}, format='json')

        assert response.status_code == 200
        documento = store.documento(colecciones.RECURSOS, recurso['id'])
        assert documento['cantidad'] == 8
        assert documento['cantidad_disponible'] == 6

    def test_eliminar(self, store, admin_client, recurso):
        assert admin_client.delete(f"{URL}{recurso['id']}/").status_code == 204
        assert store.documento(colecciones.RECURSOS, recurso['id']) is None

    def test_catalogos(self, store, estudiante_client, recurso):
        store.sembrar(colecciones.TIPOS_MANTENIMIENTO, 'p', {'nombre': 'Preventivo'})

        data = estudiante_client.get(f'{URL}catalogos/').json()

        assert [e['nombre'] for e in data['estado']] == ['Disponible', 'En Mantenimiento', 'Reservado']
        assert [t['nombre'] for t in data['tipo_mantenimiento']] == ['Preventivo']
        assert data['tipo_recurso'] == []
