"""
Pruebas del ciclo de mantenimientos: programar y registrar.
"""

from datetime import timedelta

import pytest

from services import colecciones
from services.fechas import hoy

URL = '/api/mantenimientos/'


@pytest.fixture
def programado(store, recurso, tecnico_user):
    store.sembrar(colecciones.TIPOS_MANTENIMIENTO, 'prev', {'nombre': 'Preventivo'})
    return store.sembrar(colecciones.MANTENIMIENTOS, 'm1', {
        'id_recurso': recurso['id'],
        'id_tipo_mantenimiento': 'prev',
        'fecha_programada': hoy().isoformat(),
        'fecha_realizada': '',
        'id_tecnico': tecnico_user['id'],
        'id_estado': colecciones.MANTENIMIENTO_PROGRAMADO,
    })


class TestProgramar:
    """POST /api/mantenimientos/"""

    def test_programar(self, store, admin_client, recurso, tecnico_user):
        fecha = hoy() + timedelta(days=3)
        response = admin_client.post(URL, {
            'id_recurso': recurso['id'],
            'id_tipo_mantenimiento': 'prev',
            'fecha_programada': fecha.isoformat(),
            'id_tecnico': tecnico_user['id'],
        }, format='json')

        assert response.status_code == 201
        mantenimiento = store.documento(colecciones.MANTENIMIENTOS, response.json()['id'])
        assert mantenimiento['id_estado'] == colecciones.MANTENIMIENTO_PROGRAMADO
        assert mantenimiento['fecha_realizada'] == ''
        assert mantenimiento['fecha_programada'] == fecha.isoformat()

        documento_recurso = store.documento(colecciones.RECURSOS, recurso['id'])
        assert documento_recurso['id_estado'] == colecciones.RECURSO_MANTENIMIENTO
        assert documento_recurso['estado'] == 'En Mantenimiento'

        notificaciones = store.todos(colecciones.NOTIFICACIONES)
        assert len(notificaciones) == 1
        assert notificaciones[0]['id_usuario'] == tecnico_user['id']
        assert notificaciones[0]['tipo'] == 'mantenimiento_programado'

    def test_fecha_pasada(self, admin_client, recurso, tecnico_user):
        response = admin_client.post(URL, {
            'id_recurso': recurso['id'],
            'id_tipo_mantenimiento': 'prev',
            'fecha_programada': (hoy() - timedelta(days=1)).isoformat(),
            'id_tecnico': tecnico_user['id'],
        }, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'La fecha programada debe ser hoy o una fecha futura'

    def test_falta_tecnico(self, admin_client, recurso):
        response = admin_client.post(URL, {
            'id_recurso': recurso['id'],
            'id_tipo_mantenimiento': 'prev',
            'fecha_programada': hoy().isoformat(),
        }, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'Debe seleccionar un técnico responsable'

    def test_recurso_inexistente(self, admin_client, tecnico_user):
        response = admin_client.post(URL, {
            'id_recurso': 'nada',
            'id_tipo_mantenimiento': 'prev',
            'fecha_programada': hoy().isoformat(),
            'id_tecnico': tecnico_user['id'],
        }, format='json')

        assert response.status_code == 404


class TestRegistrar:
    """POST /api/mantenimientos/{id}/registrar/"""

    def test_registrar(self, store, tecnico_client, programado, recurso):
        response = tecnico_client.post(f"{URL}{programado['id']}/registrar/", {
            'fecha_realizada': hoy().isoformat(),
            'detalle': '  Limpieza y calibración  ',
            'repuestos_usados': 'Fusible',
        }, format='json')

        assert response.status_code == 200
        data = response.json()
        assert data['estadoNombre'] == 'Completado'
        assert data['detalle'] == 'Limpieza y calibración'
        assert data['nombreTecnico'] == 'Tomás Vargas'
        assert data['tipoMantenimiento'] == 'Preventivo'

        documento_recurso = store.documento(colecciones.RECURSOS, recurso['id'])
        assert documento_recurso['estado'] == 'Disponible'
        assert documento_recurso['fecha_ultimo_mantenimiento'] == hoy().isoformat()
        assert store.todos(colecciones.NOTIFICACIONES)[0]['tipo'] == 'mantenimiento_completado'

    def test_fecha_futura(self, tecnico_client, programado):
        response = tecnico_client.post(f"{URL}{programado['id']}/registrar/", {
            'fecha_realizada': (hoy() + timedelta(days=1)).isoformat(),
            'detalle': 'Limpieza',
        }, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'La fecha de realización no puede ser una fecha futura'

    def test_detalle_obligatorio(self, tecnico_client, programado):
        response = tecnico_client.post(f"{URL}{programado['id']}/registrar/", {
            'fecha_realizada': hoy().isoformat(),
            'detalle': '',
        }, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'Debe proporcionar detalles del mantenimiento realizado'

    def test_solo_programados(self, store, tecnico_client, programado):
        store.sembrar(colecciones.MANTENIMIENTOS, programado['id'], {
            **programado, 'id_estado': colecciones.MANTENIMIENTO_COMPLETADO,
        })

        response = tecnico_client.post(f"{URL}{programado['id']}/registrar/", {
            'fecha_realizada': hoy().isoformat(),
            'detalle': 'Otra vez',
        }, format='json')

        assert response.status_code == 409


class TestListar:

    def test_filtro_por_estado_y_tecnico(self, store, tecnico_client, programado, tecnico_user):
        store.sembrar(colecciones.MANTENIMIENTOS, 'm2', {
            'id_recurso': 'rec1', 'id_tecnico': 'otro', 'id_estado': colecciones.MANTENIMIENTO_COMPLETADO,
            'fecha_programada': '2024-01-01', 'fecha_realizada': '2024-01-02',
        })

        data = tecnico_client.get(URL, {'estado': colecciones.MANTENIMIENTO_PROGRAMADO}).json()
        assert [m['id'] for m in data] == ['m1']

        data = tecnico_client.get(URL, {'tecnico': 'otro'}).json()
        assert [m['id'] for m in data] == ['m2']
        assert data[0]['nombreTecnico'] == 'Sin asignar'

    def test_orden_descendente(self, store, tecnico_client, programado):
        store.sembrar(colecciones.MANTENIMIENTOS, 'm2', {
            'id_recurso': 'rec1', 'id_estado': colecciones.MANTENIMIENTO_COMPLETADO,
            'fecha_programada': '2024-01-01', 'fecha_realizada': '2024-01-02',
        })

        data = tecnico_client.get(URL).json()

        assert [m['id'] for m in data] == ['m1', 'm2']
