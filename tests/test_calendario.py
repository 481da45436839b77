"""
Pruebas del calendario de reservas y de los bloqueos.
"""

from datetime import date

import pytest

from apps.calendario import services
from services import colecciones
from services.errors import ValidacionError

URL = '/api/calendario/'
URL_BLOQUEOS = '/api/calendario/bloqueos/'


def sembrar_reservas(store, estudiante_user):
    store.sembrar(colecciones.RESERVAS_LABS, 'rl1', {
        'id_lab': 'lab1', 'id_usuario': estudiante_user['id'], 'dia': '2025-03-12',
        'horarios': [{'hora_inicio': '08:00', 'hora_fin': '10:00'}], 'estado': 1,
    })
    store.sembrar(colecciones.RESERVAS_LABS, 'rl2', {
        'id_lab': 'lab1', 'id_usuario': estudiante_user['id'], 'dia': '2025-04-02', 'estado': 1,
    })
    store.sembrar(colecciones.RESERVAS_RECURSOS, 'rr1', {
        'id_recurso': 'rec1', 'id_usuario': estudiante_user['id'], 'fecha_reserva': '2025-03-05', 'estado': 0,
    })


class TestRangoMes:

    def test_mes_explicito(self):
        assert services.rango_mes('2024-02') == (date(2024, 2, 1), date(2024, 2, 29))

    def test_mes_invalido(self):
        with pytest.raises(ValidacionError):
            services.rango_mes('2024-13')


class TestCalendario:

    def test_reservas_del_mes(self, store, estudiante_client, estudiante_user, laboratorio, recurso):
        sembrar_reservas(store, estudiante_user)

        data = estudiante_client.get(URL, {'mes': '2025-03'}).json()

        assert [r['id'] for r in data['reservas']] == ['rr1', 'rl1']
        assert data['reservas'][1]['nombre'] == 'Laboratorio de Redes'
        assert data['reservas'][1]['usuario'] == 'Elena Mora'
        assert data['reservas'][1]['estado'] == 'Aprobada'
        assert data['resumen'] == {
            'total_reservas': 2,
            'laboratorios': 1,
            'recursos': 1,
            'aprobadas': 1,
            'pendientes': 1,
            'bloqueos_activos': 0,
        }

    def test_filtros(self, store, estudiante_client, estudiante_user, laboratorio, recurso):
        sembrar_reservas(store, estudiante_user)

        data = estudiante_client.get(URL, {'mes': '2025-03', 'tipo': 'recurso'}).json()
        assert [r['id'] for r in data['reservas']] == ['rr1']

        data = estudiante_client.get(URL, {'mes': '2025-03', 'estado': 'aprobada'}).json()
        assert [r['id'] for r in data['reservas']] == ['rl1']

    def test_incluye_bloqueos_que_se_traslapan(self, store, estudiante_client):
        store.sembrar(colecciones.BLOQUEOS, 'b1', {
            'tipo': 'laboratorio', 'fecha_inicio': '2025-02-25', 'fecha_fin': '2025-03-02', 'activo': True,
        })
        store.sembrar(colecciones.BLOQUEOS, 'b2', {
            'tipo': 'laboratorio', 'fecha_inicio': '2025-03-10', 'fecha_fin': '2025-03-11', 'activo': False,
        })
        store.sembrar(colecciones.BLOQUEOS, 'b3', {
            'tipo': 'recurso', 'fecha_inicio': '2025-04-10', 'fecha_fin': '2025-04-11', 'activo': True,
        })

        data = estudiante_client.get(URL, {'mes': '2025-03'}).json()

        assert [b['id'] for b in data['bloqueos']] == ['b1']

    def test_mes_invalido(self, estudiante_client):
        response = estudiante_client.get(URL, {'mes': 'marzo'})

        assert response.status_code == 400
        assert response.json()['error'] == 'Formato de mes inválido, use YYYY-MM'


class TestBloqueos:

    def test_crear_bloqueo_de_laboratorio(self, store, admin_client, laboratorio):
        response = admin_client.post(URL_BLOQUEOS, {
            'tipo': 'laboratorio',
            'id_item': 'lab1',
            'fecha_inicio': '2025-03-10',
            'fecha_fin': '2025-03-12',
            'motivo': 'Cableado nuevo',
        }, format='json')

        assert response.status_code == 201
        bloqueo = store.documento(colecciones.BLOQUEOS, response.json()['id'])
        assert bloqueo['nombre_item'] == 'Laboratorio de Redes'
        assert bloqueo['creado_por'] == 'admin@itcr.ac.cr'
        assert bloqueo['activo'] is True
        assert store.documento(colecciones.LABORATORIOS, 'lab1')['estado'] == 'En Mantenimiento'

    def test_item_inexistente(self, admin_client):
        response = admin_client.post(URL_BLOQUEOS, {
            'tipo': 'recurso', 'id_item': 'nada',
            'fecha_inicio': '2025-03-10', 'fecha_fin': '2025-03-12', 'motivo': 'x',
        }, format='json')

        assert response.status_code == 404
        assert response.json()['error'] == 'Recurso no encontrado'

    def test_fechas_invertidas(self, admin_client, laboratorio):
        response = admin_client.post(URL_BLOQUEOS, {
            'tipo': 'laboratorio', 'id_item': 'lab1',
            'fecha_inicio': '2025-03-12', 'fecha_fin': '2025-03-10', 'motivo': 'x',
        }, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'La fecha de fin debe ser posterior a la fecha de inicio'

    def test_estudiante_no_crea(self, estudiante_client, laboratorio):
        response = estudiante_client.post(URL_BLOQUEOS, {
            'tipo': 'laboratorio', 'id_item': 'lab1',
            'fecha_inicio': '2025-03-10', 'fecha_fin': '2025-03-12', 'motivo': 'x',
        }, format='json')

        assert response.status_code == 403

    def test_listar_y_desactivar(self, store, admin_client):
        store.sembrar(colecciones.BLOQUEOS, 'b1', {'tipo': 'recurso', 'fecha_inicio': '2025-03-01', 'activo': True})
        store.sembrar(colecciones.BLOQUEOS, 'b2', {'tipo': 'recurso', 'fecha_inicio': '2025-02-01'})

        assert [b['id'] for b in admin_client.get(URL_BLOQUEOS).json()] == ['b2', 'b1']

        assert admin_client.post(f'{URL_BLOQUEOS}b1/desactivar/').json() == {'id': 'b1', 'activo': False}
        assert [b['id'] for b in admin_client.get(URL_BLOQUEOS, {'activo': 'true'}).json()] == ['b2']
