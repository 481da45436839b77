"""
Pruebas de parámetros globales, estados del sistema y siembra de catálogos.
"""

import pytest
from django.core.management import call_command

from apps.parametros import defaults, services
from services import colecciones
from services.errors import ValidacionError

URL = '/api/parametros/'
URL_ESTADOS = '/api/parametros/estados/'


class TestParametros:

    def test_solo_administradores(self, estudiante_client):
        assert estudiante_client.get(URL).status_code == 403

    def test_completa_con_valores_por_defecto(self, store, admin_client):
        store.sembrar(colecciones.PARAMETROS, 'reservas_duracion_maxima', {'valor': 4})

        data = admin_client.get(URL).json()

        assert len(data) == len(defaults.PARAMETROS)
        duracion = next(p for p in data if p['id'] == 'reservas_duracion_maxima')
        assert duracion['valor'] == 4
        assert duracion['nombre'] == 'Duración Máxima de Reserva'

    def test_filtro_por_categoria(self, admin_client):
        data = admin_client.get(URL, {'categoria': 'politicas'}).json()

        assert {p['categoria'] for p in data} == {'politicas'}
        assert len(data) == 3

    def test_actualizar_numero(self, store, admin_client):
        response = admin_client.patch(f'{URL}reservas_duracion_maxima/', {'valor': '12'}, format='json')

        assert response.status_code == 200
        assert response.json()['valor'] == 12
        guardado = store.documento(colecciones.PARAMETROS, 'reservas_duracion_maxima')
        assert guardado['valor'] == 12
        assert guardado['unidad'] == 'horas'

        entrada = store.todos(colecciones.BITACORA)[0]
        assert entrada['modulo'] == 'Parámetros Globales'

    def test_fuera_de_rango(self, admin_client):
        response = admin_client.patch(f'{URL}reservas_duracion_maxima/', {'valor': 30}, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'El valor debe estar entre 1 y 24'

    def test_booleano(self, admin_client):
        response = admin_client.patch(f'{URL}notif_sms_activo/', {'valor': 'sí'}, format='json')

        assert response.json()['valor'] is True

    def test_inexistente(self, admin_client):
        assert admin_client.patch(f'{URL}nada/', {'valor': 1}, format='json').status_code == 404


class TestConvertirValor:

    def test_numero_invalido(self):
        with pytest.raises(ValidacionError):
            services.convertir_valor({'tipo': 'numero'}, 'abc')
        with pytest.raises(ValidacionError):
            services.convertir_valor({'tipo': 'numero'}, True)

    def test_decimales_y_texto(self):
        assert services.convertir_valor({'tipo': 'numero'}, '2.5') == 2.5
        assert services.convertir_valor({'tipo': 'texto'}, 15) == '15'
        assert services.convertir_valor({'tipo': 'texto'}, None) == ''


class TestEstadosSistema:

    def test_lista_por_tipo(self, admin_client):
        data = admin_client.get(URL_ESTADOS, {'tipo': 'mantenimientos'}).json()

        assert [e['nombre'] for e in data] == ['Programado', 'En Proceso', 'Completado']

    def test_crear_estado(self, store, admin_client):
        response = admin_client.post(URL_ESTADOS, {
            'nombre': 'Prestado',
            'descripcion': 'Equipo fuera del laboratorio',
            'tipo': 'equipos',
        }, format='json')

        assert response.status_code == 201
        estado = response.json()
        assert estado['id'].startswith('equipos_')
        assert estado['color'] == defaults.COLOR_DEFECTO
        assert store.documento(colecciones.ESTADOS_SISTEMA, estado['id'])['activo'] is True

    def test_editar_estado_por_defecto(self, store, admin_client):
        response = admin_client.put(f'{URL_ESTADOS}eq_en_uso/', {
            'nombre': 'Prestado', 'descripcion': 'En uso', 'color': '#000000', 'tipo': 'equipos',
        }, format='json')

        assert response.status_code == 200
        assert store.documento(colecciones.ESTADOS_SISTEMA, 'eq_en_uso')['nombre'] == 'Prestado'

    def test_color_invalido(self, admin_client):
        response = admin_client.post(URL_ESTADOS, {
            'nombre': 'X', 'descripcion': 'Y', 'color': 'rojo',
        }, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'Color inválido, use formato #RRGGBB'

    def test_editar_inexistente(self, admin_client):
        response = admin_client.put(f'{URL_ESTADOS}nada/', {'nombre': 'X', 'descripcion': 'Y'}, format='json')

        assert response.status_code == 404


class TestCrearCatalogos:

    def test_siembra_una_sola_vez(self, store, capsys):
        store.sembrar(colecciones.ROLES, '1', {'nombre': 'Alumno'})

        call_command('crear_catalogos')

        assert store.documento(colecciones.ROLES, '1') == {'nombre': 'Alumno'}
        assert len(store.todos(colecciones.ROLES)) == 4
        assert len(store.todos(colecciones.PARAMETROS)) == len(defaults.PARAMETROS)
        assert 'Proceso completado' in capsys.readouterr().out

        creados = services.sembrar_catalogos()
        assert sum(creados.values()) == 0

    def test_forzar_sobrescribe(self, store):
        store.sembrar(colecciones.ROLES, '1', {'nombre': 'Alumno'})

        services.sembrar_catalogos(forzar=True)

        assert store.documento(colecciones.ROLES, '1')['nombre'] == 'Estudiante'
