"""
Pruebas de la mensajería interna de AP-LABS.
"""

from apps.mensajes import services
from services import colecciones

URL = '/api/mensajes/'


def sembrar_mensaje(store, doc_id, remitente, destinatario, asunto='Consulta', dia=1, **extra):
    return store.sembrar(colecciones.MENSAJES, doc_id, {
        'remitente': remitente,
        'destinatario': destinatario,
        'asunto': asunto,
        'contenido': f'Contenido de {asunto}',
        'fecha_envio': f'2025-03-{dia:02d}T10:00:00+00:00',
        'recibido': False,
        'archivado': False,
        'enviado': True,
        **extra,
    })


class TestEnviar:

    def test_envia_y_notifica(self, store, estudiante_client, estudiante_user, tecnico_user):
        response = estudiante_client.post(URL, {
            'destinatario': tecnico_user['id'],
            'asunto': ' Préstamo ',
            'contenido': 'Necesito el osciloscopio',
        }, format='json')

        assert response.status_code == 201
        mensaje = store.documento(colecciones.MENSAJES, response.json()['id'])
        assert mensaje['remitente'] == estudiante_user['id']
        assert mensaje['asunto'] == 'Préstamo'
        assert mensaje['recibido'] is False and mensaje['archivado'] is False

        notificaciones = store.todos(colecciones.NOTIFICACIONES)
        assert len(notificaciones) == 1
        assert notificaciones[0]['id_usuario'] == tecnico_user['id']
        assert notificaciones[0]['tipo'] == 'mensaje'
        assert 'Elena Mora' in notificaciones[0]['mensaje']

    def test_destinatario_inactivo(self, store, estudiante_client, tecnico_user):
        store.sembrar(colecciones.USUARIOS, tecnico_user['id'], {**tecnico_user, 'activo': False})

        response = estudiante_client.post(URL, {
            'destinatario': tecnico_user['id'], 'asunto': 'Hola', 'contenido': '...',
        }, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'El destinatario no existe o está inactivo'

    def test_campos_requeridos(self, estudiante_client, tecnico_user):
        response = estudiante_client.post(URL, {'destinatario': tecnico_user['id'], 'contenido': 'x'}, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'El asunto es requerido'


class TestCarpetas:

    def test_entrada_enviados_archivados(self, store, estudiante_client, estudiante_user, tecnico_user):
        sembrar_mensaje(store, 'm1', tecnico_user['id'], estudiante_user['id'], dia=1)
        sembrar_mensaje(store, 'm2', tecnico_user['id'], estudiante_user['id'], dia=3)
        sembrar_mensaje(store, 'm3', tecnico_user['id'], estudiante_user['id'], archivado=True)
        sembrar_mensaje(store, 'm4', estudiante_user['id'], tecnico_user['id'])

        entrada = estudiante_client.get(URL).json()
        assert [m['id'] for m in entrada] == ['m2', 'm1']
        assert entrada[0]['remitenteNombre'] == 'Tomás Vargas'

        assert [m['id'] for m in estudiante_client.get(URL, {'carpeta': 'enviados'}).json()] == ['m4']
        assert [m['id'] for m in estudiante_client.get(URL, {'carpeta': 'archivados'}).json()] == ['m3']

    def test_carpeta_invalida(self, estudiante_client):
        assert estudiante_client.get(URL, {'carpeta': 'papelera'}).status_code == 400

    def test_busqueda(self, store, estudiante_client, estudiante_user, tecnico_user):
        sembrar_mensaje(store, 'm1', tecnico_user['id'], estudiante_user['id'], asunto='Mantenimiento')
        sembrar_mensaje(store, 'm2', tecnico_user['id'], estudiante_user['id'], asunto='Reserva')

        data = estudiante_client.get(URL, {'q': 'reser'}).json()

        assert [m['id'] for m in data] == ['m2']


class TestDetalleYEstados:

    def test_detalle_marca_leido_para_destinatario(self, store, estudiante_client, estudiante_user, tecnico_user):
        sembrar_mensaje(store, 'm1', tecnico_user['id'], estudiante_user['id'])

        response = estudiante_client.get(f'{URL}m1/')

        assert response.status_code == 200
        assert response.json()['recibido'] is True
        assert store.documento(colecciones.MENSAJES, 'm1')['recibido'] is True

    def test_detalle_ajeno(self, store, estudiante_client, tecnico_user, admin_user):
        sembrar_mensaje(store, 'm1', tecnico_user['id'], admin_user['id'])

        assert estudiante_client.get(f'{URL}m1/').status_code == 403
        assert estudiante_client.get(f'{URL}nada/').status_code == 404

    def test_archivar_y_desarchivar(self, store, estudiante_client, estudiante_user, tecnico_user):
        sembrar_mensaje(store, 'm1', tecnico_user['id'], estudiante_user['id'])

        assert estudiante_client.post(f'{URL}m1/archivar/').json() == {'id': 'm1', 'estado': 'archivado'}
        assert store.documento(colecciones.MENSAJES, 'm1')['archivado'] is True

        estudiante_client.post(f'{URL}m1/desarchivar/')
        assert store.documento(colecciones.MENSAJES, 'm1')['archivado'] is False

    def test_remitente_no_puede_archivar(self, store, estudiante_client, estudiante_user, tecnico_user):
        sembrar_mensaje(store, 'm1', estudiante_user['id'], tecnico_user['id'])

        assert estudiante_client.post(f'{URL}m1/archivar/').status_code == 403

    def test_eliminar(self, store, estudiante_client, estudiante_user, tecnico_user):
        sembrar_mensaje(store, 'm1', estudiante_user['id'], tecnico_user['id'])

        assert estudiante_client.delete(f'{URL}m1/').status_code == 204
        assert store.documento(colecciones.MENSAJES, 'm1') is None

    def test_no_leidos(self, store, estudiante_client, estudiante_user, tecnico_user):
        sembrar_mensaje(store, 'm1', tecnico_user['id'], estudiante_user['id'])
        sembrar_mensaje(store, 'm2', tecnico_user['id'], estudiante_user['id'], recibido=True)

        assert estudiante_client.get(f'{URL}no_leidos/').json() == {'no_leidos': 1}


class TestResponder:

    def test_responde_con_re(self, store, estudiante_client, estudiante_user, tecnico_user):
        sembrar_mensaje(store, 'm1', tecnico_user['id'], estudiante_user['id'], asunto='Horario')

        response = estudiante_client.post(f'{URL}m1/responder/', {'contenido': 'Gracias'}, format='json')

        assert response.status_code == 201
        respuesta = store.documento(colecciones.MENSAJES, response.json()['id'])
        assert respuesta['asunto'] == 'Re: Horario'
        assert respuesta['destinatario'] == tecnico_user['id']

    def test_solo_mensajes_recibidos(self, store, estudiante_client, estudiante_user, tecnico_user):
        sembrar_mensaje(store, 'm1', estudiante_user['id'], tecnico_user['id'])

        response = estudiante_client.post(f'{URL}m1/responder/', {'contenido': 'x'}, format='json')

        assert response.status_code == 403


class TestDestinatarios:

    def test_excluye_actual_e_inactivos(self, store, estudiante_client, admin_user, tecnico_user):
        store.sembrar(colecciones.USUARIOS, 'baja', {'primer_nombre': 'Zoe', 'activo': False})

        data = estudiante_client.get(f'{URL}destinatarios/').json()

        assert [u['nombre'] for u in data] == ['Ana Rojas', 'Tomás Vargas']


class TestUtilidades:

    def test_resumen_contenido(self):
        assert services.resumen_contenido('corto') == 'corto'
        assert services.resumen_contenido('x' * 150) == 'x' * 100 + '...'

    def test_asunto_respuesta(self):
        assert services.asunto_respuesta('Hola') == 'Re: Hola'
        assert services.asunto_respuesta('RE: Hola') == 'RE: Hola'
