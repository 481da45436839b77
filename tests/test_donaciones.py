"""
Pruebas de donaciones: donar, monitoreo e historial del donante.
"""

from services import colecciones


def donar(client, proyecto_id, **datos):
    return client.post(f'/api/crowdfunding/proyectos/{proyecto_id}/donar/', datos, format='json')


class TestDonar:
    """POST /api/crowdfunding/proyectos/{id}/donar/"""

    def test_donacion_exitosa(self, store_cf, cf_donante, cf_creador, cf_donante_client, proyecto, mailoutbox):
        response = donar(cf_donante_client, proyecto['id'], monto=250, comprobante=True)

        assert response.status_code == 201
        assert store_cf.documento(colecciones.USUARIOS, cf_donante['id'])['dinero'] == 750
        assert store_cf.documento(colecciones.PROYECTOS, proyecto['id'])['montoRecaudado'] == 250

        donacion = store_cf.documento(colecciones.DONACIONES, response.json()['id'])
        assert donacion['correoDonador'] == cf_donante['email']
        assert donacion['idDonador'] == cf_donante['id']
        assert donacion['idProyecto'] == proyecto['id']
        assert donacion['montoDonado'] == 250
        assert donacion['nombreDonador'] == 'Diego Donante'
        assert donacion['telefonoDonador'] == '8888-0000'
        assert donacion['fecha']

        asuntos = {m.subject: m for m in mailoutbox}
        assert asuntos['Nueva donación recibida'].to == [cf_creador['email']]
        assert 'Diego Donante' in asuntos['Nueva donación recibida'].body
        assert asuntos['Confirmación de donación'].to == [cf_donante['email']]
        assert proyecto['nombre'] in asuntos['Confirmación de donación'].body

    def test_sin_comprobante_solo_avisa_al_creador(self, cf_donante_client, proyecto, mailoutbox):
        donar(cf_donante_client, proyecto['id'], monto=10)

        assert [m.subject for m in mailoutbox] == ['Nueva donación recibida']

    def test_donaciones_acumulan(self, store_cf, cf_donante, cf_donante_client, proyecto):
        donar(cf_donante_client, proyecto['id'], monto=100)
        donar(cf_donante_client, proyecto['id'], monto=150)

        assert store_cf.documento(colecciones.PROYECTOS, proyecto['id'])['montoRecaudado'] == 250
        assert store_cf.documento(colecciones.USUARIOS, cf_donante['id'])['dinero'] == 750
        assert len(store_cf.todos(colecciones.DONACIONES)) == 2

    def test_dinero_insuficiente(self, store_cf, cf_donante, cf_donante_client, proyecto, mailoutbox):
        response = donar(cf_donante_client, proyecto['id'], monto=1000.01)

        assert response.status_code == 400
        assert response.json()['error'] == 'No tiene suficiente dinero'
        assert store_cf.documento(colecciones.USUARIOS, cf_donante['id'])['dinero'] == 1000
        assert store_cf.todos(colecciones.DONACIONES) == []
        assert mailoutbox == []

    def test_puede_donar_todo_su_dinero(self, store_cf, cf_donante, cf_donante_client, proyecto):
        response = donar(cf_donante_client, proyecto['id'], monto=1000)

        assert response.status_code == 201
        assert store_cf.documento(colecciones.USUARIOS, cf_donante['id'])['dinero'] == 0

    def test_creador_no_puede_donar(self, cf_creador_client, proyecto):
        response = donar(cf_creador_client, proyecto['id'], monto=10)

        assert response.status_code == 403

    def test_monto_debe_ser_positivo(self, cf_donante_client, proyecto):
        response = donar(cf_donante_client, proyecto['id'], monto=0)

        assert response.status_code == 400
        assert response.json()['error'] == 'El monto debe ser mayor a 0'

    def test_proyecto_inexistente(self, cf_donante_client):
        response = donar(cf_donante_client, 'nada', monto=10)

        assert response.status_code == 404


class TestMonitoreo:
    """GET /api/crowdfunding/donaciones/"""

    def test_resuelve_nombre_de_proyecto(self, store_cf, cf_admin_client, proyecto):
        store_cf.sembrar(colecciones.DONACIONES, 'd1', {'idProyecto': proyecto['id'], 'montoDonado': 5, 'fecha': '2025-01-01T10:00:00.000Z'})
        store_cf.sembrar(colecciones.DONACIONES, 'd2', {'idProyecto': 'borrado', 'montoDonado': 7, 'fecha': '2025-02-01T10:00:00.000Z'})

        response = cf_admin_client.get('/api/crowdfunding/donaciones/')

        assert response.status_code == 200
        data = response.json()
        assert [d['id'] for d in data] == ['d2', 'd1']
        assert data[0]['nombreProyecto'] == 'Proyecto no encontrado'
        assert data[1]['nombreProyecto'] == proyecto['nombre']

    def test_solo_admin(self, cf_donante_client):
        response = cf_donante_client.get('/api/crowdfunding/donaciones/')

        assert response.status_code == 403


class TestMisDonaciones:
    """GET /api/crowdfunding/donaciones/mias/"""

    def test_historial_propio(self, cf_donante_client, cf_donante, proyecto):
        donar(cf_donante_client, proyecto['id'], monto=40)
        donar(cf_donante_client, proyecto['id'], monto=60)

        data = cf_donante_client.get('/api/crowdfunding/donaciones/mias/').json()

        assert data['donador']['email'] == cf_donante['email']
        assert data['donador']['dinero'] == 900.0
        assert len(data['donaciones']) == 2
        assert data['total_donado'] == 100.0
        assert all(d['nombreProyecto'] == proyecto['nombre'] for d in data['donaciones'])

    def test_admin_consulta_otro_donante(self, cf_admin_client, cf_donante_client, cf_donante, proyecto):
        donar(cf_donante_client, proyecto['id'], monto=40)

        data = cf_admin_client.get('/api/crowdfunding/donaciones/mias/', {'donador': cf_donante['id']}).json()

        assert data['donador']['id'] == cf_donante['id']
        assert len(data['donaciones']) == 1

    def test_usuario_no_puede_ver_otro_donante(self, store_cf, cf_creador_client, cf_donante, proyecto):
        store_cf.sembrar(colecciones.DONACIONES, 'd1', {'idDonador': cf_donante['id'], 'idProyecto': proyecto['id']})

        data = cf_creador_client.get('/api/crowdfunding/donaciones/mias/', {'donador': cf_donante['id']}).json()

        assert data['donaciones'] == []
