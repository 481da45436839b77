"""
Pruebas de los paneles de inicio por rol.
"""

from datetime import date, datetime, timezone

from apps.dashboard import views
from services import colecciones

URL = '/api/dashboard/'


class TestAdminDashboard:

    def test_resumen(self, store, admin_client, laboratorio, recurso, estudiante_user):
        store.sembrar(colecciones.LABORATORIOS, 'lab2', {'nombre': 'Química', 'activo': False})
        store.sembrar(colecciones.SOLICITUDES_LABS, 's1', {'estado_solicitud': 'pendiente'})
        store.sembrar(colecciones.SOLICITUDES_RECURSOS, 's2', {'estado_solicitud': 'pendiente'})
        store.sembrar(colecciones.SOLICITUDES_RECURSOS, 's3', {'estado_solicitud': 'aprobado'})
        store.sembrar(colecciones.MANTENIMIENTOS, 'm1', {'id_estado': '3'})
        for dia in range(1, 8):
            store.sembrar(colecciones.BITACORA, f'b{dia}', {
                'accion': 'Login', 'timestamp': datetime(2025, 3, dia, tzinfo=timezone.utc),
            })

        data = admin_client.get(f'{URL}admin/').json()

        assert data['total_usuarios'] == 2
        assert data['laboratorios_activos'] == 1
        assert data['total_recursos'] == 1
        assert data['solicitudes_pendientes'] == 2
        assert data['mantenimientos_programados'] == 1
        assert [a['id'] for a in data['actividad_reciente']] == ['b7', 'b6', 'b5', 'b4', 'b3']

    def test_tecnico_no_accede(self, tecnico_client):
        assert tecnico_client.get(f'{URL}admin/').status_code == 403


class TestTecnicoDashboard:

    def test_resumen(self, store, tecnico_client, recurso, monkeypatch):
        monkeypatch.setattr(views, 'hoy', lambda: date(2025, 3, 10))
        store.sembrar(colecciones.MANTENIMIENTOS, 'm1', {'id_estado': '3', 'fecha_programada': '2025-03-10'})
        store.sembrar(colecciones.MANTENIMIENTOS, 'm2', {'id_estado': '3', 'fecha_programada': '2025-03-15'})
        store.sembrar(colecciones.MANTENIMIENTOS, 'm3', {'id_estado': '1', 'fecha_programada': '2025-03-10'})
        store.sembrar(colecciones.RECURSOS, 'rec2', {'nombre': 'Fuente', 'id_estado': '3'})

        data = tecnico_client.get(f'{URL}tecnico/').json()

        assert data['mantenimientos_pendientes'] == 2
        assert [m['id'] for m in data['mantenimientos_hoy']] == ['m1']
        assert data['inventario'] == {'total': 2, 'disponibles': 1, 'en_mantenimiento': 1}

    def test_estudiante_no_accede(self, estudiante_client):
        assert estudiante_client.get(f'{URL}tecnico/').status_code == 403


class TestUsuarioDashboard:

    def test_resumen(self, store, estudiante_client, estudiante_user):
        propio = estudiante_user['id']
        store.sembrar(colecciones.SOLICITUDES_LABS, 's1', {'id_usuario': propio, 'estado_solicitud': 'pendiente'})
        store.sembrar(colecciones.SOLICITUDES_RECURSOS, 's2', {'id_usuario': propio, 'estado_solicitud': 'aprobado'})
        store.sembrar(colecciones.SOLICITUDES_RECURSOS, 's3', {'id_usuario': 'otro', 'estado_solicitud': 'aprobado'})
        store.sembrar(colecciones.MENSAJES, 'msg1', {'destinatario': propio, 'recibido': False})
        store.sembrar(colecciones.NOTIFICACIONES, 'n1', {'id_usuario': propio, 'leida': False})
        store.sembrar(colecciones.NOTIFICACIONES, 'n2', {'id_usuario': propio, 'leida': True})

        data = estudiante_client.get(f'{URL}usuario/').json()

        assert data == {
            'solicitudes': {'total': 2, 'pendiente': 1, 'aprobado': 1, 'rechazado': 0},
            'mensajes_no_leidos': 1,
            'notificaciones_no_leidas': 1,
        }

    def test_requiere_autenticacion(self, api_client):
        assert api_client.get(f'{URL}usuario/').status_code == 403
