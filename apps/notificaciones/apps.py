from django.apps import AppConfig
from django.conf import settings
import threading
import logging
import os
import sys

logger = logging.getLogger(__name__)


class NotificacionesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.notificaciones'
    verificacion_iniciada = False  # Variable de clase para evitar múltiples inicios

    def ready(self):
        """
        Se ejecuta cuando Django está listo.
        Inicia la verificación diaria de devoluciones en segundo plano.
        """
        if NotificacionesConfig.verificacion_iniciada:
            return

        if not getattr(settings, 'NOTIFICACIONES_AUTOMATICAS', False):
            return

        # No iniciar durante comandos de mantenimiento ni pruebas
        comandos = ['migrate', 'makemigrations', 'collectstatic', 'createsuperuser',
                    'test', 'verificar_devoluciones', 'crear_catalogos']
        if any(cmd in sys.argv for cmd in comandos) or 'pytest' in sys.modules:
            logger.info("Saltando inicio de notificaciones automáticas (comando de Django)")
            return

        # Solo en el proceso principal del autoreloader o en producción
        if os.environ.get('RUN_MAIN') == 'true' or os.environ.get('RENDER'):
            NotificacionesConfig.verificacion_iniciada = True
            self.iniciar_verificacion()

    def iniciar_verificacion(self):
        """Inicia la verificación periódica en un hilo separado"""
        try:
            from .services import iniciar_verificacion_periodica

            hilo = threading.Thread(
                target=iniciar_verificacion_periodica,
                kwargs={'intervalo_horas': settings.INTERVALO_VERIFICACION_HORAS},
                daemon=True,  # Se cierra cuando Django se cierra
                name='verificacion-devoluciones'
            )
            hilo.start()

            logger.info(f"Notificaciones automáticas iniciadas en hilo: {hilo.name}")

        except Exception as e:
            logger.error(f"Error iniciando notificaciones automáticas: {e}")
