"""
Management command para verificar devoluciones de recursos manualmente

Uso:
    python manage.py verificar_devoluciones
    python manage.py verificar_devoluciones --fecha 2025-03-10
"""

from datetime import date

from django.core.management.base import BaseCommand, CommandError
from apps.notificaciones.services import verificar_notificaciones_devolucion


class Command(BaseCommand):
    help = 'Envía recordatorios y avisos de devoluciones vencidas de recursos'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fecha',
            help='Fecha de referencia (YYYY-MM-DD). Por defecto hoy.',
        )

    def handle(self, *args, **options):
        hoy = None
        if options.get('fecha'):
            try:
                hoy = date.fromisoformat(options['fecha'])
            except ValueError:
                raise CommandError('La fecha debe tener formato YYYY-MM-DD')

        self.stdout.write('Verificando devoluciones de recursos...')

        try:
            resultado = verificar_notificaciones_devolucion(hoy)
        except Exception as e:
            raise CommandError(f'Error: {str(e)}')

        self.stdout.write(
            self.style.SUCCESS(
                f"Proceso completado: {resultado['recordatorios']} recordatorios, "
                f"{resultado['vencidas']} vencimientos"
            )
        )
