"""
Management command para sembrar los catálogos base de AP-LABS

Uso:
    python manage.py crear_catalogos
    python manage.py crear_catalogos --forzar
"""

from django.core.management.base import BaseCommand, CommandError
from apps.parametros.services import sembrar_catalogos


class Command(BaseCommand):
    help = 'Crea roles, estados, medidas, tipos, parámetros y estados del sistema por defecto'

    def add_arguments(self, parser):
        parser.add_argument(
            '--forzar',
            action='store_true',
            help='Sobrescribe los documentos que ya existen',
        )

    def handle(self, *args, **options):
        self.stdout.write('Sembrando catálogos...')

        try:
            creados = sembrar_catalogos(forzar=options['forzar'])
        except Exception as e:
            raise CommandError(f'Error: {str(e)}')

        for coleccion, cantidad in creados.items():
            self.stdout.write(f'  {coleccion}: {cantidad} documentos')

        self.stdout.write(self.style.SUCCESS(f'Proceso completado: {sum(creados.values())} documentos creados'))
