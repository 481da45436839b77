"""
Errores de la capa de servicios

Las vistas traducen estas excepciones a respuestas JSON
{'error': mensaje} con el código HTTP de cada clase.
"""

from rest_framework import status


class ServicioError(Exception):
    """Error base de las operaciones de negocio."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, mensaje):
        super().__init__(mensaje)
        self.mensaje = mensaje


class ValidacionError(ServicioError):
    status_code = status.HTTP_400_BAD_REQUEST


class PermisoError(ServicioError):
    status_code = status.HTTP_403_FORBIDDEN


class NoEncontradoError(ServicioError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictoError(ServicioError):
    status_code = status.HTTP_409_CONFLICT


def primer_error(errores) -> str:
    """
    Extrae el primer mensaje legible de serializer.errors.

    Los formularios del cliente muestran un único mensaje a la vez.
    """
    if isinstance(errores, dict):
        for valor in errores.values():
            return primer_error(valor)
    if isinstance(errores, (list, tuple)) and errores:
        return primer_error(errores[0])
    return str(errores)
