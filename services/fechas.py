"""
Utilidades de fechas

Los documentos mezclan Timestamps de Firestore, cadenas ISO y fechas
en formato dd/mm/aaaa; estas funciones los normalizan.
"""

from datetime import date, datetime, timezone as dt_timezone
from typing import Optional

from django.utils import timezone


def ahora() -> datetime:
    """Fecha y hora actual con zona UTC."""
    return datetime.now(dt_timezone.utc)


def hoy() -> date:
    return timezone.localdate()


def ahora_iso() -> str:
    """Instante actual como ISO 8601 terminado en Z."""
    instante = ahora()
    return instante.strftime('%Y-%m-%dT%H:%M:%S.') + f"{instante.microsecond // 1000:03d}Z"


def a_datetime(valor) -> Optional[datetime]:
    """
    Convierte Timestamp, datetime, date o texto a datetime.

    Acepta 'YYYY-MM-DD', ISO completo (con o sin Z) y 'dd/mm/YYYY'.
    Retorna None si el valor no es interpretable.
    """
    if valor is None or valor == '':
        return None
    if isinstance(valor, datetime):
        return valor
    if isinstance(valor, date):
        return datetime(valor.year, valor.month, valor.day)
    if isinstance(valor, str):
        texto = valor.strip()
        try:
            return datetime.fromisoformat(texto.replace('Z', '+00:00'))
        except ValueError:
            pass
        for formato in ('%d/%m/%Y', '%d/%m/%Y %H:%M'):
            try:
                return datetime.strptime(texto, formato)
            except ValueError:
                continue
    return None


def a_fecha(valor) -> Optional[date]:
    """Igual que a_datetime pero retorna solo la fecha."""
    if isinstance(valor, date) and not isinstance(valor, datetime):
        return valor
    resultado = a_datetime(valor)
    if resultado is None:
        return None
    if resultado.tzinfo is not None:
        resultado = timezone.localtime(resultado)
    return resultado.date()


def formatear_fecha(valor) -> str:
    """dd/mm/aaaa, o cadena vacía si no hay fecha."""
    fecha = a_fecha(valor)
    return fecha.strftime('%d/%m/%Y') if fecha else ''


def formatear_fecha_hora(valor, por_defecto: str = 'Fecha no disponible') -> str:
    """dd/mm/aaaa HH:MM en hora local."""
    instante = a_datetime(valor)
    if instante is None:
        return por_defecto
    if instante.tzinfo is not None:
        instante = timezone.localtime(instante)
    return instante.strftime('%d/%m/%Y %H:%M')


def en_rango(valor, inicio: Optional[date], fin: Optional[date], incluir_sin_fecha: bool = True) -> bool:
    """Verifica que la fecha del valor esté dentro de [inicio, fin]."""
    fecha = a_fecha(valor)
    if fecha is None:
        return incluir_sin_fecha
    if inicio and fecha < inicio:
        return False
    if fin and fecha > fin:
        return False
    return True


MINIMO = datetime.min.replace(tzinfo=dt_timezone.utc)


def clave_orden(valor) -> datetime:
    """
    Instante comparable para ordenar documentos por fecha.

    Las fechas sin zona se toman en hora local; los valores ausentes o
    no interpretables quedan al final de un orden descendente.
    """
    instante = a_datetime(valor)
    if instante is None:
        return MINIMO
    if instante.tzinfo is None:
        return timezone.make_aware(instante)
    return instante
