"""Lectura de parámetros de query string."""


def bool_param(valor):
    """'true'/'1'/'si' → True, otro texto → False, vacío → None."""
    if valor in (None, ''):
        return None
    return str(valor).lower() in ('true', '1', 'si', 'sí')
