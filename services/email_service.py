"""
Email Service

Envío de correos transaccionales (bienvenida, donaciones, ediciones).
Un fallo al enviar nunca interrumpe la operación que lo originó:
se registra en el log y la función retorna False.
"""

import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def enviar_correo(destinatario: str, asunto: str, mensaje: str) -> bool:
    """
    Envía un correo de texto plano.

    Args:
        destinatario: Dirección de correo
        asunto: Asunto del mensaje
        mensaje: Cuerpo del mensaje

    Returns:
        bool: True si el backend aceptó el correo
    """
    if not destinatario:
        logger.warning(f"Correo '{asunto}' sin destinatario, no se envía")
        return False

    try:
        send_mail(
            subject=asunto,
            message=mensaje,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[destinatario],
            fail_silently=False,
        )
        logger.info(f"Correo '{asunto}' enviado a {destinatario}")
        return True
    except Exception as e:
        logger.error(f"Error al enviar correo a {destinatario}: {str(e)}")
        return False
