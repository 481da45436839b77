"""Clientes de API autenticados con tokens de prueba."""

from rest_framework.test import APIClient

# Un token 'token-<email>' se verifica como el usuario con ese email
PREFIJO_TOKEN = 'token-'


def cliente_para(email=None, token=None):
    client = APIClient()
    if email:
        token = f'{PREFIJO_TOKEN}{email}'
    if token:
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    return client
