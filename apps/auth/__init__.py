"""
Módulo de Autenticación

Valida los ID tokens de Firebase Auth de ambos sistemas (AP-LABS y
crowdfunding) y define los permisos por rol.
"""
