"""
Nombres de colecciones de Firestore y catálogos fijos.

Firestore no tiene esquema, así que los nombres de colección y los
identificadores de estado que comparten los módulos viven aquí.
"""

# AP-LABS
USUARIOS = 'usuarios'
ROLES = 'rol'
DEPARTAMENTOS = 'departamentos'
LABORATORIOS = 'laboratorios'
RECURSOS = 'recurso'
ESTADOS = 'estado'
MEDIDAS = 'medida'
TIPOS_RECURSO = 'tipo_recurso'
TIPOS_MANTENIMIENTO = 'tipo_mantenimiento'
MANTENIMIENTOS = 'mantenimiento'
SOLICITUDES_LABS = 'solicitudes_labs'
SOLICITUDES_RECURSOS = 'solicitudes_recursos'
RESERVAS_LABS = 'reserva_labs'
RESERVAS_RECURSOS = 'reserva_recurso'
BLOQUEOS = 'bloqueos'
NOTIFICACIONES = 'notificaciones'
MENSAJES = 'mensaje'
BITACORA = 'bitacora'
PARAMETROS = 'parametros_globales'
ESTADOS_SISTEMA = 'estados_sistema'

# Crowdfunding
PROYECTOS = 'proyectos'
DONACIONES = 'donaciones'

# Roles de AP-LABS (campo id_rol de usuarios)
ROL_ESTUDIANTE = '1'
ROL_DOCENTE = '2'
ROL_ADMINISTRADOR = '3'
ROL_TECNICO = '4'

NOMBRES_ROL = {
    ROL_ESTUDIANTE: 'Estudiante',
    ROL_DOCENTE: 'Docente',
    ROL_ADMINISTRADOR: 'Administrador',
    ROL_TECNICO: 'Técnico',
}

# Estados de recurso (campo id_estado de recurso)
RECURSO_DISPONIBLE = '1'
RECURSO_RESERVADO = '2'
RECURSO_MANTENIMIENTO = '3'
RECURSO_FUERA_SERVICIO = '4'

NOMBRES_ESTADO_RECURSO = {
    RECURSO_DISPONIBLE: 'Disponible',
    RECURSO_RESERVADO: 'Reservado',
    RECURSO_MANTENIMIENTO: 'En Mantenimiento',
    RECURSO_FUERA_SERVICIO: 'Fuera de Servicio',
}

# Estados de mantenimiento (campo id_estado de mantenimiento)
MANTENIMIENTO_COMPLETADO = '1'
MANTENIMIENTO_PROGRAMADO = '3'

# Estados de solicitud
SOLICITUD_PENDIENTE = 'pendiente'
SOLICITUD_APROBADA = 'aprobado'
SOLICITUD_RECHAZADA = 'rechazado'

# Estados de reserva
RESERVA_PENDIENTE = 0
RESERVA_APROBADA = 1
RESERVA_DEVUELTA = 2
RESERVA_RECHAZADA = 3

# Estados de laboratorio
ESTADOS_LABORATORIO = ['Disponible', 'En Mantenimiento', 'Fuera de Servicio']
