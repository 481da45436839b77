"""
Valores por defecto de parámetros, estados y catálogos.

Se usan cuando la colección aún no tiene el documento y para sembrar la
base con el comando crear_catalogos.
"""

from services import colecciones

PARAMETROS = [
    {
        'id': 'reservas_duracion_maxima',
        'nombre': 'Duración Máxima de Reserva',
        'descripcion': 'Tiempo máximo que puede durar una reserva de laboratorio',
        'valor': 8, 'tipo': 'numero', 'categoria': 'reservas',
        'min': 1, 'max': 24, 'unidad': 'horas', 'activo': True,
    },
    {
        'id': 'reservas_antelacion_minima',
        'nombre': 'Antelación Mínima',
        'descripcion': 'Tiempo mínimo de anticipación para hacer una reserva',
        'valor': 2, 'tipo': 'numero', 'categoria': 'reservas',
        'min': 0, 'max': 168, 'unidad': 'horas', 'activo': True,
    },
    {
        'id': 'reservas_simultaneas_max',
        'nombre': 'Reservas Simultáneas Máximas',
        'descripcion': 'Número máximo de reservas activas por usuario',
        'valor': 3, 'tipo': 'numero', 'categoria': 'reservas',
        'min': 1, 'max': 10, 'unidad': 'reservas', 'activo': True,
    },
    {
        'id': 'notif_email_activo',
        'nombre': 'Notificaciones por Email',
        'descripcion': 'Activar envío de notificaciones por correo electrónico',
        'valor': True, 'tipo': 'booleano', 'categoria': 'notificaciones', 'activo': True,
    },
    {
        'id': 'notif_sms_activo',
        'nombre': 'Notificaciones por SMS',
        'descripcion': 'Activar envío de notificaciones por mensaje de texto',
        'valor': False, 'tipo': 'booleano', 'categoria': 'notificaciones', 'activo': True,
    },
    {
        'id': 'notif_recordatorio_tiempo',
        'nombre': 'Tiempo para Recordatorios',
        'descripcion': 'Tiempo antes del evento para enviar recordatorios automáticos',
        'valor': 24, 'tipo': 'numero', 'categoria': 'notificaciones',
        'min': 1, 'max': 168, 'unidad': 'horas', 'activo': True,
    },
    {
        'id': 'politica_mantenimiento_intervalo',
        'nombre': 'Intervalo de Mantenimiento Preventivo',
        'descripcion': 'Frecuencia automática para programar mantenimientos preventivos',
        'valor': 30, 'tipo': 'numero', 'categoria': 'politicas',
        'min': 1, 'max': 365, 'unidad': 'días', 'activo': True,
    },
    {
        'id': 'politica_tiempo_respuesta',
        'nombre': 'Tiempo Máximo de Respuesta',
        'descripcion': 'Tiempo máximo para responder a solicitudes de los usuarios',
        'valor': 24, 'tipo': 'numero', 'categoria': 'politicas',
        'min': 1, 'max': 168, 'unidad': 'horas', 'activo': True,
    },
    {
        'id': 'politica_tecnico_defecto',
        'nombre': 'Técnico por Defecto',
        'descripcion': 'Técnico asignado automáticamente para nuevas solicitudes',
        'valor': '', 'tipo': 'texto', 'categoria': 'politicas', 'activo': True,
    },
]

COLOR_DEFECTO = '#667eea'

ESTADOS = [
    {'id': 'eq_disponible', 'nombre': 'Disponible', 'descripcion': 'Equipo disponible para uso', 'color': '#48bb78', 'tipo': 'equipos'},
    {'id': 'eq_en_uso', 'nombre': 'En Uso', 'descripcion': 'Equipo actualmente en uso', 'color': '#ed8936', 'tipo': 'equipos'},
    {'id': 'eq_mantenimiento', 'nombre': 'En Mantenimiento', 'descripcion': 'Equipo en proceso de mantenimiento', 'color': '#e53e3e', 'tipo': 'equipos'},
    {'id': 'eq_fuera_servicio', 'nombre': 'Fuera de Servicio', 'descripcion': 'Equipo temporalmente fuera de servicio', 'color': '#718096', 'tipo': 'equipos'},
    {'id': 'sol_pendiente', 'nombre': 'Pendiente', 'descripcion': 'Solicitud pendiente de revisión', 'color': '#d69e2e', 'tipo': 'solicitudes'},
    {'id': 'sol_aprobada', 'nombre': 'Aprobada', 'descripcion': 'Solicitud aprobada', 'color': '#48bb78', 'tipo': 'solicitudes'},
    {'id': 'sol_rechazada', 'nombre': 'Rechazada', 'descripcion': 'Solicitud rechazada', 'color': '#e53e3e', 'tipo': 'solicitudes'},
    {'id': 'sol_cancelada', 'nombre': 'Cancelada', 'descripcion': 'Solicitud cancelada por el usuario', 'color': '#718096', 'tipo': 'solicitudes'},
    {'id': 'mant_programado', 'nombre': 'Programado', 'descripcion': 'Mantenimiento programado', 'color': '#667eea', 'tipo': 'mantenimientos'},
    {'id': 'mant_en_proceso', 'nombre': 'En Proceso', 'descripcion': 'Mantenimiento en ejecución', 'color': '#ed8936', 'tipo': 'mantenimientos'},
    {'id': 'mant_completado', 'nombre': 'Completado', 'descripcion': 'Mantenimiento completado exitosamente', 'color': '#48bb78', 'tipo': 'mantenimientos'},
    {'id': 'res_confirmada', 'nombre': 'Confirmada', 'descripcion': 'Reserva confirmada', 'color': '#48bb78', 'tipo': 'reservas'},
    {'id': 'res_pendiente', 'nombre': 'Pendiente', 'descripcion': 'Reserva pendiente de confirmación', 'color': '#d69e2e', 'tipo': 'reservas'},
    {'id': 'res_cancelada', 'nombre': 'Cancelada', 'descripcion': 'Reserva cancelada', 'color': '#e53e3e', 'tipo': 'reservas'},
]

# Catálogos base de AP-LABS: {colección: [documentos con id fijo]}
CATALOGOS = {
    colecciones.ROLES: [{'id': k, 'nombre': v} for k, v in colecciones.NOMBRES_ROL.items()],
    colecciones.ESTADOS: [{'id': k, 'nombre': v} for k, v in colecciones.NOMBRES_ESTADO_RECURSO.items()],
    colecciones.MEDIDAS: [
        {'id': '1', 'nombre': 'Unidad'},
        {'id': '2', 'nombre': 'Caja'},
        {'id': '3', 'nombre': 'Kit'},
        {'id': '4', 'nombre': 'Litro'},
        {'id': '5', 'nombre': 'Metro'},
    ],
    colecciones.TIPOS_RECURSO: [
        {'id': '1', 'nombre': 'Equipo de cómputo'},
        {'id': '2', 'nombre': 'Equipo de laboratorio'},
        {'id': '3', 'nombre': 'Herramienta'},
        {'id': '4', 'nombre': 'Material consumible'},
    ],
    colecciones.TIPOS_MANTENIMIENTO: [
        {'id': '1', 'nombre': 'Preventivo'},
        {'id': '2', 'nombre': 'Correctivo'},
    ],
}
