"""
Exportadores de reportes

Arma los archivos descargables de reportes y bitácora:
- PDF con reportlab (horizontal, tabla de indicadores y secciones)
- Excel con openpyxl (una hoja por sección)
- ZIP con ambos cuando se piden los dos formatos
"""

import io
import zipfile
import logging
from typing import List, Optional, Sequence, Tuple

from django.http import HttpResponse
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

logger = logging.getLogger(__name__)

# Color de encabezados (102, 126, 234)
COLOR_ENCABEZADO = colors.Color(102 / 255, 126 / 255, 234 / 255)
COLOR_ENCABEZADO_HEX = '667EEA'

# Filas máximas por sección en el PDF
MAX_FILAS_PDF = 50

FORMATOS = ('pdf', 'excel', 'ambos')

CONTENT_TYPES = {
    'pdf': 'application/pdf',
    'xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'zip': 'application/zip',
}


class Seccion:
    """Tabla de un reporte: título, encabezados y filas."""

    def __init__(self, titulo: str, encabezados: Sequence[str], filas: List[Sequence]):
        self.titulo = titulo
        self.encabezados = list(encabezados)
        self.filas = [list(fila) for fila in filas]


def _estilo_tabla() -> TableStyle:
    return TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), COLOR_ENCABEZADO),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('GRID', (0, 0), (-1, -1), 0.25, colors.grey),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
    ])


def generar_pdf(
    titulo: str,
    subtitulos: Sequence[str],
    secciones: Sequence[Seccion],
    estadisticas: Optional[Sequence[Tuple[str, object]]] = None,
) -> bytes:
    """
    Genera un PDF horizontal.

    Args:
        titulo: Título principal del documento
        subtitulos: Líneas bajo el título (periodo, fecha de generación)
        secciones: Tablas a incluir, cada una con hasta 50 filas
        estadisticas: Pares (indicador, valor) para la tabla inicial

    Returns:
        bytes del PDF
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(letter),
        leftMargin=0.5 * inch,
        rightMargin=0.5 * inch,
        topMargin=0.5 * inch,
        bottomMargin=0.5 * inch,
        title=titulo,
    )
    estilos = getSampleStyleSheet()
    story = [Paragraph(titulo, estilos['Title'])]

    for linea in subtitulos:
        story.append(Paragraph(linea, estilos['Normal']))
    story.append(Spacer(1, 0.2 * inch))

    if estadisticas:
        story.append(Paragraph('Estadísticas Generales', estilos['Heading2']))
        datos = [['Indicador', 'Valor']] + [[str(k), str(v)] for k, v in estadisticas]
        tabla = Table(datos, hAlign='LEFT')
        tabla.setStyle(_estilo_tabla())
        story.append(tabla)
        story.append(Spacer(1, 0.2 * inch))

    for seccion in secciones:
        story.append(Paragraph(seccion.titulo, estilos['Heading2']))
        filas = seccion.filas[:MAX_FILAS_PDF]
        if not filas:
            story.append(Paragraph('Sin registros', estilos['Normal']))
            continue
        datos = [seccion.encabezados] + [['' if c is None else str(c) for c in fila] for fila in filas]
        tabla = Table(datos, hAlign='LEFT', repeatRows=1)
        tabla.setStyle(_estilo_tabla())
        story.append(tabla)
        if len(seccion.filas) > MAX_FILAS_PDF:
            story.append(Paragraph(
                f'Mostrando {MAX_FILAS_PDF} de {len(seccion.filas)} registros',
                estilos['Italic'],
            ))
        story.append(Spacer(1, 0.2 * inch))

    doc.build(story)
    logger.debug(f"PDF generado: {titulo}")
    return buffer.getvalue()


def _titulo_hoja(titulo: str, usados: set) -> str:
    # Excel limita a 31 caracteres y no admite algunos símbolos
    base = ''.join(c for c in titulo if c not in '[]:*?/\\')[:31] or 'Hoja'
    nombre = base
    contador = 2
    while nombre in usados:
        sufijo = f' ({contador})'
        nombre = base[:31 - len(sufijo)] + sufijo
        contador += 1
    usados.add(nombre)
    return nombre


def generar_excel(
    secciones: Sequence[Seccion],
    estadisticas: Optional[Sequence[Tuple[str, object]]] = None,
) -> bytes:
    """Genera un libro XLSX con una hoja por sección (sin límite de filas)."""
    libro = Workbook()
    libro.remove(libro.active)
    relleno = PatternFill(start_color=COLOR_ENCABEZADO_HEX, end_color=COLOR_ENCABEZADO_HEX, fill_type='solid')
    fuente = Font(bold=True, color='FFFFFF')
    usados = set()

    tablas = []
    if estadisticas:
        tablas.append(Seccion('Estadísticas', ['Indicador', 'Valor'], [list(p) for p in estadisticas]))
    tablas.extend(secciones)

    if not tablas:
        tablas.append(Seccion('Reporte', ['Sin datos'], []))

    for seccion in tablas:
        hoja = libro.create_sheet(_titulo_hoja(seccion.titulo, usados))
        hoja.append(seccion.encabezados)
        for celda in hoja[1]:
            celda.fill = relleno
            celda.font = fuente
        for fila in seccion.filas:
            hoja.append(['' if c is None else c for c in fila])
        for indice, encabezado in enumerate(seccion.encabezados, start=1):
            letra = hoja.cell(row=1, column=indice).column_letter
            hoja.column_dimensions[letra].width = max(12, len(str(encabezado)) + 4)

    buffer = io.BytesIO()
    libro.save(buffer)
    return buffer.getvalue()


def empaquetar_zip(archivos: dict) -> bytes:
    """Comprime {nombre: bytes} en un único ZIP."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as zip_file:
        for nombre, contenido in archivos.items():
            zip_file.writestr(nombre, contenido)
    return buffer.getvalue()


def respuesta_archivo(contenido: bytes, nombre: str, content_type: str) -> HttpResponse:
    response = HttpResponse(contenido, content_type=content_type)
    response['Content-Disposition'] = f'attachment; filename="{nombre}"'
    return response


def exportar(
    formato: str,
    nombre_base: str,
    titulo: str,
    subtitulos: Sequence[str],
    secciones: Sequence[Seccion],
    estadisticas: Optional[Sequence[Tuple[str, object]]] = None,
) -> HttpResponse:
    """
    Construye la respuesta de descarga según el formato pedido.

    'pdf' → .pdf, 'excel' → .xlsx, 'ambos' → .zip con los dos archivos.
    """
    if formato not in FORMATOS:
        raise ValueError(f'Formato no soportado: {formato}')

    archivos = {}
    if formato in ('pdf', 'ambos'):
        archivos[f'{nombre_base}.pdf'] = generar_pdf(titulo, subtitulos, secciones, estadisticas)
    if formato in ('excel', 'ambos'):
        archivos[f'{nombre_base}.xlsx'] = generar_excel(secciones, estadisticas)

    if formato == 'ambos':
        return respuesta_archivo(empaquetar_zip(archivos), f'{nombre_base}.zip', CONTENT_TYPES['zip'])

    nombre, contenido = next(iter(archivos.items()))
    extension = nombre.rsplit('.', 1)[1]
    logger.info(f"Archivo exportado: {nombre}")
    return respuesta_archivo(contenido, nombre, CONTENT_TYPES[extension])
