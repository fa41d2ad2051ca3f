"""
Exportación de listados a CSV, Excel (openpyxl) y PDF (reportlab).

Se exportan las filas seleccionadas si hay selección; si no, el listado
filtrado. Un error al generar el archivo solo afecta a esa exportación.
"""

import csv
import io
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from xml.sax.saxutils import escape

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape, letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.backend import LimsClient
from app.config import get_settings
from app.core.dates import format_date, today_stamp
from app.core.exceptions import ExportException, ValidationException
from app.models.sample_status import status_label
from app.models.states import EntityState
from app.schemas.analysis import AnalysisResultResponse
from app.schemas.customer import CustomerResponse
from app.schemas.request import ServiceRequestResponse
from app.schemas.sample import SampleResponse
from app.services import analysis_service, customer_service, request_service, sample_service
from app.services.sample_lifecycle import classify

settings = get_settings()
logger = logging.getLogger(__name__)

CSV_MEDIA_TYPE = "text/csv"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"

HEADER_FILL = "374151"


@dataclass
class ExportFile:
    content: bytes
    media_type: str
    filename: str


def select_rows(rows: list, selected: list | None, key) -> list:
    if not selected:
        return rows
    wanted = set(selected)
    return [r for r in rows if key(r) in wanted]


def _ensure_rows(rows: list, label: str) -> None:
    if not rows:
        raise ValidationException(f"No hay {label} para exportar")


def money(value) -> str:
    return f"S/ {Decimal(value or 0):.2f}"


def _date_or_raw(value) -> str:
    return format_date(value) or (str(value) if value else "N/A")


# ── Generadores ──────────────────────────────────────

def build_csv(headers: list[str], rows: list[list]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def build_xlsx(
    sheet_name: str,
    headers: list[str],
    rows: list[list],
    widths: list[int] | None = None,
) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = PatternFill("solid", fgColor=HEADER_FILL)
        cell.alignment = Alignment(horizontal="center")
    for row in rows:
        ws.append(row)

    widths = widths or [20] * len(headers)
    for idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def _p(text, style) -> Paragraph:
    return Paragraph(escape(str(text)), style)


def build_table_pdf(
    title: str,
    subtitle: str,
    headers: list[str],
    rows: list[list],
    col_widths: list[int] | None = None,
    summary: list[tuple[str, int]] | None = None,
) -> bytes:
    """Reporte tabular: título, recuadro resumen opcional, tabla y pie."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=landscape(letter),
        rightMargin=30, leftMargin=30, topMargin=30, bottomMargin=30,
        title=title,
    )
    styles = getSampleStyleSheet()
    cell_style = ParagraphStyle("Cell", parent=styles["Normal"], fontSize=8, leading=10)
    header_style = ParagraphStyle(
        "Header", parent=styles["Normal"], fontSize=8, leading=10,
        fontName="Helvetica-Bold", textColor=colors.white,
    )
    footer_style = ParagraphStyle(
        "Footer", parent=styles["Normal"], fontSize=8, alignment=TA_CENTER, textColor=colors.grey,
    )
    today = datetime.now().strftime(settings.REPORT_LOCALE_DATE_FORMAT)

    elements = [
        _p(title, styles["Heading1"]),
        _p(f"{subtitle} - {today}", styles["Normal"]),
        Spacer(1, 12),
    ]

    if summary:
        box = Table(
            [[_p(label.upper(), cell_style) for label, _ in summary],
             [_p(value, styles["Heading2"]) for _, value in summary]],
        )
        box.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#f3f4f6")),
            ("BOX", (0, 0), (-1, -1), 0.5, colors.HexColor("#d1d5db")),
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ]))
        elements.extend([box, Spacer(1, 12)])

    data = [[_p(h, header_style) for h in headers]]
    data.extend([[_p(v, cell_style) for v in row] for row in rows])
    table = Table(data, colWidths=col_widths, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(f"#{HEADER_FILL}")),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#d1d5db")),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f9fafb")]),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]))
    elements.extend([
        table,
        Spacer(1, 16),
        _p(f"Generado el {today} - {settings.REPORT_TITLE} de Laboratorio", footer_style),
        _p(f"Total de registros: {len(rows)}", footer_style),
    ])

    doc.build(elements)
    return buffer.getvalue()


def _generate(kind: str, builder, *args, **kwargs) -> bytes:
    try:
        return builder(*args, **kwargs)
    except Exception as exc:
        logger.exception(f"Error al generar {kind}: {exc}")
        raise ExportException(f"No se pudo generar el archivo {kind}")


# ── Clientes ─────────────────────────────────────────

def _state_label(state: str | None) -> str:
    return EntityState.ACTIVE.label if state == EntityState.ACTIVE else EntityState.INACTIVE.label


def clients_csv(clients: list[CustomerResponse]) -> ExportFile:
    _ensure_rows(clients, "clientes")
    rows = [
        [c.customer_id, c.name or "", c.surname or "", c.email or "", c.phone_number or "", _state_label(c.state)]
        for c in clients
    ]
    content = _generate("CSV", build_csv, ["ID", "Nombre", "Apellido", "Email", "Teléfono", "Estado"], rows)
    return ExportFile(content, CSV_MEDIA_TYPE, f"clientes_{today_stamp()}.csv")


def clients_xlsx(clients: list[CustomerResponse]) -> ExportFile:
    _ensure_rows(clients, "clientes")
    rows = [
        [
            c.customer_id,
            c.full_name,
            _state_label(c.state),
            c.email or "N/A",
            c.phone_number or "N/A",
            (c.address.full_address if c.address else "") or "S/D",
        ]
        for c in clients
    ]
    content = _generate(
        "Excel", build_xlsx, "Clientes",
        ["ID", "Nombre Completo", "Estado", "Email", "Teléfono", "Dirección"], rows,
    )
    return ExportFile(content, XLSX_MEDIA_TYPE, f"Reporte_Clientes_{today_stamp()}.xlsx")


def clients_pdf(clients: list[CustomerResponse]) -> ExportFile:
    _ensure_rows(clients, "clientes")
    rows = []
    for c in clients:
        address = c.address
        rows.append([
            c.customer_id,
            f"{c.full_name or 'Sin Nombre'} ({_state_label(c.state)})",
            c.email or "N/A",
            c.phone_number or "N/A",
            (address.address_id if address else None) or "N/A",
            (address.full_address if address else "") or "Dirección no disponible",
        ])
    content = _generate(
        "PDF", build_table_pdf, "Reporte de Clientes", settings.REPORT_TITLE,
        ["ID", "Cliente", "Email", "Teléfono", "ID Dir.", "Dirección Completa"], rows,
        col_widths=[40, 150, 150, 80, 50, 250],
    )
    return ExportFile(content, PDF_MEDIA_TYPE, f"Listado_Clientes_{today_stamp()}.pdf")


# ── Solicitudes ──────────────────────────────────────

def requests_xlsx(requests: list[ServiceRequestResponse]) -> ExportFile:
    _ensure_rows(requests, "solicitudes")
    rows = [
        [
            r.service_request_id,
            r.request_date or "",
            r.customer_name,
            r.service_names or "Sin servicios",
            r.status,
            float(r.total_estimated),
            r.clean_notes,
        ]
        for r in requests
    ]
    content = _generate(
        "Excel", build_xlsx, "Solicitudes",
        ["ID Solicitud", "Fecha", "Cliente", "Servicios", "Estado", "Total", "Notas"], rows,
    )
    return ExportFile(content, XLSX_MEDIA_TYPE, f"Reporte_Solicitudes_{today_stamp()}.xlsx")


def requests_pdf(requests: list[ServiceRequestResponse]) -> ExportFile:
    _ensure_rows(requests, "solicitudes")
    rows = [
        [
            r.service_request_id,
            r.request_date or "",
            r.customer_name,
            r.service_names or "-",
            r.status,
            money(r.total_estimated),
        ]
        for r in requests
    ]
    content = _generate(
        "PDF", build_table_pdf, "REPORTE GENERAL DE SOLICITUDES", settings.REPORT_TITLE,
        ["ID", "Fecha", "Cliente", "Servicios", "Estado", "Total Est. (S/)"], rows,
        col_widths=[40, 110, 150, 250, 80, 90],
    )
    return ExportFile(content, PDF_MEDIA_TYPE, f"Reporte_Solicitudes_{today_stamp()}.pdf")


def _build_order_pdf(request: ServiceRequestResponse) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, rightMargin=40, leftMargin=40, topMargin=40, bottomMargin=40)
    styles = getSampleStyleSheet()
    center = ParagraphStyle("Center", parent=styles["Title"], alignment=TA_CENTER)
    cell = ParagraphStyle("Cell", parent=styles["Normal"], fontSize=9, leading=11)
    bold = ParagraphStyle("Bold", parent=cell, fontName="Helvetica-Bold")

    customer_id = request.customer_id or (request.customer.customer_id if request.customer else None)
    header = Table([
        [_p("Información de Solicitud", bold), "", _p("Información del Cliente", bold), ""],
        [_p("N° Solicitud:", cell), _p(f"#{request.service_request_id}", cell),
         _p("ID Cliente:", cell), _p(customer_id or "-", cell)],
        [_p("Fecha:", cell), _p(request.request_date or "-", cell),
         _p("Nombre:", cell), _p(request.customer_name or "-", cell)],
        [_p("Estado:", cell), _p(request.status or "PENDIENTE", cell), "", ""],
    ], colWidths=[80, 170, 80, 170])
    header.setStyle(TableStyle([
        ("BOX", (0, 0), (1, -1), 0.5, colors.HexColor("#d1d5db")),
        ("BOX", (2, 0), (3, -1), 0.5, colors.HexColor("#d1d5db")),
        ("SPAN", (0, 0), (1, 0)),
        ("SPAN", (2, 0), (3, 0)),
    ]))

    items = [[_p(h, bold) for h in ("Descripción del Servicio", "Cant.", "Detalle/Notas", "P. Unit.", "Subtotal")]]
    for item in request.items:
        items.append([
            _p(item.service_name or "", cell),
            _p(item.quantity, cell),
            _p(item.notes or "---", cell),
            _p(money(item.unit_price), cell),
            _p(money(item.subtotal), cell),
        ])
    items.append(["", "", "", _p("TOTAL GENERAL:", bold), _p(money(request.total_estimated), bold)])
    items_table = Table(items, colWidths=[150, 40, 150, 70, 70], repeatRows=1)
    items_table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4f46e5")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("GRID", (0, 0), (-1, -2), 0.5, colors.HexColor("#d1d5db")),
        ("ALIGN", (1, 1), (1, -1), "CENTER"),
        ("ALIGN", (3, 1), (-1, -1), "RIGHT"),
    ]))

    elements = [
        _p("ORDEN DE SERVICIO", center),
        _p("Reporte Transaccional Detallado", styles["Normal"]),
        Spacer(1, 16),
        header,
        Spacer(1, 16),
        items_table,
        Spacer(1, 16),
    ]
    if request.notes:
        elements.append(_p("Observaciones Generales:", bold))
        elements.append(_p(request.notes.replace("CANCELLED - ", "CANCELADO: "), cell))
        elements.append(Spacer(1, 40))

    signatures = Table(
        [["____________________________", "____________________________"],
         [_p("Firma Responsable Laboratorio", cell), _p("Conformidad Cliente", cell)]],
        colWidths=[250, 250],
    )
    signatures.setStyle(TableStyle([("ALIGN", (0, 0), (-1, -1), "CENTER")]))
    elements.extend([
        Spacer(1, 40),
        signatures,
        Spacer(1, 20),
        _p(f"Generado el: {datetime.now().strftime('%d/%m/%Y %H:%M:%S')}", cell),
    ])
    doc.build(elements)
    return buffer.getvalue()


def request_order_pdf(request: ServiceRequestResponse) -> ExportFile:
    """Orden de servicio individual (cabecera + detalle de ítems)."""
    if not request.items or request.customer is None:
        raise ValidationException(
            "Faltan detalles (ítems/cliente) en la solicitud para generar el reporte."
        )
    content = _generate("PDF", _build_order_pdf, request)
    return ExportFile(content, PDF_MEDIA_TYPE, f"Orden_Servicio_{request.service_request_id}.pdf")


# ── Muestras ─────────────────────────────────────────

def _sample_row(s: SampleResponse) -> list:
    return [
        s.sample_code or "N/A",
        s.sample_id,
        _date_or_raw(s.collection_date),
        s.collection_location or "N/A",
        s.sample_type_name or f"Tipo {s.sample_type_id}",
        status_label(s.current_status_id),
    ]


_SAMPLE_HEADERS = ["Código", "ID", "Fecha Recolección", "Ubicación", "Tipo Muestra", "Estado"]


def samples_xlsx(samples: list[SampleResponse]) -> ExportFile:
    _ensure_rows(samples, "muestras")
    content = _generate(
        "Excel", build_xlsx, "Muestras", _SAMPLE_HEADERS,
        [_sample_row(s) for s in samples], [15, 8, 18, 30, 20, 15],
    )
    return ExportFile(content, XLSX_MEDIA_TYPE, f"muestras_{today_stamp()}.xlsx")


def samples_pdf(samples: list[SampleResponse]) -> ExportFile:
    _ensure_rows(samples, "muestras")
    classified = [classify(s.current_status_id, s.is_deleted) for s in samples]
    summary = [
        ("Total Muestras", len(samples)),
        ("Analizadas", sum(1 for c in classified if c.is_analyzed and not c.is_archived)),
        ("Pendientes", sum(1 for c in classified if c.is_pending)),
    ]
    content = _generate(
        "PDF", build_table_pdf, settings.REPORT_TITLE, "Reporte de Muestras",
        _SAMPLE_HEADERS, [_sample_row(s) for s in samples],
        col_widths=[90, 50, 100, 200, 150, 100], summary=summary,
    )
    return ExportFile(content, PDF_MEDIA_TYPE, f"muestras_{today_stamp()}.pdf")


# ── Resultados ───────────────────────────────────────

def _value(result: AnalysisResultResponse):
    return result.result_value if result.result_value is not None else "N/A"


def results_xlsx(results: list[AnalysisResultResponse]) -> ExportFile:
    _ensure_rows(results, "resultados")
    rows = [
        [
            r.analysis_result_id,
            r.sample_id or "N/A",
            r.parameter_name or "N/A",
            _value(r),
            r.unit or "-",
            _date_or_raw(r.analysis_date),
        ]
        for r in results
    ]
    content = _generate(
        "Excel", build_xlsx, "Resultados",
        ["ID Resultado", "Muestra ID", "Parámetro", "Valor", "Unidad", "Fecha Análisis"], rows,
        [12, 12, 25, 15, 12, 18],
    )
    return ExportFile(content, XLSX_MEDIA_TYPE, f"resultados_{today_stamp()}.xlsx")


def results_pdf(results: list[AnalysisResultResponse]) -> ExportFile:
    _ensure_rows(results, "resultados")
    rows = [
        [
            r.analysis_result_id,
            r.sample_id or "N/A",
            r.parameter_name or "N/A",
            f"{_value(r)} {r.unit or ''}".strip(),
            _date_or_raw(r.analysis_date),
        ]
        for r in results
    ]
    content = _generate(
        "PDF", build_table_pdf, settings.REPORT_TITLE, "Reporte de Resultados de Análisis",
        ["ID Resultado", "Muestra ID", "Parámetro", "Valor", "Fecha Análisis"], rows,
        col_widths=[90, 90, 250, 150, 120],
    )
    return ExportFile(content, PDF_MEDIA_TYPE, f"resultados_{today_stamp()}.pdf")


# ── Casos de uso (carga + exportación) ───────────────

_CLIENT_BUILDERS = {"csv": clients_csv, "xlsx": clients_xlsx, "pdf": clients_pdf}
_REQUEST_BUILDERS = {"xlsx": requests_xlsx, "pdf": requests_pdf}
_SAMPLE_BUILDERS = {"xlsx": samples_xlsx, "pdf": samples_pdf}
_RESULT_BUILDERS = {"xlsx": results_xlsx, "pdf": results_pdf}


def _builder(builders: dict, fmt: str):
    builder = builders.get(fmt)
    if builder is None:
        raise ValidationException(f"Formato no soportado: {fmt}")
    return builder


async def export_clients(
    backend: LimsClient,
    fmt: str,
    search: str | None = None,
    state: EntityState | None = None,
    selected: list[int] | None = None,
) -> ExportFile:
    builder = _builder(_CLIENT_BUILDERS, fmt)
    customers = await customer_service.list_customers(backend)
    if selected:
        rows = select_rows(customers, selected, lambda c: c.customer_id)
    else:
        rows = customer_service.filter_customers(customers, search, state)
    return builder(rows)


async def export_requests(
    backend: LimsClient,
    fmt: str,
    search: str | None = None,
    selected: list[int] | None = None,
) -> ExportFile:
    builder = _builder(_REQUEST_BUILDERS, fmt)
    requests = await request_service.list_requests(backend)
    if selected:
        rows = select_rows(requests, selected, lambda r: r.service_request_id)
    else:
        rows = request_service.filter_requests(requests, search)
    return builder(rows)


async def export_request_order(backend: LimsClient, request_id: int) -> ExportFile:
    request = await request_service.get_request(backend, request_id)
    return request_order_pdf(request)


async def export_samples(
    backend: LimsClient,
    fmt: str,
    search: str | None = None,
    selected: list[int] | None = None,
) -> ExportFile:
    builder = _builder(_SAMPLE_BUILDERS, fmt)
    samples = await sample_service.list_samples(backend)
    if selected:
        rows = select_rows(samples, selected, lambda s: s.sample_id)
    else:
        rows = sample_service.filter_samples(samples, search)
    return builder(rows)


async def export_results(
    backend: LimsClient,
    fmt: str,
    search: str | None = None,
    selected: list[int] | None = None,
) -> ExportFile:
    builder = _builder(_RESULT_BUILDERS, fmt)
    results = await analysis_service.list_results(backend)
    if selected:
        rows = select_rows(results, selected, lambda r: r.analysis_result_id)
    else:
        rows = analysis_service.filter_results(results, search)
    return builder(rows)
