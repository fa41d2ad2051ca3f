import io

import pytest
from openpyxl import load_workbook

from app.core.exceptions import ValidationException
from app.schemas.analysis import AnalysisResultResponse
from app.schemas.customer import CustomerResponse
from app.schemas.request import ServiceRequestResponse
from app.schemas.sample import SampleResponse
from app.services import export_service


@pytest.fixture
def customers(customer_rows):
    return [CustomerResponse.model_validate(c) for c in customer_rows]


def test_clients_csv(customers):
    export = export_service.clients_csv(customers)

    lines = export.content.decode("utf-8").splitlines()
    assert lines[0] == "ID,Nombre,Apellido,Email,Teléfono,Estado"
    assert lines[2] == "2,Luis,Rojas,luis@example.com,912345678,Inactivo"
    assert export.media_type == "text/csv"
    assert export.filename.startswith("clientes_")


def test_clients_xlsx_has_styled_header(customers):
    export = export_service.clients_xlsx(customers)

    ws = load_workbook(io.BytesIO(export.content)).active
    assert ws.title == "Clientes"
    assert ws["A1"].value == "ID"
    assert ws["A1"].font.bold
    assert ws["F2"].value == "Av. Arequipa 123, Lince, Lima, 15046"
    assert ws["F3"].value == "S/D"
    assert ws.max_row == 4
    assert export.filename.startswith("Reporte_Clientes_")


def test_clients_pdf(customers):
    export = export_service.clients_pdf(customers)
    assert export.content.startswith(b"%PDF")
    assert export.filename.endswith(".pdf")


def test_requests_xlsx_strips_cancel_prefix(request_rows):
    requests = [ServiceRequestResponse.model_validate(r) for r in request_rows]
    export = export_service.requests_xlsx(requests)

    ws = load_workbook(io.BytesIO(export.content)).active
    assert ws["C2"].value == "Ana Quispe"
    assert ws["D2"].value == "Servicio 1"
    assert ws["D3"].value == "Sin servicios"
    assert ws["G4"].value == "Cliente desistió"


def test_request_order_pdf(request_rows):
    request = ServiceRequestResponse.model_validate(request_rows[0])
    export = export_service.request_order_pdf(request)
    assert export.content.startswith(b"%PDF")
    assert export.filename == "Orden_Servicio_10.pdf"


def test_request_order_requires_items(request_rows):
    request = ServiceRequestResponse.model_validate(request_rows[1])
    with pytest.raises(ValidationException):
        export_service.request_order_pdf(request)


def test_samples_exports(sample_rows):
    samples = [SampleResponse.model_validate(s) for s in sample_rows]

    ws = load_workbook(io.BytesIO(export_service.samples_xlsx(samples).content)).active
    assert [c.value for c in ws[1]] == [
        "Código", "ID", "Fecha Recolección", "Ubicación", "Tipo Muestra", "Estado",
    ]
    assert ws["C2"].value == "05/01/2026"
    assert ws["E2"].value == "Tipo 1"
    assert ws["F4"].value == "ARCHIVADA"
    assert ws["F5"].value == "REGISTRADA"

    assert export_service.samples_pdf(samples).content.startswith(b"%PDF")


def test_results_exports(result_rows):
    results = [AnalysisResultResponse.model_validate(r) for r in result_rows]

    ws = load_workbook(io.BytesIO(export_service.results_xlsx(results).content)).active
    assert ws["C2"].value == "pH"
    assert ws["E2"].value == "-"
    assert ws["E3"].value == "NTU"

    assert export_service.results_pdf(results).content.startswith(b"%PDF")


@pytest.mark.parametrize(
    "builder",
    [
        export_service.clients_csv,
        export_service.clients_xlsx,
        export_service.requests_pdf,
        export_service.samples_xlsx,
        export_service.results_pdf,
    ],
)
def test_empty_export_is_rejected(builder):
    with pytest.raises(ValidationException, match="para exportar"):
        builder([])


async def test_export_uses_selection_over_filter(lims, fake_backend, customer_rows):
    fake_backend.on("GET", "/api/customers", customer_rows)

    export = await export_service.export_clients(lims, "csv", search="ana", selected=[2, 3])

    lines = export.content.decode("utf-8").splitlines()
    assert [line.split(",")[0] for line in lines[1:]] == ["2", "3"]


async def test_export_unknown_format(lims):
    with pytest.raises(ValidationException, match="Formato no soportado"):
        await export_service.export_samples(lims, "csv")
