"""
Schemas para solicitudes de servicio y el carrito de ítems.
"""

from decimal import Decimal

from pydantic import AliasChoices, BaseModel, Field

from app.models.states import RequestStatus, UIAction


# ── Carrito ──────────────────────────────────────────


class CartLine(BaseModel):
    """Línea del carrito. unit_price y subtotal son solo de presentación."""
    service_type_id: int
    service_name: str
    quantity: int
    unit_price: Decimal = Decimal("0.00")
    subtotal: Decimal = Decimal("0.00")


class RequestItemIn(BaseModel):
    """Lo único que se envía al backend por cada línea."""
    service_type_id: int = Field(..., ge=1)
    quantity: int = Field(..., ge=1)


class CartAddRequest(BaseModel):
    """Estado actual del carrito + ítem que se intenta agregar."""
    items: list[CartLine] = Field(default_factory=list)
    service_type_id: int | None = None
    quantity: str | int | None = Field(None, description="Texto tal cual lo ingresó el usuario")


class CartOption(BaseModel):
    service_type_id: int
    service_name: str
    unit_price: Decimal
    disabled: bool


class CartView(BaseModel):
    items: list[CartLine]
    total_estimated: Decimal
    count: int
    max_items: int
    is_full: bool
    options: list[CartOption] = Field(default_factory=list)


class CartOptionsRequest(BaseModel):
    items: list[CartLine] = Field(default_factory=list)


# ── Solicitud ────────────────────────────────────────


class ServiceRequestCreate(BaseModel):
    customer_id: int | None = None
    notes: str | None = Field(None, max_length=500)
    items: list[CartLine] = Field(default_factory=list)


class ServiceRequestUpdate(BaseModel):
    """Solo se edita la cabecera; los ítems no se modifican."""
    customer_id: int | None = None
    status: RequestStatus | None = None
    notes: str | None = Field(None, max_length=500)
    request_date: str | None = None


class CancelRequest(BaseModel):
    reason: str | None = Field(None, max_length=300)


class RequestCustomer(BaseModel):
    customer_id: int | None = Field(
        None, validation_alias=AliasChoices("customer_id", "id")
    )
    name: str | None = None
    surname: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.name or ''} {self.surname or ''}".strip()


class RequestItemResponse(BaseModel):
    service_type_id: int | None = None
    service_name: str | None = None
    quantity: int = 0
    unit_price: Decimal = Decimal("0.00")
    subtotal: Decimal = Decimal("0.00")
    notes: str | None = None


class ServiceRequestResponse(BaseModel):
    service_request_id: int = Field(
        validation_alias=AliasChoices("service_request_id", "id")
    )
    customer_id: int | None = None
    customer: RequestCustomer | None = None
    request_date: str | None = None
    status: str = RequestStatus.PENDING.value
    notes: str | None = None
    items: list[RequestItemResponse] = Field(default_factory=list)
    total_estimated: Decimal = Decimal("0.00")

    @property
    def customer_name(self) -> str:
        return self.customer.full_name if self.customer else ""

    @property
    def service_names(self) -> str:
        return ", ".join(i.service_name for i in self.items if i.service_name)

    @property
    def clean_notes(self) -> str:
        return (self.notes or "").replace("CANCELLED - ", "")


class ServiceRequestRow(ServiceRequestResponse):
    actions: list[UIAction]
