"""
Carrito de ítems de una solicitud de servicio.

Reglas:
- Máximo CART_MAX_ITEMS tipos de servicio distintos.
- Un tipo de servicio no se repite.
- Cantidad entre 1 y CART_MAX_QUANTITY; texto no numérico = cantidad vacía.
- Subtotal = precio unitario del catálogo × cantidad, calculado al agregar.
- Al backend solo viaja {service_type_id, quantity} por línea.
"""

from decimal import Decimal, InvalidOperation

from app.config import get_settings
from app.schemas.catalog import ServiceTypeResponse
from app.schemas.request import CartLine, CartOption, CartView, RequestItemIn

settings = get_settings()


MISSING_SERVICE = "Seleccione un tipo de servicio"
INVALID_QUANTITY = "Ingrese una cantidad válida"
DUPLICATE_SERVICE = (
    "Este servicio ya está en la lista. Si necesitas más cantidad, "
    "elimínalo y agrégalo nuevamente con la cantidad correcta."
)


class CartError(ValueError):
    """Operación rechazada; el carrito queda igual."""


def parse_quantity(raw, max_quantity: int | None = None) -> int | None:
    """
    Normaliza la cantidad ingresada.
    Vacío o no numérico → None. Numérico → acotado a [1, max_quantity].
    """
    max_quantity = max_quantity or settings.CART_MAX_QUANTITY
    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        value = int(Decimal(text))
    except (InvalidOperation, ValueError, OverflowError):
        return None
    return max(1, min(value, max_quantity))


class Cart:
    def __init__(
        self,
        items: list[CartLine] | None = None,
        max_items: int | None = None,
        max_quantity: int | None = None,
    ):
        self.max_items = max_items or settings.CART_MAX_ITEMS
        self.max_quantity = max_quantity or settings.CART_MAX_QUANTITY
        self._items: list[CartLine] = [i.model_copy() for i in items or []]

    @property
    def items(self) -> list[CartLine]:
        return list(self._items)

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self.max_items

    @property
    def total(self) -> Decimal:
        return sum((i.subtotal for i in self._items), Decimal("0.00"))

    def contains(self, service_type_id: int) -> bool:
        return any(i.service_type_id == service_type_id for i in self._items)

    def add(self, service_type: ServiceTypeResponse | None, quantity) -> CartLine:
        """Agrega una línea o lanza CartError sin tocar el carrito."""
        if service_type is None:
            raise CartError(MISSING_SERVICE)
        qty = parse_quantity(quantity, self.max_quantity)
        if qty is None:
            raise CartError(INVALID_QUANTITY)
        if self.contains(service_type.service_type_id):
            raise CartError(DUPLICATE_SERVICE)
        if self.is_full:
            raise CartError(self._limit_message())

        unit_price = Decimal(service_type.unit_price or 0)
        line = CartLine(
            service_type_id=service_type.service_type_id,
            service_name=service_type.service_name or "",
            quantity=qty,
            unit_price=unit_price,
            subtotal=unit_price * qty,
        )
        self._items.append(line)
        return line

    def validate(self) -> None:
        """
        Revisa un carrito recibido del cliente con las mismas reglas que add().
        Lanza CartError en la primera línea que no cumple.
        """
        if len(self._items) > self.max_items:
            raise CartError(self._limit_message())
        seen: set[int] = set()
        for line in self._items:
            if line.service_type_id < 1:
                raise CartError(MISSING_SERVICE)
            if line.service_type_id in seen:
                raise CartError(DUPLICATE_SERVICE)
            if not 1 <= line.quantity <= self.max_quantity:
                raise CartError(INVALID_QUANTITY)
            seen.add(line.service_type_id)

    def _limit_message(self) -> str:
        return f"Has alcanzado el límite máximo de {self.max_items} servicios por solicitud."

    def remove(self, service_type_id: int) -> None:
        self._items = [i for i in self._items if i.service_type_id != service_type_id]

    def payload(self) -> list[RequestItemIn]:
        return [
            RequestItemIn(service_type_id=i.service_type_id, quantity=i.quantity)
            for i in self._items
        ]

    def available_options(self, service_types: list[ServiceTypeResponse]) -> list[CartOption]:
        """Catálogo con los tipos ya agregados deshabilitados (todos, si el carrito está lleno)."""
        full = self.is_full
        return [
            CartOption(
                service_type_id=st.service_type_id,
                service_name=st.service_name or "",
                unit_price=Decimal(st.unit_price or 0),
                disabled=full or self.contains(st.service_type_id),
            )
            for st in service_types
        ]

    def view(self, service_types: list[ServiceTypeResponse] | None = None) -> CartView:
        return CartView(
            items=self.items,
            total_estimated=self.total,
            count=len(self._items),
            max_items=self.max_items,
            is_full=self.is_full,
            options=self.available_options(service_types or []),
        )
