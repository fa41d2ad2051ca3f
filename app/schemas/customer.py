"""
Schemas para clientes y direcciones.
Validación de nombres, email y celular peruano antes de llamar al backend.
"""

import re
from datetime import datetime

from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator

from app.models.states import EntityState, UIAction

NAME_REGEX = re.compile(r"^[A-Za-zñÑáéíóúÁÉÍÓÚ\s]*$")
PHONE_REGEX = re.compile(r"^9\d{8}$")


def _clean_name(v: str) -> str:
    cleaned = v.strip()
    if not cleaned:
        raise ValueError("Campo obligatorio")
    if not NAME_REGEX.match(cleaned):
        raise ValueError("Solo se permiten letras y espacios. No se permiten números.")
    return cleaned


def _clean_phone(v: str) -> str:
    cleaned = v.strip()
    if cleaned and not PHONE_REGEX.match(cleaned):
        raise ValueError("El teléfono debe tener 9 dígitos y empezar con 9.")
    return cleaned


# ── Dirección ────────────────────────────────────────


class AddressCreate(BaseModel):
    street: str = Field(..., min_length=1, max_length=200, description="Calle / dirección")
    zip_code: str = Field("", max_length=10)
    country: str = Field("Perú", max_length=60)
    department: str = Field(..., min_length=1, max_length=60)
    province: str = Field(..., min_length=1, max_length=60)
    district: str = Field(..., min_length=1, max_length=60)
    reference: str = Field("", max_length=200)

    @field_validator("street", "department", "province", "district")
    @classmethod
    def required_text(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Campo obligatorio")
        return cleaned

    @field_validator("zip_code", "country", "reference")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class AddressUpdate(BaseModel):
    street: str | None = None
    zip_code: str | None = None
    country: str | None = None
    department: str | None = None
    province: str | None = None
    district: str | None = None
    reference: str | None = None


class AddressResponse(BaseModel):
    address_id: int | None = Field(
        None, validation_alias=AliasChoices("address_id", "id")
    )
    street: str | None = None
    zip_code: str | None = None
    country: str | None = None
    department: str | None = None
    province: str | None = None
    district: str | None = None
    reference: str | None = None

    @property
    def full_address(self) -> str:
        parts = [self.street, self.district, self.province, self.zip_code]
        return ", ".join(p.strip() for p in parts if p and p.strip())


# ── Cliente ──────────────────────────────────────────


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone_number: str = Field("", max_length=9)

    @field_validator("name", "surname")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _clean_name(v)

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        return _clean_phone(v)


class CustomerCreate(CustomerBase):
    """Alta de cliente junto con su dirección."""
    address: AddressCreate


class CustomerUpdate(BaseModel):
    name: str | None = None
    surname: str | None = None
    email: EmailStr | None = None
    phone_number: str | None = None
    address: AddressUpdate | None = None
    address_id: int | None = None

    @field_validator("name", "surname")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _clean_name(v)

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _clean_phone(v)


class CustomerResponse(BaseModel):
    customer_id: int = Field(validation_alias=AliasChoices("customer_id", "id"))
    name: str | None = None
    surname: str | None = None
    email: str | None = None
    phone_number: str | None = None
    state: str = EntityState.ACTIVE.value
    address_id: int | None = None
    address: AddressResponse | None = None
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.name or ''} {self.surname or ''}".strip()

    @property
    def is_active(self) -> bool:
        return self.state == EntityState.ACTIVE


class CustomerRow(CustomerResponse):
    """Cliente con datos derivados para la tabla."""
    state_label: str
    actions: list[UIAction]
