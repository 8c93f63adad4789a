"""
Car inventory schemas: the status enumeration, the stored record and the
request body accepted by create/update.

Status is serialized by its label ("in stock"), never by ordinal, both in JSON
and in the `status` column.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator


class CarStatus(str, Enum):
    ON_THE_WAY = "on the way"
    IN_STOCK = "in stock"
    SOLD = "sold"
    WITHDRAWN_FROM_SALE = "withdrawn from sale"

    @classmethod
    def from_label(cls, label: str) -> CarStatus:
        """
        Decode a status label. Unknown labels raise ValueError instead of
        falling back to the first variant.
        """
        key = (label or "").strip().lower()
        status = _STATUS_BY_LABEL.get(key)
        if status is None:
            raise ValueError(f"Unknown car status label: {label!r}")
        return status

    @property
    def label(self) -> str:
        return self.value


# Labels stored by the previous (Russian-language) deployment; read-only.
_LEGACY_LABELS = {
    "в пути": CarStatus.ON_THE_WAY,
    "на складе": CarStatus.IN_STOCK,
    "продан": CarStatus.SOLD,
    "снят с продажи": CarStatus.WITHDRAWN_FROM_SALE,
}

_STATUS_BY_LABEL: dict[str, CarStatus] = {
    **_LEGACY_LABELS,
    **{status.value: status for status in CarStatus},
}

DEFAULT_STATUS = CarStatus.ON_THE_WAY

# price and mileage are BIGINT columns.
MAX_INT64 = 2**63 - 1

Int64 = Annotated[StrictInt, Field(le=MAX_INT64)]


def _status_from_input(value: Any) -> Any:
    if value is None:
        return DEFAULT_STATUS
    if isinstance(value, CarStatus):
        return value
    if not isinstance(value, str):
        raise ValueError("status must be a label string")
    return CarStatus.from_label(value)


class CarModel(BaseModel):
    id: int
    brand: str
    model: str
    price: int
    status: CarStatus
    mileage: int

    @field_validator("status", mode="before")
    @classmethod
    def _decode_status(cls, value: Any) -> Any:
        return _status_from_input(value)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> CarModel:
        return cls(
            id=int(row["id"]),
            brand=str(row["brand"]),
            model=str(row["model"]),
            price=int(row["price"]),
            status=CarStatus.from_label(str(row["status"])),
            mileage=int(row["mileage"]),
        )


class CarPayload(BaseModel):
    """
    Body of POST /cars and PUT /cars/{id}.

    Unknown keys are ignored; missing (or null) keys fall back to the zero value
    of their type. Only price/mileage non-negativity is enforced, by the store.
    """

    brand: StrictStr = ""
    model: StrictStr = ""
    price: Int64 = 0
    status: CarStatus = DEFAULT_STATUS
    mileage: Int64 = 0

    @field_validator("brand", "model", mode="before")
    @classmethod
    def _null_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("price", "mileage", mode="before")
    @classmethod
    def _null_number(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _decode_status(cls, value: Any) -> Any:
        return _status_from_input(value)
