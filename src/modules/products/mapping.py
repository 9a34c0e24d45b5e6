"""Field-level mapping between product DTOs and the ``Product`` entity.

Rules:
- entity -> output DTO copies every field verbatim.
- create DTO -> entity never sets ``id``; stamps ``created_at`` (UTC);
  leaves ``updated_at`` empty.
- update DTO -> entity never sets ``id`` or ``created_at`` (the service
  overlays them from the stored record); stamps ``updated_at`` (UTC).
- ``name`` is trimmed; ``description``/``category``/``brand`` are trimmed,
  and stored as ``None`` when blank.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from django.utils import timezone

from modules.products.dtos import ProductOutputDTO
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.dtos import _ProductWriteDTO


def clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def _entity_from(dto: _ProductWriteDTO) -> Product:
    return Product(
        name=dto.name.strip(),
        description=clean_optional(dto.description),
        price=dto.price,
        stock_quantity=dto.stock_quantity,
        category=clean_optional(dto.category),
        brand=clean_optional(dto.brand),
        image_url=dto.image_url,
        is_active=dto.is_active,
    )


def from_create_dto(dto: CreateProductDTO) -> Product:
    product = _entity_from(dto)
    product.created_at = timezone.now()
    product.updated_at = None
    return product


def from_update_dto(dto: UpdateProductDTO) -> Product:
    product = _entity_from(dto)
    product.updated_at = timezone.now()
    return product


def to_output(product: Product) -> ProductOutputDTO:
    return ProductOutputDTO.from_entity(product)
