# catalog/products.py

"""
CATALOG DOMAIN OBJECTS

Validated, immutable views of upstream catalog data.
Built only through from_payload(), which runs the boundary serializers.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from catalog.serializers import ProductSerializer


@dataclass(frozen=True)
class Rating:
    rate: float
    count: int


@dataclass(frozen=True)
class Product:
    """
    One upstream product.

    - id: upstream integer id (what cart rows reference as product_id)
    - price: unit price as published upstream
    """

    id: int
    title: str
    price: float
    description: str = ""
    category: str = ""
    image: str = ""
    rating: Rating | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> Product:
        """
        Raises rest_framework.exceptions.ValidationError on a bad shape;
        the upstream client turns that into UpstreamFormatError.
        """
        serializer = ProductSerializer(data=payload)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        rating = data.pop("rating", None)
        return cls(
            rating=Rating(rate=rating["rate"], count=rating["count"]) if rating else None,
            **data,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
