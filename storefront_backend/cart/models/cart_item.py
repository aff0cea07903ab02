# cart/models/cart_item.py

"""
CART ITEM MODEL

Purpose:
- Store a shopper's cart line items.
- product_id references the upstream catalog (not a local FK).
- Quantity is integer-only and validated.

Rules:
- One row per product per user (DB constraint). Re-adds merge quantities.
- Quantity must be >= 1.
- Deleting a user deletes their cart.
"""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

User = settings.AUTH_USER_MODEL


class CartItem(models.Model):
    """
    Individual line item in a shopper's cart.

    RULES:
    - Created ONLY via the cart store service
    - One product per user
    """

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="cart_items",
    )

    product_id = models.PositiveIntegerField(
        db_index=True,
        help_text="Upstream catalog product id",
    )

    quantity = models.PositiveIntegerField(
        default=1,
        help_text="Must be at least 1",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "product_id"],
                name="unique_product_per_user_cart",
            )
        ]

    def clean(self):
        if self.quantity is None or int(self.quantity) < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1"})

        if self.product_id is None or int(self.product_id) < 1:
            raise ValidationError({"product_id": "Product ID is required"})

    def save(self, *args, **kwargs):
        # Uniqueness is enforced by the DB constraint (and handled by the service).
        self.full_clean(validate_unique=False, validate_constraints=False)
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"product {self.product_id} x {self.quantity}"
