from django.contrib import admin

from .models import CartItem

# =====================================================
# CART ITEM ADMIN (READ-ONLY INSPECTION)
# =====================================================


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "product_id",
        "quantity",
        "created_at",
        "updated_at",
    )

    readonly_fields = (
        "id",
        "user",
        "product_id",
        "quantity",
        "created_at",
        "updated_at",
    )

    search_fields = ("user__email",)
    list_filter = ("created_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
