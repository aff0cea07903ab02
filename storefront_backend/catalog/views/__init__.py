from .catalog import CategoryListView, ProductDetailView, ProductListView

__all__ = [
    "ProductListView",
    "ProductDetailView",
    "CategoryListView",
]
