"""
CART SYNC

Client-side cart count synchronization for the storefront:
mutation actions emit optimistic signals on a channel, the badge
reduces them and reconciles against GET /api/cart/count/.
"""
