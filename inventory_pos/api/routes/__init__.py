"""API route modules."""

from inventory_pos.api.routes.clients import router as clients_router
from inventory_pos.api.routes.health import router as health_router
from inventory_pos.api.routes.inventory import router as inventory_router
from inventory_pos.api.routes.parties import customers_router, suppliers_router
from inventory_pos.api.routes.products import router as products_router
from inventory_pos.api.routes.purchases import router as purchases_router
from inventory_pos.api.routes.sales import router as sales_router
from inventory_pos.api.routes.variants import router as variants_router

__all__ = [
    "health_router",
    "clients_router",
    "suppliers_router",
    "customers_router",
    "variants_router",
    "products_router",
    "purchases_router",
    "sales_router",
    "inventory_router",
]
