# Importing every model registers its table on Base.metadata
from app.models.users import User
from app.models.clients import Client
from app.models.products import Product
from app.models.sales import Sale
from app.models.sale_items import SaleItem
from app.models.purchases import Purchase
from app.models.purchase_items import PurchaseItem
from app.models.audit_events import AuditEvent

__all__ = [
    "User",
    "Client",
    "Product",
    "Sale",
    "SaleItem",
    "Purchase",
    "PurchaseItem",
    "AuditEvent",
]
