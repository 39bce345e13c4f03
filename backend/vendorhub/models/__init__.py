# Importing every model registers it with Base.metadata and lets the
# string-based relationship() targets resolve.
from vendorhub.models.firm import Firm
from vendorhub.models.product import Product
from vendorhub.models.vendor import Vendor, vendor_firms

__all__ = ["Firm", "Product", "Vendor", "vendor_firms"]
