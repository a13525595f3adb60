from .business_repository import BusinessRepository
from .counterparty_repository import CustomerRepository, VendorRepository
from .filing_repository import FilingRepository
from .invoice_repository import InvoiceRepository
from .payment_repository import PaymentRepository
from .purchase_repository import PurchaseRepository

__all__ = [
    "BusinessRepository",
    "CustomerRepository",
    "VendorRepository",
    "InvoiceRepository",
    "PurchaseRepository",
    "FilingRepository",
    "PaymentRepository",
]
