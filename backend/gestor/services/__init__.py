# Services Package
from gestor.services.user_service import UserService
from gestor.services.customer_service import CustomerService
from gestor.services.product_service import ProductService
from gestor.services.quote_service import QuoteService
from gestor.services.sales_service import SalesService
from gestor.services.financial_service import ReceivableService, PayableService, TransactionService
from gestor.services.dashboard_service import DashboardService
from gestor.services.settings_service import StoreSettingsService
from gestor.services.document_service import DocumentService

__all__ = [
    'UserService',
    'CustomerService',
    'ProductService',
    'QuoteService',
    'SalesService',
    'ReceivableService',
    'PayableService',
    'TransactionService',
    'DashboardService',
    'StoreSettingsService',
    'DocumentService',
]
