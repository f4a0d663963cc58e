# API v1 Package
from gestor.api.v1 import auth, customers, products, quotes, sales, financial, dashboard, settings

__all__ = [
    'auth',
    'customers',
    'products',
    'quotes',
    'sales',
    'financial',
    'dashboard',
    'settings',
]
