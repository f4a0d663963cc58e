"""Small-business management backend: customers, catalog, quotes, sales and finances."""

__version__ = "1.0.0"
