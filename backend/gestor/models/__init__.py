"""
SQLAlchemy Models for the store management system
"""
from datetime import datetime, date
from decimal import Decimal
from sqlalchemy import (
    Column, Integer, String, Text, Boolean, DateTime, Date, Numeric,
    ForeignKey, Index, CheckConstraint
)
from sqlalchemy.orm import relationship
import enum

from gestor.core.database import Base


# ==================== ENUMS ====================

class QuoteStatus(enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CONVERTED = "converted"


class PaymentStatus(enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class SettlementStatus(enum.Enum):
    """Status shared by receivables and payables"""
    PENDING = "pending"
    PAID = "paid"


class TransactionType(enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"


# ==================== CORE MODELS ====================

class User(Base):
    """User account; owner of every other row"""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    email = Column(String(255), nullable=False, unique=True)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    store_settings = relationship("StoreSettings", back_populates="user", uselist=False, cascade="all, delete-orphan")


class StoreSettings(Base):
    """Company profile printed on quotes and sales"""
    __tablename__ = 'store_settings'

    id = Column(Integer, primary_key=True)
    company_name = Column(String(255), nullable=False)
    tax_id = Column(String(50), nullable=True)  # CNPJ
    address = Column(Text, nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    logo_url = Column(String(500), nullable=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="store_settings")


# ==================== CRM MODELS ====================

class Customer(Base):
    """Customer"""
    __tablename__ = 'customers'

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    tax_id = Column(String(50), nullable=True)  # CPF/CNPJ
    address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    quotes = relationship("Quote", back_populates="customer", passive_deletes=True)
    sales = relationship("Sale", back_populates="customer", passive_deletes=True)
    receivables = relationship("AccountReceivable", back_populates="customer", passive_deletes=True)

    __table_args__ = (
        Index('ix_customers_user_id', 'user_id'),
        {'sqlite_autoincrement': True},
    )


# ==================== CATALOG MODELS ====================

class Product(Base):
    """Product or service"""
    # Ids are never reused, so a stale reference cannot resolve to a newer row
    __tablename__ = 'products'

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    base_price = Column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    is_service = Column(Boolean, default=False)
    active = Column(Boolean, default=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    variants = relationship(
        "ProductVariant", back_populates="product",
        cascade="all, delete-orphan", order_by="ProductVariant.id"
    )

    __table_args__ = (
        CheckConstraint('base_price >= 0', name='ck_products_base_price'),
        Index('ix_products_user_id', 'user_id'),
        {'sqlite_autoincrement': True},
    )


class ProductVariant(Base):
    """Named price modifier on a product (size, color, ...)"""
    __tablename__ = 'product_variants'

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    price_modifier = Column(Numeric(12, 2), default=Decimal("0.00"))
    sku = Column(String(100), nullable=True)
    stock_quantity = Column(Integer, nullable=True)
    product_id = Column(Integer, ForeignKey('products.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    product = relationship("Product", back_populates="variants")

    __table_args__ = (
        Index('ix_product_variants_product_id', 'product_id'),
        {'sqlite_autoincrement': True},
    )


# ==================== QUOTES ====================

class Quote(Base):
    """Quote (orçamento)"""
    __tablename__ = 'quotes'

    id = Column(Integer, primary_key=True)
    quote_number = Column(String(50), nullable=False)
    issue_date = Column(Date, nullable=False, default=date.today)
    valid_until = Column(Date, nullable=False)
    total_amount = Column(Numeric(12, 2), default=Decimal("0.00"))
    status = Column(String(20), default=QuoteStatus.PENDING.value)
    notes = Column(Text, nullable=True)
    customer_id = Column(Integer, ForeignKey('customers.id', ondelete='SET NULL'), nullable=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customer = relationship("Customer", back_populates="quotes")
    items = relationship("QuoteItem", back_populates="quote", cascade="all, delete-orphan", order_by="QuoteItem.id")
    sales = relationship("Sale", back_populates="quote", passive_deletes=True)

    __table_args__ = (
        Index('ix_quotes_user_id', 'user_id'),
        {'sqlite_autoincrement': True},
    )


class QuoteItem(Base):
    """Quote line item"""
    __tablename__ = 'quote_items'

    id = Column(Integer, primary_key=True)
    description = Column(String(500), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(12, 2), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)
    quote_id = Column(Integer, ForeignKey('quotes.id', ondelete='CASCADE'), nullable=False)
    product_id = Column(Integer, ForeignKey('products.id', ondelete='SET NULL'), nullable=True)
    variant_id = Column(Integer, ForeignKey('product_variants.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    quote = relationship("Quote", back_populates="items")


# ==================== SALES ====================

class Sale(Base):
    """Sale (venda)"""
    __tablename__ = 'sales'

    id = Column(Integer, primary_key=True)
    sale_number = Column(String(50), nullable=False)
    sale_date = Column(Date, nullable=False, default=date.today)
    total_amount = Column(Numeric(12, 2), default=Decimal("0.00"))
    payment_method = Column(String(50), nullable=True)
    payment_status = Column(String(20), default=PaymentStatus.PENDING.value)
    notes = Column(Text, nullable=True)
    customer_id = Column(Integer, ForeignKey('customers.id', ondelete='SET NULL'), nullable=True)
    quote_id = Column(Integer, ForeignKey('quotes.id', ondelete='SET NULL'), nullable=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customer = relationship("Customer", back_populates="sales")
    quote = relationship("Quote", back_populates="sales")
    items = relationship("SaleItem", back_populates="sale", cascade="all, delete-orphan", order_by="SaleItem.id")
    receivables = relationship("AccountReceivable", back_populates="sale", passive_deletes=True)

    __table_args__ = (
        Index('ix_sales_user_id', 'user_id'),
        {'sqlite_autoincrement': True},
    )


class SaleItem(Base):
    """Sale line item"""
    __tablename__ = 'sale_items'

    id = Column(Integer, primary_key=True)
    description = Column(String(500), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(12, 2), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)
    sale_id = Column(Integer, ForeignKey('sales.id', ondelete='CASCADE'), nullable=False)
    product_id = Column(Integer, ForeignKey('products.id', ondelete='SET NULL'), nullable=True)
    variant_id = Column(Integer, ForeignKey('product_variants.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    sale = relationship("Sale", back_populates="items")


# ==================== FINANCIAL ====================

class AccountReceivable(Base):
    """Money owed to the business by a customer"""
    __tablename__ = 'accounts_receivable'

    id = Column(Integer, primary_key=True)
    amount = Column(Numeric(12, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    paid_date = Column(Date, nullable=True)
    status = Column(String(20), default=SettlementStatus.PENDING.value)
    notes = Column(Text, nullable=True)
    customer_id = Column(Integer, ForeignKey('customers.id', ondelete='SET NULL'), nullable=True)
    sale_id = Column(Integer, ForeignKey('sales.id', ondelete='SET NULL'), nullable=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customer = relationship("Customer", back_populates="receivables")
    sale = relationship("Sale", back_populates="receivables")

    __table_args__ = (
        Index('ix_accounts_receivable_user_id', 'user_id'),
        Index('ix_accounts_receivable_sale_id', 'sale_id'),
        {'sqlite_autoincrement': True},
    )


class AccountPayable(Base):
    """Money owed by the business to a supplier"""
    __tablename__ = 'accounts_payable'

    id = Column(Integer, primary_key=True)
    supplier_name = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    paid_date = Column(Date, nullable=True)
    category = Column(String(100), nullable=True)
    status = Column(String(20), default=SettlementStatus.PENDING.value)
    notes = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index('ix_accounts_payable_user_id', 'user_id'),
        {'sqlite_autoincrement': True},
    )


class Transaction(Base):
    """Cash entry or exit"""
    __tablename__ = 'transactions'

    id = Column(Integer, primary_key=True)
    type = Column(String(20), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String(500), nullable=False)
    category = Column(String(100), nullable=True)
    transaction_date = Column(Date, nullable=False, default=date.today)
    sale_id = Column(Integer, ForeignKey('sales.id', ondelete='SET NULL'), nullable=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index('ix_transactions_user_id', 'user_id'),
        {'sqlite_autoincrement': True},
    )


# ==================== EXPORT ALL MODELS ====================

__all__ = [
    # Enums
    'QuoteStatus', 'PaymentStatus', 'SettlementStatus', 'TransactionType',
    # Core
    'User', 'StoreSettings',
    # CRM
    'Customer',
    # Catalog
    'Product', 'ProductVariant',
    # Quotes
    'Quote', 'QuoteItem',
    # Sales
    'Sale', 'SaleItem',
    # Financial
    'AccountReceivable', 'AccountPayable', 'Transaction',
]
