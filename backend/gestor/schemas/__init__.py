"""
Pydantic Schemas for API Validation
"""
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from typing import List, Optional, Literal
from datetime import datetime, date
from decimal import Decimal


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


# ==================== AUTH SCHEMAS ====================

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = Field(None, max_length=255)


class UserResponse(BaseModel):
    id: int
    email: EmailStr
    full_name: Optional[str] = None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ==================== CUSTOMER SCHEMAS ====================

class CustomerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    tax_id: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email(cls, value):
        return _blank_to_none(value)


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(CustomerBase):
    """Edit form: every field is written back"""
    pass


class CustomerResponse(CustomerBase):
    id: int
    user_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ==================== PRODUCT SCHEMAS ====================

class VariantBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price_modifier: Decimal = Field(Decimal("0.00"), decimal_places=2)
    sku: Optional[str] = Field(None, max_length=100)
    stock_quantity: Optional[int] = None


class VariantCreate(VariantBase):
    pass


class VariantResponse(VariantBase):
    id: int
    product_id: int

    model_config = ConfigDict(from_attributes=True)


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    base_price: Decimal = Field(..., ge=0, decimal_places=2)
    is_service: bool = False
    active: bool = True


class ProductCreate(ProductBase):
    variants: List[VariantCreate] = []


class ProductUpdate(ProductBase):
    """Edit form: fields are overwritten and the variant set is replaced"""
    variants: List[VariantCreate] = []


class ProductResponse(ProductBase):
    id: int
    user_id: int
    created_at: datetime
    variants: List[VariantResponse] = []

    model_config = ConfigDict(from_attributes=True)


# ==================== LINE ITEM SCHEMAS ====================

class LineItemCreate(BaseModel):
    product_id: Optional[int] = None
    variant_id: Optional[int] = None
    quantity: int = Field(default=1, ge=1)
    unit_price: Optional[Decimal] = Field(None, decimal_places=2, description="Defaults to the resolved product/variant price")
    description: Optional[str] = Field(None, max_length=500)


class LineItemResponse(BaseModel):
    id: int
    product_id: Optional[int]
    variant_id: Optional[int]
    description: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal

    model_config = ConfigDict(from_attributes=True)


# ==================== QUOTE SCHEMAS ====================

class QuoteCreate(BaseModel):
    customer_id: Optional[int] = None
    quote_number: Optional[str] = Field(None, max_length=50)
    issue_date: Optional[date] = None
    valid_until: Optional[date] = None
    notes: Optional[str] = None
    items: List[LineItemCreate] = []


class QuoteStatusUpdate(BaseModel):
    status: Literal["approved", "rejected"]


class QuoteResponse(BaseModel):
    id: int
    quote_number: str
    customer_id: Optional[int]
    issue_date: date
    valid_until: date
    total_amount: Decimal
    status: str
    notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class QuoteWithItems(QuoteResponse):
    items: List[LineItemResponse] = []


# ==================== RECEIVABLE / PAYABLE SCHEMAS ====================

class ReceivableBase(BaseModel):
    customer_id: Optional[int] = None
    sale_id: Optional[int] = None
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    due_date: date
    notes: Optional[str] = None


class ReceivableCreate(ReceivableBase):
    pass


class ReceivableUpdate(ReceivableBase):
    pass


class ReceivableResponse(ReceivableBase):
    id: int
    status: str
    paid_date: Optional[date] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PayableBase(BaseModel):
    supplier_name: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    due_date: date
    category: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class PayableCreate(PayableBase):
    pass


class PayableUpdate(PayableBase):
    pass


class PayableResponse(PayableBase):
    id: int
    status: str
    paid_date: Optional[date] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SettleRequest(BaseModel):
    paid_date: Optional[date] = None


# ==================== SALE SCHEMAS ====================

class SaleCreate(BaseModel):
    customer_id: Optional[int] = None
    sale_number: Optional[str] = Field(None, max_length=50)
    sale_date: Optional[date] = None
    payment_method: Optional[str] = Field(None, max_length=50)
    payment_type: Literal["total", "partial"] = "total"
    paid_amount: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    notes: Optional[str] = None
    items: List[LineItemCreate] = []


class SaleResponse(BaseModel):
    id: int
    sale_number: str
    customer_id: Optional[int]
    quote_id: Optional[int] = None
    sale_date: date
    total_amount: Decimal
    payment_method: Optional[str] = None
    payment_status: str
    notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SaleWithItems(SaleResponse):
    items: List[LineItemResponse] = []
    receivables: List[ReceivableResponse] = []


# ==================== TRANSACTION SCHEMAS ====================

class TransactionCreate(BaseModel):
    type: Literal["income", "expense"]
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    description: str = Field(..., min_length=1, max_length=500)
    category: Optional[str] = Field(None, max_length=100)
    transaction_date: Optional[date] = None
    sale_id: Optional[int] = None


class TransactionResponse(BaseModel):
    id: int
    type: str
    amount: Decimal
    description: str
    category: Optional[str] = None
    transaction_date: date
    sale_id: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionSummary(BaseModel):
    income: Decimal
    expense: Decimal
    net: Decimal


# ==================== STORE SETTINGS SCHEMAS ====================

class StoreSettingsBase(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    tax_id: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    logo_url: Optional[str] = Field(None, max_length=500)

    @field_validator("email", mode="before")
    @classmethod
    def empty_email(cls, value):
        return _blank_to_none(value)


class StoreSettingsUpdate(StoreSettingsBase):
    pass


class StoreSettingsResponse(StoreSettingsBase):
    id: int
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ==================== DASHBOARD SCHEMAS ====================

class FinancialSummaryResponse(BaseModel):
    revenue: Decimal
    expenses: Decimal
    balance: Decimal


class DashboardStats(FinancialSummaryResponse):
    total_customers: int
    total_products: int
    pending_quotes: int
    total_sales: int


# ==================== COMMON ====================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
