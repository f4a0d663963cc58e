"""
Pricing - unit price resolution and line item accumulation

The accumulator holds the items of one quote or sale while it is being
composed. Items are addressed by position: removing index ``i`` shifts every
later item down by one.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional


CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Two-place Decimal, rounded half up; every stored amount goes through here"""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def resolve_price(product, variant=None) -> Decimal:
    """Effective unit price: base price plus the variant's modifier, if any.

    A negative result is passed through unchanged.
    """
    price = to_money(product.base_price)
    if variant is not None:
        price += to_money(variant.price_modifier)
    return price


def describe(product, variant=None) -> str:
    """Snapshot description stored on the line item"""
    if variant is not None:
        return f"{product.name} - {variant.name}"
    return product.name


@dataclass
class LineItem:
    product_id: Optional[int]
    variant_id: Optional[int]
    description: str
    quantity: int
    unit_price: Decimal

    @property
    def total_price(self) -> Decimal:
        return self.quantity * self.unit_price


class LineItemAccumulator:
    EDITABLE_FIELDS = ("quantity", "unit_price", "description", "product", "variant")

    def __init__(self):
        self._items: List[LineItem] = []
        # Products backing each item, kept so a variant change can re-resolve the price
        self._products: List[object] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    @property
    def items(self) -> List[LineItem]:
        return list(self._items)

    def add(self, product, variant=None, quantity: int = 1, unit_price=None, description: str = None) -> LineItem:
        if product is None:
            raise ValueError("Selecione um produto")
        self._check_quantity(quantity)

        item = LineItem(
            product_id=getattr(product, "id", None),
            variant_id=getattr(variant, "id", None) if variant is not None else None,
            description=description or describe(product, variant),
            quantity=quantity,
            unit_price=to_money(unit_price) if unit_price is not None else resolve_price(product, variant),
        )
        self._items.append(item)
        self._products.append(product)
        return item

    def remove(self, index: int) -> LineItem:
        self._check_index(index)
        self._products.pop(index)
        return self._items.pop(index)

    def update_field(self, index: int, field: str, value) -> LineItem:
        self._check_index(index)
        item = self._items[index]

        if field == "quantity":
            self._check_quantity(value)
            item.quantity = value
        elif field == "unit_price":
            item.unit_price = to_money(value)
        elif field == "description":
            item.description = value
        elif field == "product":
            if value is None:
                raise ValueError("Selecione um produto")
            self._products[index] = value
            item.product_id = getattr(value, "id", None)
            item.variant_id = None
            item.unit_price = resolve_price(value)
            item.description = describe(value)
        elif field == "variant":
            product = self._products[index]
            item.variant_id = getattr(value, "id", None) if value is not None else None
            item.unit_price = resolve_price(product, value)
            item.description = describe(product, value)
        else:
            raise ValueError(f"Campo inválido: {field}")

        return item

    def total(self) -> Decimal:
        return sum((item.quantity * item.unit_price for item in self._items), Decimal("0.00"))

    def require_items(self, message: str = "Adicione pelo menos um item"):
        if not self._items:
            raise ValueError(message)

    def _check_index(self, index: int):
        if not 0 <= index < len(self._items):
            raise ValueError("Item não encontrado")

    @staticmethod
    def _check_quantity(quantity):
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError("Quantidade deve ser maior que zero")
