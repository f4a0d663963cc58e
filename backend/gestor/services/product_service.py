"""
Product Service - Catalog of products, services and their variants
"""
from typing import Optional, List, Iterable
from sqlalchemy.orm import Session, selectinload
from gestor.models import Product, ProductVariant, QuoteItem, SaleItem
from gestor.schemas import ProductCreate, ProductUpdate, VariantCreate, LineItemCreate
from gestor.services.pricing import LineItemAccumulator


class ProductService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, product_id: int, user_id: int) -> Optional[Product]:
        return self.db.query(Product).options(
            selectinload(Product.variants)
        ).filter(
            Product.id == product_id,
            Product.user_id == user_id
        ).first()

    def get_all(self, user_id: int, active_only: bool = False) -> List[Product]:
        query = self.db.query(Product).options(
            selectinload(Product.variants)
        ).filter(Product.user_id == user_id)
        if active_only:
            query = query.filter(Product.active == True)
        return query.order_by(Product.name).all()

    def count(self, user_id: int) -> int:
        return self.db.query(Product).filter(Product.user_id == user_id).count()

    def create(self, product_data: ProductCreate, user_id: int) -> Product:
        product = Product(
            **product_data.model_dump(exclude={"variants"}),
            user_id=user_id
        )
        self.db.add(product)
        self.db.flush()

        self._insert_variants(product, product_data.variants)
        self.db.flush()
        return product

    def update(self, product_id: int, user_id: int, product_data: ProductUpdate) -> Optional[Product]:
        product = self.get_by_id(product_id, user_id)
        if not product:
            return None

        for key, value in product_data.model_dump(exclude={"variants"}).items():
            setattr(product, key, value)

        self.replace_variants(product, product_data.variants)
        return product

    def replace_variants(self, product: Product, variants: Iterable[VariantCreate]) -> List[ProductVariant]:
        """Full replace: every persisted variant is deleted and the given set inserted.

        Line items that pointed at a removed variant keep their description and
        price snapshot; only their variant reference is cleared.
        """
        old_ids = [variant.id for variant in product.variants]
        if old_ids:
            self._detach_line_items(QuoteItem.variant_id, old_ids)
            self._detach_line_items(SaleItem.variant_id, old_ids)

        product.variants.clear()
        self.db.flush()

        new_variants = self._insert_variants(product, variants)
        self.db.flush()
        return new_variants

    def delete(self, product_id: int, user_id: int) -> bool:
        product = self.get_by_id(product_id, user_id)
        if not product:
            return False

        variant_ids = [variant.id for variant in product.variants]
        if variant_ids:
            self._detach_line_items(QuoteItem.variant_id, variant_ids)
            self._detach_line_items(SaleItem.variant_id, variant_ids)
        self._detach_line_items(QuoteItem.product_id, [product.id])
        self._detach_line_items(SaleItem.product_id, [product.id])

        self.db.delete(product)
        self.db.flush()
        return True

    def get_variant(self, product: Product, variant_id: int) -> Optional[ProductVariant]:
        return next((v for v in product.variants if v.id == variant_id), None)

    def compose_items(self, item_requests: Iterable[LineItemCreate], user_id: int,
                      active_only: bool = False) -> LineItemAccumulator:
        """Build the line items of a document from the products owned by ``user_id``"""
        accumulator = LineItemAccumulator()
        for request in item_requests:
            product = None
            if request.product_id is not None:
                product = self.get_by_id(request.product_id, user_id)
                if product is None:
                    raise ValueError("Produto não encontrado")
                if active_only and not product.active:
                    raise ValueError(f"Produto inativo: {product.name}")

            variant = None
            if request.variant_id is not None and product is not None:
                variant = self.get_variant(product, request.variant_id)
                if variant is None:
                    raise ValueError("Variação não encontrada para o produto selecionado")

            accumulator.add(
                product,
                variant,
                quantity=request.quantity,
                unit_price=request.unit_price,
                description=request.description,
            )
        return accumulator

    def _insert_variants(self, product: Product, variants: Iterable[VariantCreate]) -> List[ProductVariant]:
        created = []
        for variant_data in variants:
            variant = ProductVariant(**variant_data.model_dump())
            product.variants.append(variant)
            created.append(variant)
        return created

    def _detach_line_items(self, column, ids: List[int]):
        model = column.class_
        self.db.query(model).filter(column.in_(ids)).update(
            {column: None}, synchronize_session=False
        )
