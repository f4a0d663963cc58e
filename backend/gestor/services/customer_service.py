"""
Customer Service - Business Logic for Customers
"""
from typing import Optional, List
from sqlalchemy.orm import Session
from gestor.models import Customer
from gestor.schemas import CustomerCreate, CustomerUpdate


class CustomerService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, customer_id: int, user_id: int) -> Optional[Customer]:
        return self.db.query(Customer).filter(
            Customer.id == customer_id,
            Customer.user_id == user_id
        ).first()

    def get_all(self, user_id: int, search: str = None) -> List[Customer]:
        query = self.db.query(Customer).filter(Customer.user_id == user_id)
        if search:
            query = query.filter(Customer.name.ilike(f"%{search}%"))
        return query.order_by(Customer.name).all()

    def count(self, user_id: int) -> int:
        return self.db.query(Customer).filter(Customer.user_id == user_id).count()

    def create(self, customer_data: CustomerCreate, user_id: int) -> Customer:
        customer = Customer(**customer_data.model_dump(), user_id=user_id)
        self.db.add(customer)
        self.db.flush()
        return customer

    def update(self, customer_id: int, user_id: int, customer_data: CustomerUpdate) -> Optional[Customer]:
        customer = self.get_by_id(customer_id, user_id)
        if not customer:
            return None

        for key, value in customer_data.model_dump().items():
            setattr(customer, key, value)

        self.db.flush()
        return customer

    def delete(self, customer_id: int, user_id: int) -> bool:
        """Hard delete; quotes, sales and receivables keep their rows with the reference cleared"""
        customer = self.get_by_id(customer_id, user_id)
        if not customer:
            return False

        self.db.delete(customer)
        self.db.flush()
        return True
