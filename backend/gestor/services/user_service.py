"""
User Service - Business Logic for User Operations
"""
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from gestor.models import User
from gestor.schemas import SignupRequest
from gestor.core.security import get_password_hash, verify_password


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def create(self, signup_data: SignupRequest) -> User:
        if self.get_by_email(signup_data.email):
            raise ValueError("Email já cadastrado")

        user = User(
            email=signup_data.email.lower(),
            hashed_password=get_password_hash(signup_data.password),
            full_name=signup_data.full_name,
        )
        self.db.add(user)
        self.db.flush()
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            return None
        user.last_login = datetime.utcnow()
        return user
