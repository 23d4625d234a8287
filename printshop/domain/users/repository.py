"""User repository - Database operations for users and roles"""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from ...models import Role, User


class UserRepository:
    """Repository for user and role database operations"""

    @staticmethod
    def get_users(db: Session) -> list[User]:
        return (
            db.query(User)
            .options(selectinload(User.roles).selectinload(Role.permissions))
            .order_by(User.name, User.email)
            .all()
        )

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        return (
            db.query(User)
            .options(selectinload(User.roles).selectinload(Role.permissions))
            .filter(User.id == user_id)
            .first()
        )

    @staticmethod
    def get_roles(db: Session) -> list[Role]:
        return db.query(Role).options(selectinload(Role.permissions)).order_by(Role.name).all()

    @staticmethod
    def get_roles_by_name(db: Session, names: list[str]) -> list[Role]:
        return db.query(Role).filter(Role.name.in_(names)).all()
