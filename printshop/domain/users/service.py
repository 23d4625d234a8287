"""User service - Business logic for users, roles and role assignment"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Role, User
from .repository import UserRepository
from .schemas import UserRolesUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user management"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def get_users(self) -> list[User]:
        return self.repo.get_users(self.db)

    def get_user(self, user_id: int) -> User:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    def get_roles(self) -> list[Role]:
        return self.repo.get_roles(self.db)

    def update_user_roles(self, user_id: int, data: UserRolesUpdate) -> User:
        """Replace the user's role set with exactly the named roles"""
        user = self.get_user(user_id)
        names = sorted({role.value for role in data.roleNames})
        roles = self.repo.get_roles_by_name(self.db, names)
        missing = set(names) - {role.name for role in roles}
        if missing:
            raise HTTPException(status_code=400, detail=f"Unknown roles: {', '.join(sorted(missing))}")

        user.roles = roles
        self.db.commit()
        logger.info(f"✅ User {user.id} roles set to {names}")
        return self.get_user(user.id)
