"""User router - FastAPI endpoints for users, roles and user management"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_permission
from ...database import get_db
from ...models import User
from .schemas import RoleResponse, UserResponse, UserRolesUpdate
from .service import UserService

router = APIRouter(prefix="/users", tags=["Users"])
roles_router = APIRouter(prefix="/roles", tags=["Roles"])
management_router = APIRouter(prefix="/user-management", tags=["User Management"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get("", response_model=list[UserResponse])
async def get_users(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.get_users()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.get_user(user_id)


@roles_router.get("", response_model=list[RoleResponse])
async def get_roles(
    current_user: User = Depends(require_permission("role_read")),
    service: UserService = Depends(get_user_service),
):
    """List roles with their permissions (Admin or role_read)"""
    return service.get_roles()


@management_router.get("/users", response_model=list[UserResponse])
async def get_all_users(
    current_user: User = Depends(require_permission("user_read")),
    service: UserService = Depends(get_user_service),
):
    return service.get_users()


@management_router.put("/users/{user_id}/roles", response_model=UserResponse)
async def update_user_roles(
    user_id: int,
    data: UserRolesUpdate,
    current_user: User = Depends(require_permission("user_update")),
    service: UserService = Depends(get_user_service),
):
    """Replace a user's roles"""
    return service.update_user_roles(user_id, data)
