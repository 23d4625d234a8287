"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ...schemas import ResponseModel
from ...statuses import RoleName


class PermissionResponse(ResponseModel):
    id: int
    name: str
    description: Optional[str] = None


class RoleResponse(ResponseModel):
    id: int
    name: str
    description: Optional[str] = None
    permissions: list[PermissionResponse] = []


class UserResponse(ResponseModel):
    id: int
    name: Optional[str] = None
    email: str
    role_names: list[str] = []
    permission_names: list[str] = []
    created_at: Optional[datetime] = None


class UserRolesUpdate(BaseModel):
    roleNames: list[RoleName]
