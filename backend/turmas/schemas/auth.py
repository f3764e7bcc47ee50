from uuid import UUID

from pydantic import BaseModel

from turmas.schemas.common import BaseSchema


class UserSummary(BaseSchema):
    id: UUID
    email: str | None
    full_name: str
    role: str
    is_active: bool
    permissions: list[str]


class RoutePermissionOut(BaseModel):
    path: str
    allowed: bool
    public: bool
