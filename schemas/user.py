from schemas.imports import *


class LoginRequest(BaseModel):
    token: Optional[str] = None


class UserSummary(BaseModel):
    id: str
    email: str
    role: Role


class UserMe(UserSummary):
    created_at: datetime


class LoginResponse(BaseModel):
    success: bool = True
    user: UserSummary


class MeResponse(BaseModel):
    success: bool = True
    user: UserMe


class UserOut(BaseModel):
    id: str
    email: str
    role: Role
    firebase_uid: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class RoleUpdate(BaseModel):
    role: str


class AdminSetupRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: Optional[str] = None
    password: Optional[str] = None
