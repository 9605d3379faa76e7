from pydantic import BaseModel, Field, computed_field
from typing import List, Optional
from marketplace.authentication.schemas import UserRole

class WarningEntry(BaseModel):
    reason: str
    issued_by: str  # admin user id
    issued_at: str
    related_report: Optional[str] = None

class User(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole
    warnings: List[WarningEntry] = []
    is_active: bool = True
    created_at: Optional[str] = None

    @computed_field
    @property
    def warning_count(self) -> int:
        return len(self.warnings)

class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str
    role: UserRole = UserRole.SHOPPER
