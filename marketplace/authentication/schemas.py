from pydantic import BaseModel
from enum import Enum
from typing import Optional

# USER ROLES
class UserRole(str, Enum):
    SHOPPER = "shopper"   # Reviews items, reports reviews/shops
    OWNER = "owner"       # Runs shops and their catalogues
    ADMIN = "admin"       # Moderates reports, removes users


# TOKEN DATA CONTRACT (what's embedded in the JWT)
class TokenData(BaseModel):
    user_id: str
    role: UserRole
    name: Optional[str] = None
