from fastapi import APIRouter, Depends
from marketplace.authentication.security import get_current_user
from marketplace.authentication import schemas as auth_schemas
from marketplace.errors import NotFoundError
from marketplace.users import utils

router = APIRouter(prefix="/api/users", tags=["Users"])

# Own profile (warnings included so users can see where they stand)
@router.get("/me")
def get_my_profile(current_user: auth_schemas.TokenData = Depends(get_current_user)):
    """Return the current user's profile and warning history"""
    user = utils.get_user_by_id(current_user.user_id)
    if not user:
        raise NotFoundError("User not found")
    return {"success": True, "data": user}
