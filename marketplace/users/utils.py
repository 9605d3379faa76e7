"""
User store: profiles, embedded warning history and account deactivation.
"""

from typing import List, Optional
from marketplace import storage
from marketplace.users import schemas

USERS_FILE = storage.collection_path("users")


def load_users() -> List[dict]:
    return storage.load_collection(USERS_FILE)


def save_users(users: List[dict]) -> None:
    with storage.locked_collection(USERS_FILE) as current:
        current[:] = users


def add_user(user_data: schemas.UserCreate) -> schemas.User:
    new_user = schemas.User(
        id=storage.new_id(),
        name=user_data.name,
        email=user_data.email.lower(),
        role=user_data.role,
        created_at=storage.utcnow(),
    )
    with storage.locked_collection(USERS_FILE) as users:
        users.append(new_user.model_dump(mode="json", exclude={"warning_count"}))
    return new_user


def get_user_by_id(user_id: str) -> Optional[schemas.User]:
    user = storage.find_by_id(load_users(), user_id)
    return schemas.User(**user) if user else None


def append_warning(user_id: str, warning: schemas.WarningEntry) -> Optional[schemas.User]:
    """Append a warning to the user's history; warnings are never removed."""
    with storage.locked_collection(USERS_FILE) as users:
        user = storage.find_by_id(users, user_id)
        if not user:
            return None
        user.setdefault("warnings", []).append(warning.model_dump())
    return schemas.User(**user)


def deactivate_user(user_id: str) -> Optional[schemas.User]:
    with storage.locked_collection(USERS_FILE) as users:
        user = storage.find_by_id(users, user_id)
        if not user:
            return None
        user["is_active"] = False
    return schemas.User(**user)


def find_active_users_with_warnings() -> List[schemas.User]:
    """Active users whose warning list is non-empty."""
    return [schemas.User(**u) for u in load_users() if u.get("is_active", True) and u.get("warnings")]
