import hashlib
import logging
import secrets
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..models.user import ApiKey, TeamUser, User, ROLE_USER
from ..models.website import Website

logger = logging.getLogger(__name__)


def generate_api_key() -> str:
    """Generate a new secure API key"""
    return secrets.token_urlsafe(32)


def hash_api_key(api_key: str) -> str:
    return hashlib.sha256(api_key.encode("utf-8")).hexdigest()


def get_user_by_api_key(db: Session, api_key: str) -> Optional[User]:
    return (
        db.query(User)
        .join(ApiKey, ApiKey.user_id == User.id)
        .filter(ApiKey.key_hash == hash_api_key(api_key), User.deleted_at.is_(None))
        .first()
    )


def get_website(db: Session, website_id: str) -> Optional[Website]:
    return (
        db.query(Website)
        .filter(Website.id == website_id, Website.deleted_at.is_(None))
        .first()
    )


def get_website_by_share_id(db: Session, share_id: str) -> Optional[Website]:
    return (
        db.query(Website)
        .filter(Website.share_id == share_id, Website.deleted_at.is_(None))
        .first()
    )


def is_team_member(db: Session, team_id: str, user_id: str) -> bool:
    return (
        db.query(TeamUser)
        .filter(TeamUser.team_id == team_id, TeamUser.user_id == user_id)
        .first()
        is not None
    )


def get_or_create_user(db: Session, username: str, role: str = ROLE_USER) -> User:
    user = db.query(User).filter(User.username == username).first()
    if not user:
        user = User(username=username, role=role)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"✅ Created user: {username}")
    return user


def create_api_key(db: Session, user: User, name: Optional[str] = None) -> str:
    """Issue a key for ``user``. Only the hash is stored; the key is returned once."""
    api_key = generate_api_key()
    db.add(ApiKey(user_id=user.id, name=name, key_hash=hash_api_key(api_key)))
    db.commit()
    logger.info(f"✅ Added API key for: {user.username}")
    return api_key


def list_api_keys(db: Session) -> List[Tuple[ApiKey, User]]:
    return (
        db.query(ApiKey, User)
        .join(User, ApiKey.user_id == User.id)
        .order_by(ApiKey.created_at.asc())
        .all()
    )
