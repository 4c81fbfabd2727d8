"""User resolution — get-or-create by username for template writes."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from workflow_catalog.config import settings
from workflow_catalog.models import User

logger = logging.getLogger(__name__)


async def _user_id_by_username(db: AsyncSession, username: str) -> int | None:
    result = await db.execute(select(User.id).where(User.username == username))
    return result.scalar_one_or_none()


def resolve_username(doc: Any) -> str:
    """Pick the username a write is attributed to.

    Without ``trust_payload_username`` every write lands on the configured
    canonical user and the payload's ``username`` is ignored.
    """
    if settings.trust_payload_username and isinstance(doc, dict):
        username = doc.get("username")
        if isinstance(username, str) and username:
            return username
    return settings.default_username


async def get_or_create_user(
    db: AsyncSession, doc: Any, username: str | None = None
) -> int:
    """Return the id of the user ``username``, creating it from ``doc`` if needed.

    Returns 0 when ``doc`` is not an object. An existing row is reused as-is;
    profile fields in ``doc`` only matter the first time.
    """
    if not isinstance(doc, dict):
        logger.warning("get_or_create_user: user document is not an object")
        return 0

    username = username or resolve_username(doc)
    user_id = await _user_id_by_username(db, username)
    if user_id:
        return user_id

    name = doc.get("name")
    bio = doc.get("bio")
    avatar = doc.get("avatar")
    links = doc.get("links")
    stmt = insert(User).values(
        name=name if isinstance(name, str) else username,
        username=username,
        bio=bio if isinstance(bio, str) else "",
        verified=doc.get("verified") is True,
        links=links if links is not None else [],
        avatar=avatar if isinstance(avatar, str) else "",
    )
    try:
        result = await db.execute(stmt)
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("User '%s' created concurrently, reselecting: %s", username, exc.orig)
        return await _user_id_by_username(db, username) or 0

    user_id = result.inserted_primary_key[0]
    logger.info("Created user '%s' (id=%d)", username, user_id)
    return user_id
