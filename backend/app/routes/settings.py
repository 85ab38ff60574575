"""Endpoints for viewing and updating site-wide settings."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.acl import ROLE_ADMIN
from app.database import get_session
from app.models import User
from app.auth import require_role
from app.schemas import SettingsRead, SettingsUpdate
from app.crud import get_settings, save_settings

router = APIRouter(prefix="/settings", tags=["settings"])


def _to_read(settings) -> SettingsRead:
    return SettingsRead(
        site_name=settings.site_name,
        default_passing_score=settings.default_passing_score,
        public_registration_disabled=settings.public_registration_disabled,
    )


@router.get("/", response_model=SettingsRead)
async def read_settings(db: AsyncSession = Depends(get_session)):
    """Retrieve the current configuration values."""
    return _to_read(await get_settings(db))


@router.put("/", response_model=SettingsRead)
async def update_settings(
    data: SettingsUpdate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    """Update settings; only admins may change configuration."""
    settings = await get_settings(db)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(settings, field, value)
    return _to_read(await save_settings(db, settings))
