"""AI tool catalog, unlocked by completing mandatory training."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.acl import ROLE_ADMIN, is_admin
from app.auth import get_current_user, require_role
from app.database import get_session
from app.exceptions import CatalogLockedError
from app.models import Service, User
from app.schemas import ServiceCreate, ServiceRead
from app.crud import create_service, evaluate_mandatory_gate, list_active_services

router = APIRouter(prefix="/services", tags=["services"])


async def require_catalog_access(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> User:
    """Admins always pass; everyone else must finish their mandatory courses."""
    if is_admin(current_user.role):
        return current_user
    gate = await evaluate_mandatory_gate(db, current_user.id, current_user.role)
    if not gate.can_access_catalog:
        raise CatalogLockedError(gate.total_mandatory - gate.completed_mandatory)
    return current_user


@router.get("/", response_model=list[ServiceRead])
async def read_services(
    category: str | None = None,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_catalog_access),
):
    return await list_active_services(db, category)


@router.post("/", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
async def create_service_route(
    data: ServiceCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    values = data.model_dump(mode="json")
    return await create_service(db, Service(**values))
