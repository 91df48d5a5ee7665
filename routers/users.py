from typing import Optional

from fastapi import APIRouter, Query, Request

from constants import RANDOM_USERS_COUNT
from logging_config import get_logger
from schemas.users import UsersResponse

logger = get_logger(__name__)

users_router = APIRouter(prefix="/users", tags=["users"])


@users_router.get("/", response_model=UsersResponse, response_model_by_alias=True)
async def list_users(
    request: Request,
    q: Optional[str] = Query(None, description="Display name prefix; omit for a random sample"),
):
    identities = request.app.state.hub.identities
    if q:
        users = identities.search(q)
    else:
        users = identities.sample(RANDOM_USERS_COUNT)
    logger.debug(f"User listing q={q!r} returned {len(users)} users")
    return UsersResponse(count=len(users), users=users)
