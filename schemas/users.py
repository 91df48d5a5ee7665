from pydantic import ConfigDict

from schemas.base import WireModel


class Identity(WireModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    display_name: str
    color: str


class UsersResponse(WireModel):
    count: int
    users: list[Identity]
