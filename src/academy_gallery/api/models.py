"""Request payload models."""

from pydantic import BaseModel, ConfigDict


class ConnectRequest(BaseModel):
    """Gallery connection form payload."""

    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    password: str | None = None
