from pydantic import BaseModel, ConfigDict


class ItemCreate(BaseModel):
    """Body of a create request. A client-supplied key is dropped."""

    model_config = ConfigDict(extra="ignore")

    value: str = ""


class Item(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class HealthResponse(BaseModel):
    status: str
    version: str
    items: int
