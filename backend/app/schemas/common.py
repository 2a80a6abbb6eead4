from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


class StatusResponse(BaseModel):
    """Health probe response."""

    status: str
