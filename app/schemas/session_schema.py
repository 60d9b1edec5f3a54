from pydantic import BaseModel, Field

from domain.entities import Role


class ProfilePayload(BaseModel):
    """Profile as stored client-side; validated before it becomes a domain Profile."""
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    role: Role
