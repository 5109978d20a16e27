from typing import Optional

from pydantic import BaseModel


class AuthUser(BaseModel):
    id: str
    email: Optional[str] = None
