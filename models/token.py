from pydantic import BaseModel


class TokenResponse(BaseModel):
    success: bool = True
    token: str
