from pydantic import BaseModel, EmailStr


class SignInRequest(BaseModel):
    email: EmailStr


class SignInResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class LogoutResponse(BaseModel):
    message: str
