from typing import Optional

from pydantic import BaseModel


class SignupIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class SigninIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
