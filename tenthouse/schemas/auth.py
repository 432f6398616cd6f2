# tenthouse/schemas/auth.py
from pydantic import BaseModel

class LoginIn(BaseModel):
    username: str
    password: str

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class AdminOut(BaseModel):
    username: str
