'''
Access token models. The token is issued after Google login and normally
travels in the http-only cookie, the body form exists for API clients.
'''
from pydantic import BaseModel, EmailStr
from datetime import datetime

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class TokenPayload(BaseModel):
    sub: EmailStr # the tutor's email
    exp: datetime
