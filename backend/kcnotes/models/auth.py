from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=6, max_length=128)


class SigninRequest(BaseModel):
    # no length rules here: a short password is just wrong credentials
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
