from pydantic import BaseModel, Field


class LoginIn(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserOut(BaseModel):
    id: int
    username: str
    is_admin: bool = Field(alias="isAdmin")

    class Config:
        from_attributes = True
        populate_by_name = True


class LoginOut(BaseModel):
    token: str
    user: UserOut
