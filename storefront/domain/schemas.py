"""Request bodies accepted by the HTTP routers."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class SignupIn(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    name: str = Field("", max_length=255)


class SigninIn(BaseModel):
    email: str
    password: str


class RequestResetIn(BaseModel):
    email: str


class ResetPasswordIn(BaseModel):
    reset_token: str = Field(..., alias="resetToken")
    password: str
    confirm_password: str = Field(..., alias="confirmPassword")

    model_config = {"populate_by_name": True}


class UpdatePermissionsIn(BaseModel):
    permissions: List[str]


class CheckoutIn(BaseModel):
    token: str = Field(..., min_length=1, description="Payment source token from the gateway's client library")


class ItemIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    price: int = Field(..., ge=0, description="Price in cents")
    description: str = ""
    image: Optional[str] = None
    large_image: Optional[str] = Field(None, alias="largeImage")

    model_config = {"populate_by_name": True}


class ItemUpdateIn(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    image: Optional[str] = None
    large_image: Optional[str] = Field(None, alias="largeImage")

    model_config = {"populate_by_name": True}
