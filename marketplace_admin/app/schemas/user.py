"""
Edit user payload.

Every field is optional: only the fields present in the request are
applied on top of the profile loaded from the backend.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field


class UserUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = Field(None, examples=["user@example.com"])
    phone: Optional[str] = None
    country_code: Optional[str] = Field(None, examples=["+971"])
    username: Optional[str] = None
    dob: Optional[str] = Field(None, examples=["1990-05-01"], description="Date of birth, YYYY-MM-DD")
    type: Optional[Union[str, int]] = Field(None, description="Buyer or seller")
