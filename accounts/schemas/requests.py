from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserCreateIn(BaseModel):
    """
    Registration body. Fields are taken as-is (null, missing or of any JSON
    type): the domain validator classifies them so every field error is
    reported at once. Unknown keys (status, role, activation token...) are
    dropped.
    """

    model_config = ConfigDict(extra="ignore")

    username: Any = Field(None, description="The display name of the user")
    email: Any = Field(None, description="The email of the user")
    password: Any = Field(None, description="The password of the user")
