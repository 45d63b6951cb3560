from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AuthUser(BaseModel):
    """
    Authenticated caller, built from the claims of a Supabase access token.

    Passed explicitly to handlers through ``Depends(get_current_user)``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str = Field(..., alias="sub")
    email: Optional[EmailStr] = None
    role: str = "authenticated"
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    app_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def app_role(self) -> Optional[str]:
        """Application role set on the Supabase user (metadata ``role``)."""
        return self.app_metadata.get("role") or self.user_metadata.get("role")

    @property
    def display_id(self) -> str:
        """Identifier recorded on rows this user modifies."""
        return str(self.email) if self.email else self.user_id
