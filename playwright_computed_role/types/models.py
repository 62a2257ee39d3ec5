"""Core type definitions for playwright-computed-role."""

from typing import Optional, List, Dict, Any, Literal
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_ENGINE_NAME = "computed-aria"


class RoleFilter(BaseModel):
    """Query payload: the role to match plus optional name/description filters.
    
    ``role`` is optional at the model level because a payload without a role
    is valid and simply matches nothing.
    """
    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    exact: Optional[bool] = None

    def to_payload(self, **extra: Any) -> Dict[str, Any]:
        """Serializable form used in ``<engine>=<json>`` selectors."""
        payload = self.model_dump(exclude_none=True)
        payload.update(extra)
        return payload


class ConstructorParams(BaseModel):
    """Parameters for the ComputedRole launcher."""
    verbose: int = 0
    headless: bool = True
    browser: Literal["chromium", "firefox", "webkit"] = "chromium"
    browser_args: List[str] = Field(default_factory=list)
    engine_name: str = Field(default=DEFAULT_ENGINE_NAME, pattern=r"^[A-Za-z][A-Za-z0-9_-]*$")
    context_options: Dict[str, Any] = Field(default_factory=dict)
