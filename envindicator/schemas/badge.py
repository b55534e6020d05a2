from typing import List
from pydantic import BaseModel, Field


class SwitchLink(BaseModel):
    """One entry of the environment switcher menu."""
    id: str = Field(..., description="Stable node id derived from the environment key")
    environment: str
    title: str = Field(..., description="Human label, e.g. 'Staging'")
    href: str


class Badge(BaseModel):
    """Everything the render layer needs to draw the indicator."""
    environment: str
    label: str
    color: str = Field(..., description="CSS hex colour")
    css_class: str
    links: List[SwitchLink] = Field(default_factory=list)
