"""
Pydantic schemas for browser route resolution and the admin menu.
"""

from pydantic import BaseModel
from typing import Optional, List


class RouteDecisionResponse(BaseModel):
    path: str
    route: Optional[str] = None
    outcome: str
    redirect_to: Optional[str] = None


class MenuItem(BaseModel):
    href: str
    label: str


class AdminMenuResponse(BaseModel):
    items: List[MenuItem]
