"""
Route map domain models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from nextlens.shared.domain.base_model import BaseDomainModel


class RouterType(str, Enum):
    PAGES = "pages"
    APP = "app"


@dataclass
class RouteInfo(BaseDomainModel):
    """
    A URL route derived from file-system routing conventions.

    id is `pages:<file path relative to pages/>` or `app:<directory relative to app/>`.
    """

    id: str
    path: str
    file_path: str
    is_dynamic: bool
    is_api: bool
    is_page: bool
    router_type: RouterType
    params: List[str] = field(default_factory=list)
    has_layout: bool = False


@dataclass
class RouteStats(BaseDomainModel):
    total_routes: int = 0
    page_routes: int = 0
    api_routes: int = 0
    dynamic_routes: int = 0
    pages_router: int = 0
    app_router: int = 0


@dataclass
class RouteMap(BaseDomainModel):
    """Routes stage output."""

    routes: List[RouteInfo] = field(default_factory=list)
    stats: RouteStats = field(default_factory=RouteStats)
