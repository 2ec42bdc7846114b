from .base import CamelModel


class DashboardStat(CamelModel):
    title: str
    value: int
    description: str


class DashboardSummary(CamelModel):
    welcome: str
    name: str
    role: str
    stats: list[DashboardStat]
    record_counts: dict[str, int]


class NavigationEntry(CamelModel):
    name: str
    href: str
    permission: str


class PageAccess(CamelModel):
    path: str
    permission: str
    allowed: bool
