from typing import List, Optional

from catalog.schemas.common import CamelModel


class TotalOverview(CamelModel):
    total_users: int
    total_orders: int
    total_products: int
    total_categories: int


class PlatformOverview(CamelModel):
    active_users: int
    # stand-in: admin-role users until vendors have their own approval status
    approved_vendors: int
    # placeholder until vendor requests exist
    pending_vendor_requests: int = 0


class PlatformDistribution(CamelModel):
    users: int
    products: int
    categories: int
    orders: int


class PlatformAnalytics(CamelModel):
    total_overview: TotalOverview
    platform_overview: PlatformOverview
    platform_distribution: PlatformDistribution


class AnalyticsSummary(CamelModel):
    total_users: int
    active_users: int
    inactive_users: int
    total_orders: int
    total_products: int
    total_categories: int


class OrderMetrics(CamelModel):
    total_orders: int = 0
    total_revenue: float = 0
    avg_order_value: float = 0


class SubcategoryProductCount(CamelModel):
    subcategory_id: Optional[int] = None
    subcategory: Optional[str] = None
    product_count: int


class DetailedAnalytics(CamelModel):
    summary: AnalyticsSummary
    order_metrics: OrderMetrics
    products_by_category: List[SubcategoryProductCount]


class RoleCount(CamelModel):
    role: Optional[str] = None
    count: int


class UserStats(CamelModel):
    total_users: int
    active_users: int
    inactive_users: int
    users_by_role: List[RoleCount]
