'''

'''
from .base import CamelModel


class DashboardStats(CamelModel):
    """Figures shown on the dashboard, see core.finance.compute_stats."""
    total_students: int
    classes_this_week: int
    revenue_this_month: int
    unpaid_count: int


class EarningsBreakdown(CamelModel):
    """Whole-history earnings, see core.finance.compute_earnings."""
    total_earned: int
    total_collected: int
    total_outstanding: int
