"""
Dashboard Service
Aggregate figures for the admin home page: order and product counts,
revenue, low stock alerts and today's orders.
"""
import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Optional

from backoffice.domain.dashboard import DashboardSummary
from backoffice.repositories.category_repository import CategoryRepository
from backoffice.repositories.order_repository import OrderRepository
from backoffice.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DashboardService:
    """Read-only aggregates over orders and products"""

    def __init__(
        self,
        orders: OrderRepository,
        products: ProductRepository,
        categories: Optional[CategoryRepository] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.orders = orders
        self.products = products
        self.categories = categories
        self.clock = clock

    def get_total_orders(self) -> int:
        return self.orders.count()

    def get_total_revenue(self) -> Decimal:
        return self.orders.total_revenue()

    def get_total_products(self) -> int:
        return self.products.count()

    def get_total_categories(self) -> int:
        if self.categories is None:
            return 0
        return self.categories.count()

    def get_low_stock_product_count(self, threshold: int) -> int:
        """Products with stock <= threshold"""
        return self.products.count_low_stock(threshold)

    def get_today_orders(self) -> int:
        """
        Orders placed on the current UTC day

        The day is [00:00:00, next 00:00:00) in UTC, read from the clock at
        call time, so an order at exactly midnight belongs to the new day.
        """
        start, end = self.today_bounds()
        return self.orders.count_between(start, end)

    def today_bounds(self):
        now = self.clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        now = now.astimezone(timezone.utc)

        start = datetime(now.year, now.month, now.day, tzinfo=timezone.utc)
        return start, start + timedelta(days=1)

    def get_summary(self, low_stock_threshold: int) -> DashboardSummary:
        """All dashboard figures at once"""
        logger.info(f"Building dashboard summary (low stock threshold {low_stock_threshold})")
        return DashboardSummary(
            total_products=self.get_total_products(),
            total_categories=self.get_total_categories(),
            total_orders=self.get_total_orders(),
            today_orders=self.get_today_orders(),
            low_stock_products=self.get_low_stock_product_count(low_stock_threshold),
            low_stock_threshold=low_stock_threshold,
            total_revenue=self.get_total_revenue(),
        )
