"""
Dashboard figures shown on the admin home page
"""
from pydantic import BaseModel, Field
from decimal import Decimal


class DashboardSummary(BaseModel):
    total_products: int = Field(0, ge=0)
    total_categories: int = Field(0, ge=0)
    total_orders: int = Field(0, ge=0)
    today_orders: int = Field(0, ge=0)
    low_stock_products: int = Field(0, ge=0)
    low_stock_threshold: int
    total_revenue: Decimal = Decimal('0')

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['total_revenue'] = float(data['total_revenue'])
        return data
