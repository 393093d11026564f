"""
Admin Dashboard API
Figures for the admin home page
"""
from fastapi import APIRouter, Depends, HTTPException, Query

from backoffice.api.dependencies import get_dashboard_service
from backoffice.core.config import settings
from backoffice.services import DashboardService

router = APIRouter()


@router.get("/")
def get_dashboard(
    low_stock_threshold: int = Query(settings.LOW_STOCK_THRESHOLD, ge=0, description="Stock at or below this is low"),
    service: DashboardService = Depends(get_dashboard_service)
):
    """
    Dashboard summary

    Returns:
    - Total products and categories
    - Total orders and today's orders (UTC day)
    - Products with low stock
    - Total revenue
    """
    try:
        summary = service.get_summary(low_stock_threshold)

        return {
            "status": "success",
            "data": summary.to_dict()
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error building dashboard: {str(e)}")
