"""
Dashboard API Routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gestor.core.database import get_db
from gestor.core.security import get_current_user
from gestor.schemas import DashboardStats, FinancialSummaryResponse
from gestor.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Get main dashboard statistics"""
    return DashboardService(db).get_stats(current_user.id)


@router.get("/financial", response_model=FinancialSummaryResponse)
async def get_financial_summary(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Revenue, expenses and balance"""
    summary = DashboardService(db).get_financial_summary(current_user.id)
    return {"revenue": summary.revenue, "expenses": summary.expenses, "balance": summary.balance}
