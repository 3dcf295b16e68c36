"""Insights API — AI commentary, served apart from the trade and dashboard routes."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from backend.services.insights import InsightNarrator
from backend.api.deps import get_narrator, get_user_trades

router = APIRouter(prefix="/api/insights", tags=["insights"])


class InsightResponse(BaseModel):
    insights: str


@router.get("", response_model=InsightResponse)
async def insights(
    trades: list = Depends(get_user_trades),
    narrator: InsightNarrator = Depends(get_narrator),
):
    return InsightResponse(insights=await narrator.summarize(trades))
