from typing import List
from pydantic import BaseModel


class CompanySummary(BaseModel):
    company: str
    asset_count: int
    total_cost: float
    categories: str


class DashboardSummary(BaseModel):
    totalAssets: int
    totalCost: float
    byCompany: List[CompanySummary]
