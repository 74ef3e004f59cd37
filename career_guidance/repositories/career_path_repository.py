"""
CareerPath repository - read access to the career catalog.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import case, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from career_guidance.models.career_path import CareerPath

# high first, then medium, then low
DEMAND_RANK = case(
    (CareerPath.market_demand == "high", 0),
    (CareerPath.market_demand == "medium", 1),
    else_=2,
)


def like_pattern(text: str) -> str:
    """Substring pattern with the LIKE wildcards in text escaped."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CareerPathRepository:
    """Repository for CareerPath database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _paginate(self, query, page: int, limit: int) -> Tuple[List[CareerPath], int]:
        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))
        result = await self.db.execute(
            query.order_by(DEMAND_RANK, CareerPath.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total or 0

    async def list(
        self,
        page: int = 1,
        limit: int = 10,
        industry: Optional[str] = None,
        category: Optional[str] = None,
        education_level: Optional[str] = None,
        market_demand: Optional[str] = None,
    ) -> Tuple[List[CareerPath], int]:
        """List active career paths with filters, returns (page items, total)."""
        query = select(CareerPath).where(CareerPath.is_active.is_(True))

        if industry is not None:
            query = query.where(CareerPath.industry == industry)
        if category is not None:
            query = query.where(CareerPath.category == category)
        if education_level is not None:
            query = query.where(CareerPath.education_minimum == education_level)
        if market_demand is not None:
            query = query.where(CareerPath.market_demand == market_demand)

        return await self._paginate(query, page, limit)

    async def search(self, q: str, page: int = 1, limit: int = 10) -> Tuple[List[CareerPath], int]:
        """Match any search term against title or description."""
        clauses = []
        for term in q.split():
            pattern = like_pattern(term)
            clauses.append(CareerPath.title.ilike(pattern, escape="\\"))
            clauses.append(CareerPath.description.ilike(pattern, escape="\\"))

        query = select(CareerPath).where(CareerPath.is_active.is_(True), or_(*clauses))
        return await self._paginate(query, page, limit)

    async def get_active(self, career_id: UUID) -> Optional[CareerPath]:
        result = await self.db.execute(
            select(CareerPath).where(CareerPath.id == career_id, CareerPath.is_active.is_(True))
        )
        return result.scalar_one_or_none()

    async def get_many_active(self, career_ids: Sequence[UUID]) -> List[CareerPath]:
        result = await self.db.execute(
            select(CareerPath).where(CareerPath.id.in_(career_ids), CareerPath.is_active.is_(True))
        )
        return list(result.scalars().all())

    async def find_by_title(self, fragment: str) -> Optional[CareerPath]:
        result = await self.db.execute(
            select(CareerPath)
            .where(
                CareerPath.title.ilike(like_pattern(fragment.strip()), escape="\\"),
                CareerPath.is_active.is_(True),
            )
            .order_by(DEMAND_RANK)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_by_industries(self, industries: Sequence[str], limit: int = 10) -> List[CareerPath]:
        result = await self.db.execute(
            select(CareerPath)
            .where(CareerPath.industry.in_(industries), CareerPath.is_active.is_(True))
            .order_by(DEMAND_RANK, CareerPath.title)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def stats(self) -> Dict[str, Any]:
        """Per-industry and per-demand counts of active career paths."""
        active = CareerPath.is_active.is_(True)

        industry_rows = await self.db.execute(
            select(
                CareerPath.industry,
                func.count(CareerPath.id).label("career_count"),
                func.avg(CareerPath.entry_salary_min).label("avg_salary"),
            )
            .where(active)
            .group_by(CareerPath.industry)
            .order_by(func.count(CareerPath.id).desc(), CareerPath.industry)
        )
        demand_rows = await self.db.execute(
            select(CareerPath.market_demand, func.count(CareerPath.id).label("career_count"))
            .where(active)
            .group_by(CareerPath.market_demand)
            .order_by(CareerPath.market_demand)
        )
        total = await self.db.scalar(select(func.count(CareerPath.id)).where(active))

        return {
            "industry_stats": [
                {
                    "industry": row.industry,
                    "count": row.career_count,
                    "avg_salary": float(row.avg_salary) if row.avg_salary is not None else None,
                }
                for row in industry_rows
            ],
            "market_demand_stats": [
                {"market_demand": row.market_demand, "count": row.career_count} for row in demand_rows
            ],
            "total_careers": total or 0,
        }

    async def add(self, career_path: CareerPath) -> CareerPath:
        self.db.add(career_path)
        await self.db.flush()
        return career_path

    async def delete_all(self) -> None:
        await self.db.execute(delete(CareerPath))
