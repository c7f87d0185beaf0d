from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from scorecard.rounds.provider import PlayerRoundProvider, get_round_provider
from scorecard.security import require_api_key
from scorecard.stats.hole_stats import (
    HoleStatistics,
    compute_all_hole_statistics,
    compute_total_round_statistics,
)

router = APIRouter(
    prefix="/api/holes", tags=["holes"], dependencies=[Depends(require_api_key)]
)


@router.get("/{venue_id}/statistics", response_model=Dict[int, HoleStatistics])
async def hole_statistics(
    venue_id: str,
    holes: List[int] = Query(default=[]),
    exclude_from: Optional[datetime] = Query(default=None, alias="excludeFrom"),
    provider: PlayerRoundProvider = Depends(get_round_provider),
) -> Dict[int, HoleStatistics]:
    return await compute_all_hole_statistics(
        venue_id, holes, exclude_from, provider=provider
    )


@router.get("/{venue_id}/totals", response_model=HoleStatistics)
async def round_total_statistics(
    venue_id: str,
    exclude_from: Optional[datetime] = Query(default=None, alias="excludeFrom"),
    provider: PlayerRoundProvider = Depends(get_round_provider),
) -> HoleStatistics:
    return await compute_total_round_statistics(
        venue_id, exclude_from, provider=provider
    )


__all__ = ["router"]
