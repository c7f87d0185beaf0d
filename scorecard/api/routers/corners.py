from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from scorecard.corners.engine import (
    compute_cell_corner_values,
    compute_corner_value,
    compute_total_corner_values,
)
from scorecard.corners.presets import PRESETS, Preset
from scorecard.corners.schemas import (
    CellCornerValues,
    CornerConfig,
    CornerStatisticsConfig,
    CornerValue,
)
from scorecard.corners.storage import (
    ColumnVisibility,
    CornerConfigStore,
    get_corner_config_store,
)
from scorecard.rounds.models import Score
from scorecard.rounds.provider import PlayerRoundProvider, get_round_provider
from scorecard.security import require_api_key

router = APIRouter(
    prefix="/api/corners", tags=["corners"], dependencies=[Depends(require_api_key)]
)

logger = logging.getLogger(__name__)


class _CornerRequest(BaseModel):
    venue_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("venue_id", "venueId"),
        serialization_alias="venueId",
    )
    player_id: str = Field(
        validation_alias=AliasChoices("player_id", "playerId"),
        serialization_alias="playerId",
    )
    todays_player_ids: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("todays_player_ids", "todaysPlayerIds"),
        serialization_alias="todaysPlayerIds",
    )
    exclude_from: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("exclude_from", "excludeFrom"),
        serialization_alias="excludeFrom",
    )

    model_config = ConfigDict(populate_by_name=True)


class CornerValueRequest(_CornerRequest):
    config: Optional[CornerConfig] = None
    hole_number: int = Field(
        ge=1,
        validation_alias=AliasChoices("hole_number", "holeNumber"),
        serialization_alias="holeNumber",
    )


class CellValuesRequest(_CornerRequest):
    # falls back to the stored configuration when omitted
    config: Optional[CornerStatisticsConfig] = None
    hole_number: int = Field(
        ge=1,
        validation_alias=AliasChoices("hole_number", "holeNumber"),
        serialization_alias="holeNumber",
    )


class TotalValuesRequest(_CornerRequest):
    config: Optional[CornerStatisticsConfig] = None
    scores: List[Score] = Field(default_factory=list)


def _resolve_config(
    config: CornerStatisticsConfig | None, store: CornerConfigStore
) -> CornerStatisticsConfig | None:
    if config is not None:
        return config
    return store.get_corner_config()


@router.post("/value", response_model=CornerValue)
async def corner_value(
    payload: CornerValueRequest,
    provider: PlayerRoundProvider = Depends(get_round_provider),
) -> CornerValue:
    return await compute_corner_value(
        payload.config,
        payload.venue_id,
        payload.hole_number,
        payload.player_id,
        payload.todays_player_ids,
        payload.exclude_from,
        provider=provider,
    )


@router.post("/cell", response_model=CellCornerValues)
async def cell_values(
    payload: CellValuesRequest,
    provider: PlayerRoundProvider = Depends(get_round_provider),
    store: CornerConfigStore = Depends(get_corner_config_store),
) -> CellCornerValues:
    return await compute_cell_corner_values(
        _resolve_config(payload.config, store),
        payload.venue_id,
        payload.hole_number,
        payload.player_id,
        payload.todays_player_ids,
        payload.exclude_from,
        provider=provider,
    )


@router.post("/totals", response_model=CellCornerValues)
async def total_values(
    payload: TotalValuesRequest,
    provider: PlayerRoundProvider = Depends(get_round_provider),
    store: CornerConfigStore = Depends(get_corner_config_store),
) -> CellCornerValues:
    return await compute_total_corner_values(
        _resolve_config(payload.config, store),
        payload.venue_id,
        payload.scores,
        payload.player_id,
        payload.todays_player_ids,
        payload.exclude_from,
        provider=provider,
    )


@router.get("/presets", response_model=List[Preset])
async def list_presets() -> List[Preset]:
    return PRESETS


@router.get("/config", response_model=Optional[CornerStatisticsConfig])
async def get_config(
    store: CornerConfigStore = Depends(get_corner_config_store),
) -> Optional[CornerStatisticsConfig]:
    return store.get_corner_config()


@router.put("/config", response_model=CornerStatisticsConfig)
async def put_config(
    config: CornerStatisticsConfig,
    store: CornerConfigStore = Depends(get_corner_config_store),
) -> CornerStatisticsConfig:
    store.save_corner_config(config)
    logger.info("corner config saved")
    return config


@router.get("/columns", response_model=ColumnVisibility)
async def get_columns(
    store: CornerConfigStore = Depends(get_corner_config_store),
) -> ColumnVisibility:
    return store.get_column_visibility()


@router.put("/columns", response_model=ColumnVisibility)
async def put_columns(
    visibility: ColumnVisibility,
    store: CornerConfigStore = Depends(get_corner_config_store),
) -> ColumnVisibility:
    store.save_column_visibility(visibility)
    return visibility


__all__ = ["router"]
