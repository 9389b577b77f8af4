"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class RouteRequest(BaseModel):
    points: List[List[float]] = Field(..., description="Point coordinates, one list per point.")
    dimension: Optional[int] = Field(
        default=None,
        ge=1,
        description="Expected dimension of every point. Inferred from the first point when omitted.",
    )
    strategy: Optional[str] = Field(
        default=None,
        description="Strategy key. When omitted the instance size decides between exact and greedy search.",
    )
    prefix_size: Optional[int] = Field(default=None, ge=2)
    time_limit_seconds: Optional[float] = Field(default=None, gt=0)
    tolerance: Optional[float] = Field(default=None, ge=0)


class RouteResponse(BaseModel):
    status: Literal["ok", "infeasible"]
    strategy: str
    exact: bool
    point_count: int
    dimension: Optional[int] = None
    route: Optional[List[List[float]]] = None
    length: Optional[float] = None
    elapsed_ms: float
    metadata: dict = Field(default_factory=dict)
