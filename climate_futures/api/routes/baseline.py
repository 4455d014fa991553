"""Static baseline climate and human-impact data."""

from fastapi import APIRouter, Depends

from climate_futures.api.deps import get_baseline, get_impacts
from climate_futures.baseline import BaselineData, HumanImpactSnapshot

router = APIRouter(prefix="/api", tags=["baseline"])


@router.get("/climate/baseline", response_model=BaselineData)
def climate_baseline(baseline: BaselineData = Depends(get_baseline)):
    return baseline


@router.get("/impacts/baseline", response_model=HumanImpactSnapshot)
def impacts_baseline(impacts: HumanImpactSnapshot = Depends(get_impacts)):
    return impacts
