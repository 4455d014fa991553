"""Narrative endpoint - climate bulletin or data-grounded Q&A."""

from fastapi import APIRouter, Depends

from climate_futures.api.deps import get_baseline, get_impacts, get_narrative_generator
from climate_futures.api.models import NarrativeRequest, NarrativeResponse
from climate_futures.baseline import BaselineData, HumanImpactSnapshot, merge_baseline, merge_impacts
from climate_futures.narrative import NarrativeGenerator

router = APIRouter(prefix="/api", tags=["narrative"])


@router.post("/narrative/generate", response_model=NarrativeResponse)
def generate_narrative(
    request: NarrativeRequest,
    generator: NarrativeGenerator = Depends(get_narrative_generator),
    baseline: BaselineData = Depends(get_baseline),
    impacts: HumanImpactSnapshot = Depends(get_impacts),
):
    """Q&A mode when ``question`` is present, bulletin mode otherwise."""
    narrative = generator.generate(
        merge_baseline(baseline, request.baseline_data),
        merge_impacts(impacts, request.human_impacts),
        question=request.question,
    )
    return NarrativeResponse(narrative=narrative)
