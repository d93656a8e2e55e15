from fastapi import APIRouter, Depends

from app.api.common.models import ErrorResponse, Tags

from .models import AnalysisRequest, AnalysisResponse
from .service import WhatIfAnalyzer

router = APIRouter(
    prefix="/api",
    tags=[Tags.ANALYSIS],
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)


def get_analyzer() -> WhatIfAnalyzer:
    return WhatIfAnalyzer()


@router.post("/v1/analysis", response_model=AnalysisResponse)
async def analyze(
    request: AnalysisRequest,
    analyzer: WhatIfAnalyzer = Depends(get_analyzer),
) -> AnalysisResponse:
    """
    Compare holding the wallet's month-ago ETH with having converted it into
    each of the best performing native coins.

    Pass either `address` to look the balance up on chain, or `eth_amount`.
    """
    return await analyzer.analyze(request)
