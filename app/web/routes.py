import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.api.common.models import ERROR_MESSAGES, ApiError, ErrorKind
from app.api.common.utils import is_evm_address
from app.api.whatif.models import AnalysisRequest, InputMode
from app.api.whatif.routes import get_analyzer
from app.api.whatif.service import WhatIfAnalyzer

from .presenters import (
    format_eth,
    format_percent,
    format_usd,
    gain_message,
    gain_tone,
)

logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)

templates = Jinja2Templates(directory=Path(__file__).parent / "templates")
templates.env.filters["usd"] = format_usd
templates.env.filters["eth"] = format_eth
templates.env.filters["percent"] = format_percent
templates.env.globals["gain_message"] = gain_message
templates.env.globals["gain_tone"] = gain_tone


def _parse_amount(raw: str | None) -> float | None:
    try:
        return float(raw) if raw else None
    except ValueError:
        return None


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    mode: InputMode = Query(InputMode.ADDRESS),
    address: str | None = Query(None),
    eth_amount: str | None = Query(None),
    analyzer: WhatIfAnalyzer = Depends(get_analyzer),
):
    address = (address or "").strip()
    submitted = (mode == InputMode.ADDRESS and bool(address)) or (
        mode == InputMode.MANUAL and eth_amount is not None
    )

    context = {
        "mode": mode,
        "address": address,
        "eth_amount": eth_amount or "",
        "is_valid_address": is_evm_address(address),
        "error": None,
        "result": None,
    }

    if submitted:
        if mode == InputMode.MANUAL:
            # An unparseable amount is validated like a non-positive one
            analysis_request = AnalysisRequest(eth_amount=_parse_amount(eth_amount) or 0)
        else:
            analysis_request = AnalysisRequest(address=address)

        try:
            context["result"] = await analyzer.analyze(analysis_request)
        except ApiError as e:
            context["error"] = (
                e.message
                if e.kind in ERROR_MESSAGES
                else ERROR_MESSAGES[ErrorKind.UNKNOWN]
            )
            logger.info(f"Analysis failed: {e.kind.value} {e.details or ''}")

    return templates.TemplateResponse(request, "index.html", context)
