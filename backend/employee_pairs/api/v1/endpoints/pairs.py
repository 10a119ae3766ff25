from __future__ import annotations

import io
import logging

from fastapi import APIRouter, HTTPException, UploadFile, status
from starlette.concurrency import run_in_threadpool

from employee_pairs.core.config import settings
from employee_pairs.core.reporting import ConditionReporter
from employee_pairs.models.pairing import PairAnalysisResponse, PairingAnalysis, PairTextRequest
from employee_pairs.services.pairing_service import pairing_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pairs", tags=["pairs"])


def _to_response(analysis: PairingAnalysis) -> PairAnalysisResponse:
    return PairAnalysisResponse(
        result=analysis.result,
        row=list(analysis.result.as_row()) if analysis.result else None,
        employee_count=analysis.employee_count,
        relation_count=analysis.relation_count,
        conditions=analysis.conditions,
    )


def _check_size(size: int, what: str) -> None:
    if size > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{what} too large: {size} bytes. Maximum: {settings.MAX_UPLOAD_SIZE} bytes",
        )


def _analyze_text(text: str) -> PairAnalysisResponse:
    # Conditions travel back in the response body; there is nobody to notify.
    reporter = ConditionReporter(test_mode=True)
    with io.StringIO(text) as source:
        analysis = pairing_service.analyze(source, reporter)
    return _to_response(analysis)


@router.post("/upload", response_model=PairAnalysisResponse)
async def upload_employee_file(file: UploadFile):
    file_bytes = await file.read()
    _check_size(len(file_bytes), "File")

    try:
        text = file_bytes.decode(settings.INPUT_ENCODING)
    except UnicodeDecodeError as e:
        logger.error("Decoding failed for file=%s: %s", file.filename, e)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"File is not valid {settings.INPUT_ENCODING} text",
        ) from e

    # Matching is CPU bound; keep it off the event loop.
    response = await run_in_threadpool(_analyze_text, text)
    logger.info(
        "Analyzed %s: %d employees, %d relations, %d conditions",
        file.filename,
        response.employee_count,
        response.relation_count,
        len(response.conditions),
    )
    return response


@router.post("/text", response_model=PairAnalysisResponse)
async def analyze_employee_text(request: PairTextRequest):
    _check_size(len(request.text.encode(settings.INPUT_ENCODING, errors="replace")), "Text")

    response = await run_in_threadpool(_analyze_text, request.text)
    logger.info(
        "Text paste: %d chars, %d employees, %d conditions",
        len(request.text),
        response.employee_count,
        len(response.conditions),
    )
    return response
