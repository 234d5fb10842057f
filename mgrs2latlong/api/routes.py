from __future__ import annotations

import csv
import io
import logging
from typing import Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.responses import Response

from ..csv_io import read_table, write_table
from ..detect import pick_column, score_columns
from ..grid import Conversion, convert
from ..pipeline import PipelineError, PipelineStats, geocode_rows, output_header
from .schemas import (
    BatchRequest,
    BatchResponse,
    CandidateOut,
    ConversionErrorOut,
    ConvertRequest,
    ConvertResult,
    DetectRequest,
    DetectResponse,
    PointOut,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _result(res: Conversion) -> ConvertResult:
    if not res.ok:
        return ConvertResult(
            input=res.text,
            ok=False,
            error=ConversionErrorOut(kind=res.error.kind, reason=res.error.reason),
        )
    return ConvertResult(
        input=res.text,
        ok=True,
        point=PointOut(
            mgrs=str(res.reference),
            latitude=res.point.latitude,
            longitude=res.point.longitude,
            precision_m=res.reference.precision_m,
        ),
    )


@router.post("/mgrs/convert", response_model=PointOut)
def convert_one(req: ConvertRequest) -> PointOut:
    res = _result(convert(req.mgrs))
    if not res.ok:
        raise HTTPException(status_code=422, detail=res.error.model_dump())
    return res.point


@router.post("/mgrs/convert_batch", response_model=BatchResponse)
def convert_batch(req: BatchRequest) -> BatchResponse:
    return BatchResponse(results=[_result(convert(v)) for v in req.values])


@router.post("/mgrs/detect", response_model=DetectResponse)
def detect_column(req: DetectRequest) -> DetectResponse:
    cands = score_columns(req.header, req.rows)
    best = pick_column(cands)
    return DetectResponse(
        column=best.name if best else None,
        candidates=[CandidateOut(**vars(c)) for c in cands],
    )


@router.post("/csv/geocode")
async def geocode_csv(
    file: UploadFile = File(...),
    column: Optional[str] = Query(None, description="MGRS column; detected when omitted"),
    strict: bool = Query(False, description="Fail on the first value that does not convert"),
) -> Response:
    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Uploaded file is not UTF-8 text")

    stats = PipelineStats()
    out = io.StringIO()
    try:
        header, rows = read_table(io.StringIO(text, newline=""))
        write_table(out, output_header(header), geocode_rows(header, rows, column=column, strict=strict, stats=stats))
    except (ValueError, csv.Error) as ve:
        raise HTTPException(status_code=422, detail=f"Invalid CSV: {ve}")
    except PipelineError as pe:
        raise HTTPException(status_code=422, detail=str(pe))

    logger.info(
        "geocoded upload",
        extra={"column": stats.column, "rows": stats.rows, "converted": stats.converted, "failed": stats.failed},
    )
    return Response(
        content=out.getvalue(),
        media_type="text/csv",
        headers={
            "X-Rows-Converted": str(stats.converted),
            "X-Rows-Failed": str(stats.failed),
        },
    )
