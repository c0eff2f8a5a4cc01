from __future__ import annotations

import base64

from fastapi import APIRouter, HTTPException

from ..schemas.waffle import ProfileRequest, ProfileResponse, WaffleRequest, WaffleResponse
from ..services import ChartPipeline, DataProfiler, WaffleVizError

router = APIRouter(prefix="/waffle", tags=["waffle"])

_profiler = DataProfiler()
_pipeline = ChartPipeline()


@router.post("/profile", response_model=ProfileResponse)
def profile(request: ProfileRequest) -> ProfileResponse:
    if not request.data:
        raise HTTPException(status_code=400, detail="Dataset contained no records.")
    try:
        payload = _profiler.build_profile(request.data, request.time_format)
    except (WaffleVizError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ProfileResponse.model_validate(payload)


@router.post("/layout", response_model=WaffleResponse)
def waffle_layout(request: WaffleRequest) -> WaffleResponse:
    if not request.data:
        raise HTTPException(status_code=400, detail="Dataset contained no records.")
    try:
        build = _pipeline.build(request.data, request.config)
    except (WaffleVizError, KeyError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    payload = build.to_dict()
    if request.include_png:
        payload["png_base64"] = base64.b64encode(_pipeline.render(build)).decode("ascii")
    return WaffleResponse.model_validate(payload)
