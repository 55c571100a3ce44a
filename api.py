"""FastAPI backend for the Concrete Staircase Calculator.
Runs the quantity takeoff server-side and serves the results panel strings,
CSV bill of quantities, and the dimensioned side-view drawing (DXF / SVG).
"""
import os
import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response, HTMLResponse
from pydantic import BaseModel

from settings import settings
from stair_calculator import (
    calculate_stair_metrics,
    StairInputParams,
    StairMetrics,
    DEFAULT_CONFIG,
)
from bom_export import format_results, generate_csv
from stair_drawing import export_side_view_dxf, render_side_view_svg

logger = logging.getLogger(__name__)

app = FastAPI()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class SvgRequest(BaseModel):
    params: StairInputParams = StairInputParams()
    zoom: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale_factor: float = 1.0
    width: Optional[int] = None
    height: Optional[int] = None


@app.get("/", response_class=HTMLResponse)
async def read_index():
    with open(os.path.join(BASE_DIR, settings.WEB_DIR, "index.html"), "r", encoding="utf-8") as f:
        return f.read()


@app.get("/defaults")
async def get_defaults():
    return DEFAULT_CONFIG


@app.post("/calculate", response_model=StairMetrics)
async def calculate(params: StairInputParams):
    # Invalid dimensions come back as the zero report, not an error
    return calculate_stair_metrics(params)


@app.post("/results")
async def get_results(params: StairInputParams):
    metrics = calculate_stair_metrics(params)
    return {"metrics": metrics.model_dump(), "display": format_results(metrics)}


@app.post("/export/csv")
async def export_csv(params: StairInputParams):
    """Bill of quantities for the staircase as a CSV download."""
    try:
        metrics = calculate_stair_metrics(params)
        return Response(
            content=generate_csv(metrics),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=staircase_quantities.csv"},
        )
    except Exception as e:
        logger.exception("[API] CSV Export Error: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/export/dxf")
async def export_dxf_file(params: StairInputParams):
    """Generates a DXF side view with steps, slabs, labels and rise dimensions."""
    try:
        metrics = calculate_stair_metrics(params)
        logger.info("[API] Building DXF side view (%d flights)...", metrics.num_flights)
        return Response(
            content=export_side_view_dxf(metrics),
            media_type="application/dxf",
            headers={"Content-Disposition": "attachment; filename=staircase_side_view.dxf"},
        )
    except Exception as e:
        logger.exception("[API] DXF Export Error: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/export/svg")
async def export_svg(req: SvgRequest):
    """Renders the side-view preview. scale_factor > 1 gives a high-res image."""
    try:
        metrics = calculate_stair_metrics(req.params)
        svg = render_side_view_svg(
            metrics,
            width=req.width or settings.SVG_WIDTH,
            height=req.height or settings.SVG_HEIGHT,
            zoom=req.zoom,
            offset=(req.offset_x, req.offset_y),
            scale_factor=req.scale_factor,
        )
        return Response(content=svg, media_type="image/svg+xml")
    except Exception as e:
        logger.exception("[API] SVG Export Error: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=settings.LOG_LEVEL)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
