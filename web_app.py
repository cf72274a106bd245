import json
import logging
import math
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import List, Optional

from fastapi import FastAPI, Form, Request
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.background import BackgroundTask
from starlette.templating import Jinja2Templates

from itinerary_agent import (
    GenerationError,
    TripRequestError,
    apply_actual_cost,
    build_structured_output,
    configure_logging,
    export_csv,
    export_json,
    format_currency,
    plan_trip,
    summarize_budget,
)
from itinerary_agent.models import BudgetSummary, DailyItinerary, GenerationResult, GroundingChunk

logger = logging.getLogger(__name__)

configure_logging()

app = FastAPI(title="AI Travel Itinerary Planner")
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))
templates.env.filters["currency"] = format_currency


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)


class BudgetRequest(_Body):
    itinerary: List[DailyItinerary] = Field(default_factory=list)
    total_budget: Optional[float] = Field(None, alias="totalBudget")
    duration: int = 0


class CostEditRequest(BudgetRequest):
    day: int
    activity_index: int = Field(alias="activityIndex")
    cost: Optional[float] = None


class CostEditResponse(_Body):
    itinerary: List[DailyItinerary]
    budget: BudgetSummary


class ExportRequest(BudgetRequest):
    destination: str = ""
    interests: str = ""
    citations: List[GroundingChunk] = Field(default_factory=list)


def _parse_budget(total_budget: str) -> Optional[float]:
    # 预算可不填；填了就必须是数字
    if not total_budget or not total_budget.strip():
        return None
    try:
        value = float(total_budget.strip())
    except ValueError:
        raise TripRequestError("总预算必须是数字")
    if not math.isfinite(value):
        raise TripRequestError("总预算必须是数字")
    return value


def _form_context(destination: str = "", duration: str = "", interests: str = "", total_budget: str = "") -> dict:
    return {
        "destination": destination,
        "duration": duration,
        "interests": interests,
        "total_budget": total_budget,
        "result": None,
        "result_json_str": "",
        "error": None,
    }


@app.get("/")
def index(request: Request):
    return templates.TemplateResponse(request, "index.html", _form_context())


@app.post("/plan")
def plan(
    request: Request,
    destination: str = Form(""),
    duration: str = Form(""),
    interests: str = Form(""),
    total_budget: str = Form(""),
):
    context = _form_context(destination, duration, interests, total_budget)
    try:
        data = plan_trip(destination, duration, interests, _parse_budget(total_budget))
    except (TripRequestError, GenerationError) as e:
        # 出错后回到可重新提交的表单，并显示错误信息
        context["error"] = str(e)
        return templates.TemplateResponse(request, "index.html", context)
    context["result"] = data
    # 嵌入 <script> 时避免提前闭合标签
    context["result_json_str"] = json.dumps(data, ensure_ascii=False).replace("</", "<\\/")
    return templates.TemplateResponse(request, "index.html", context)


@app.post("/api/plan")
def api_plan(
    destination: str = Form(""),
    duration: str = Form(""),
    interests: str = Form(""),
    total_budget: str = Form(""),
):
    try:
        return plan_trip(destination, duration, interests, _parse_budget(total_budget))
    except TripRequestError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except GenerationError as e:
        return JSONResponse({"error": str(e)}, status_code=502)


@app.post("/api/actual-cost", response_model=CostEditResponse)
def api_actual_cost(body: CostEditRequest):
    itinerary = apply_actual_cost(body.itinerary, body.day, body.activity_index, body.cost)
    budget = summarize_budget(itinerary, body.total_budget, body.duration)
    return CostEditResponse(itinerary=itinerary, budget=budget)


@app.post("/api/budget", response_model=BudgetSummary)
def api_budget(body: BudgetRequest):
    return summarize_budget(body.itinerary, body.total_budget, body.duration)


def _export_data(body: ExportRequest) -> dict:
    result = GenerationResult(itinerary=body.itinerary, citations=body.citations)
    summary = summarize_budget(body.itinerary, body.total_budget, body.duration)
    return build_structured_output(
        body.destination, body.duration, body.interests, body.total_budget, result, summary
    )


@app.post("/export/json")
def export_json_route(body: ExportRequest):
    data = _export_data(body)
    with NamedTemporaryFile(delete=False, suffix=".json") as tmp:
        export_json(data, tmp.name)
        # 响应发送完毕后删除临时文件
        return FileResponse(
            tmp.name, media_type="application/json", filename="itinerary.json",
            background=BackgroundTask(os.unlink, tmp.name),
        )


@app.post("/export/csv")
def export_csv_route(body: ExportRequest):
    data = _export_data(body)
    with NamedTemporaryFile(delete=False, suffix=".csv") as tmp:
        export_csv(data, tmp.name)
        return FileResponse(
            tmp.name, media_type="text/csv", filename="budget.csv",
            background=BackgroundTask(os.unlink, tmp.name),
        )
