"""Business plan endpoints, including the break-even analysis chat turn."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from bizcoach.api.deps import get_llm_client
from bizcoach.api.models import (
    BreakEvenReply,
    BreakEvenRequest,
    BreakEvenState,
    BusinessPlanCreate,
    BusinessPlanUpdate,
    DeleteResponse,
    SectionUpdate,
)
from bizcoach.config import settings
from bizcoach.errors import InvalidRequestError, NotFoundError
from bizcoach.llm.client import LLMClient, trim_history
from bizcoach.llm.prompts import build_break_even_prompt
from bizcoach.storage.business_plans import (
    create_business_plan,
    delete_business_plan,
    get_business_plan,
    list_business_plans,
    merge_section,
    plan_content,
    update_business_plan,
)
from bizcoach.storage.client import get_supabase_client
from bizcoach.structured.break_even import BreakEvenUpdate, format_break_even_text
from bizcoach.structured.extractor import clean_response, extract_structured_data

logger = logging.getLogger(__name__)
router = APIRouter()

FINANCIAL_PLAN = "financialPlan"
HELP_MARKER = "needs help"


def _load_plan(plan_id: str) -> dict[str, Any]:
    plan = get_business_plan(get_supabase_client(), plan_id)
    if plan is None:
        raise NotFoundError("Business plan not found")
    return plan


@router.get("/api/business-plans")
async def list_plans() -> list[dict[str, Any]]:
    return list_business_plans(get_supabase_client())


@router.post("/api/business-plans", status_code=201)
async def create_plan(request: BusinessPlanCreate) -> dict[str, Any]:
    title = request.title.strip()
    if not title:
        raise InvalidRequestError("Title is required")
    plan = create_business_plan(get_supabase_client(), title, request.description)
    logger.info("Created business plan %s", plan["id"])
    return plan


@router.get("/api/business-plans/{plan_id}")
async def get_plan(plan_id: str) -> dict[str, Any]:
    return _load_plan(plan_id)


@router.put("/api/business-plans/{plan_id}")
async def update_plan(plan_id: str, changes: BusinessPlanUpdate) -> dict[str, Any]:
    existing = _load_plan(plan_id)
    fields = changes.model_dump(exclude_unset=True)
    if not fields:
        return existing
    return update_business_plan(get_supabase_client(), plan_id, fields)


@router.delete("/api/business-plans/{plan_id}", response_model=DeleteResponse)
async def delete_plan(plan_id: str) -> DeleteResponse:
    if not delete_business_plan(get_supabase_client(), plan_id):
        raise NotFoundError("Business plan not found")
    logger.info("Deleted business plan %s", plan_id)
    return DeleteResponse()


@router.get("/api/business-plans/{plan_id}/section")
async def get_section(plan_id: str, section: str) -> dict[str, Any]:
    """One content section of the plan; an unwritten section reads as empty."""
    content = plan_content(_load_plan(plan_id))
    return {"section": section, "data": content.get(section) or {}}


@router.put("/api/business-plans/{plan_id}/section")
async def update_section(plan_id: str, request: SectionUpdate) -> dict[str, Any]:
    """Shallow-merge ``data`` into the named section."""
    plan = _load_plan(plan_id)
    merged = merge_section(get_supabase_client(), plan, request.section, request.data)
    return {"section": request.section, "data": merged}


@router.get(
    "/api/business-plans/{plan_id}/financial-plan/break-even-analysis",
    response_model=BreakEvenState,
)
async def get_break_even(plan_id: str) -> BreakEvenState:
    financial_plan = plan_content(_load_plan(plan_id)).get(FINANCIAL_PLAN) or {}
    return BreakEvenState(
        break_even_analysis=financial_plan.get("breakEvenAnalysis") or "",
        break_even_data=financial_plan.get("breakEvenData") or {},
    )


def _latest_user_message(request: BreakEvenRequest) -> str | None:
    """``message`` wins; otherwise the newest non-empty user turn in ``messages``."""
    if request.message:
        return request.message
    for message in reversed(request.messages or []):
        if message.role == "user" and message.content.strip():
            return message.content
    return None


def _is_help_request(request: BreakEvenRequest) -> bool:
    """Explicit flag, or a system message saying the user needs help."""
    return request.is_help_request or any(
        m.role == "system" and HELP_MARKER in m.content for m in request.messages or []
    )


# Sync handler: the rate limiter blocks, so this runs in the threadpool.
@router.post(
    "/api/business-plans/{plan_id}/financial-plan/break-even-analysis",
    response_model=BreakEvenReply,
)
def break_even_turn(
    plan_id: str,
    request: BreakEvenRequest,
    llm: LLMClient = Depends(get_llm_client),
) -> BreakEvenReply:
    """Run one break-even conversation turn.

    The reply's embedded JSON is merged into the stored break-even data, the
    merged data is rendered as markdown, and both are saved under the plan's
    ``financialPlan`` section. The user only sees the cleaned prose.
    """
    latest = _latest_user_message(request)
    if not latest or not latest.strip():
        raise InvalidRequestError("Message is required")

    plan = _load_plan(plan_id)
    financial_plan = plan_content(plan).get(FINANCIAL_PLAN) or {}
    existing = financial_plan.get("breakEvenData") or {}

    if request.messages and not request.message:
        history = trim_history([m.model_dump() for m in request.messages], settings.history_window)
    else:
        history = [{"role": "user", "content": latest}]

    system = build_break_even_prompt(existing, financial_plan, _is_help_request(request))
    reply = llm.complete(system, history or [{"role": "user", "content": latest}])

    data = extract_structured_data(reply, existing, BreakEvenUpdate)
    analysis = format_break_even_text(data)
    merge_section(
        get_supabase_client(),
        plan,
        FINANCIAL_PLAN,
        {"breakEvenData": data, "breakEvenAnalysis": analysis},
    )
    if data is not existing:
        logger.info("Updated break-even data for plan %s", plan_id)

    return BreakEvenReply(
        message=clean_response(reply),
        break_even_data=data,
        break_even_analysis=analysis,
    )
