import json

import pytest

from casework.models import ComplaintCreate, ScenarioCreate
from casework.services.annotation import (
    FALLBACK_HR_RESPONSE,
    AnnotationApplied,
    AnnotationService,
    AnnotationSkipped,
)
from casework.storage import MemoryStorage


@pytest.mark.asyncio
async def test_analyze_complaint_parses_json_reply(stub_llm_factory, complaint_analysis):
    llm = stub_llm_factory(json.dumps(complaint_analysis))
    service = AnnotationService(llm)

    result = await service.analyze_complaint("Harassment", "My supervisor keeps making comments.")

    assert isinstance(result, AnnotationApplied)
    assert result.data.category == "harassment"
    assert result.data.priority.value == "high"
    assert llm.calls[0]["json_mode"] is True
    assert "Harassment" in llm.calls[0]["messages"][-1]["content"]


@pytest.mark.asyncio
async def test_analysis_accepts_fenced_json_and_clamps_scores(stub_llm_factory, complaint_analysis):
    complaint_analysis.update(priority="HIGH", sentiment=-4, confidence=1.7)
    llm = stub_llm_factory("```json\n" + json.dumps(complaint_analysis) + "\n```")

    result = await AnnotationService(llm).analyze_complaint("t", "d")

    assert isinstance(result, AnnotationApplied)
    assert result.data.sentiment == -1.0
    assert result.data.confidence == 1.0
    assert result.data.priority.value == "high"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reply",
    [
        "I think this is about harassment.",
        json.dumps({"category": "other"}),
        json.dumps(["not", "an", "object"]),
    ],
)
async def test_malformed_output_is_skipped(stub_llm_factory, reply):
    result = await AnnotationService(stub_llm_factory(reply)).analyze_complaint("t", "d")

    assert result == AnnotationSkipped("malformed model output")


@pytest.mark.asyncio
async def test_provider_error_is_skipped(stub_llm_factory):
    llm = stub_llm_factory(error=ConnectionError("network down"))

    result = await AnnotationService(llm).generate_scenario_response("scenario")

    assert isinstance(result, AnnotationSkipped)
    assert "ConnectionError" in result.reason


@pytest.mark.asyncio
async def test_slow_provider_times_out(stub_llm_factory, complaint_analysis):
    llm = stub_llm_factory(json.dumps(complaint_analysis), delay=0.5)

    result = await AnnotationService(llm, timeout_seconds=0.05).analyze_complaint("t", "d")

    assert result == AnnotationSkipped("timeout")


@pytest.mark.asyncio
async def test_annotate_complaint_merges_analysis(stub_llm_factory, complaint_analysis):
    storage = MemoryStorage()
    complaint = await storage.create_complaint(
        ComplaintCreate(title="Harassment", description="Repeated comments.", submitter_id="u1")
    )

    annotated = await AnnotationService(stub_llm_factory(json.dumps(complaint_analysis))).annotate_complaint(
        storage, complaint
    )

    assert annotated.id == complaint.id
    assert annotated.category == "harassment"
    assert annotated.priority == "high"
    assert annotated.ai_analysis == complaint_analysis["summary"]
    assert json.loads(annotated.ai_recommendations) == complaint_analysis["recommendations"]
    assert annotated.sentiment_score == -0.8
    assert annotated.confidence_score == 0.9
    assert (await storage.get_complaint(complaint.id)) == annotated


@pytest.mark.asyncio
async def test_annotate_complaint_leaves_record_untouched_on_failure(stub_llm_factory):
    storage = MemoryStorage()
    complaint = await storage.create_complaint(
        ComplaintCreate(title="Harassment", description="Repeated comments.", submitter_id="u1")
    )

    result = await AnnotationService(stub_llm_factory(error=RuntimeError("boom"))).annotate_complaint(
        storage, complaint
    )

    assert result == complaint
    assert (await storage.get_complaint(complaint.id)).ai_analysis is None


@pytest.mark.asyncio
async def test_annotate_scenario_merges_assessment(stub_llm_factory, scenario_assessment):
    storage = MemoryStorage()
    scenario = await storage.create_scenario(ScenarioCreate(scenario="A manager shouts at a colleague."))

    annotated = await AnnotationService(stub_llm_factory(json.dumps(scenario_assessment))).annotate_scenario(
        storage, scenario
    )

    assert annotated.ai_response == scenario_assessment["response"]
    assert json.loads(annotated.recommended_actions) == scenario_assessment["recommendedActions"]
    assert annotated.risk_level == "medium"


@pytest.mark.asyncio
async def test_hr_response_returns_text_or_fallback(stub_llm_factory):
    answered = await AnnotationService(stub_llm_factory("  Take annual leave via the portal.  ")).generate_hr_response(
        "How do I request leave?"
    )
    failed = await AnnotationService(stub_llm_factory(error=TimeoutError())).generate_hr_response("Anything?")

    assert answered == "Take annual leave via the portal."
    assert failed == FALLBACK_HR_RESPONSE
