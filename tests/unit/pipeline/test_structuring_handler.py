from decimal import Decimal

import pytest

from gemini_bridge.core.types import (
    AssessedCommand,
    Envelope,
    ExtractedCommand,
    ExtractionRequest,
    Failure,
    InitialCommand,
    Success,
)
from gemini_bridge.exceptions import ResponseParseError
from gemini_bridge.pipeline.structuring import STRUCTURING_UNAVAILABLE, StructuringHandler
from tests.helpers import FakeStructuringModel, Invoice


class Badge:
    holder: str
    level: int


class StrictBadge:
    holder: str

    def __init__(self, holder: str) -> None:
        raise TypeError("badges are issued, not parsed")


def _extracted(target=Invoice, corpus="Amount: 1234.56\nOrderId: ORD-1"):
    initial = InitialCommand(
        ExtractionRequest(text="Invoice $1234.56, Order ORD-1", query="Extract invoice"),
        target,
    )
    return ExtractedCommand(AssessedCommand(initial), corpus)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_envelope_result_becomes_success_value():
    model = FakeStructuringModel({"Amount": "1234.56", "OrderId": "ORD-1"})

    result = await StructuringHandler(model).handle(_extracted())

    assert result == Success(Invoice(Amount=Decimal("1234.56"), OrderId="ORD-1"))
    assert model.response_models == [Envelope[Invoice]]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_prompt_carries_schema_and_corpus():
    model = FakeStructuringModel(7)

    await StructuringHandler(model).handle(_extracted(target=int, corpus="7"))

    prompt = model.prompts[0]
    assert "Respond with valid JSON that matches this structure:" in prompt
    assert '"result": integer' in prompt
    assert prompt.endswith("7")


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "model",
    [
        FakeStructuringModel(None),
        FakeStructuringModel(error=RuntimeError("quota exceeded")),
        FakeStructuringModel(error=ResponseParseError("bad json", raw_response="{")),
    ],
    ids=["absent", "exception", "unparseable"],
)
async def test_structuring_problems_map_to_one_safe_message(model):
    result = await StructuringHandler(model).handle(_extracted())

    assert result == Failure(STRUCTURING_UNAVAILABLE)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_plain_class_target_is_rebuilt_from_validated_members():
    model = FakeStructuringModel({"holder": "Ada", "level": "2"})

    result = await StructuringHandler(model).handle(_extracted(target=Badge))

    assert isinstance(result, Success)
    assert type(result.value) is Badge
    assert (result.value.holder, result.value.level) == ("Ada", 2)
    assert model.response_models[0].model_fields["result"].annotation is not Badge


@pytest.mark.unit
@pytest.mark.asyncio
async def test_class_rejecting_its_members_is_a_safe_failure():
    model = FakeStructuringModel({"holder": "Ada"})

    result = await StructuringHandler(model).handle(_extracted(target=StrictBadge))

    assert result == Failure(STRUCTURING_UNAVAILABLE)
