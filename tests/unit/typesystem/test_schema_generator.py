from __future__ import annotations

import dataclasses
from decimal import Decimal

from pydantic import BaseModel, Field
import pytest

from gemini_bridge.core.types import Envelope
from gemini_bridge.typesystem import generate_schema
from tests.helpers import Address


class DescribedInvoice(BaseModel):
    amount: Decimal = Field(description="Total amount due")
    order_id: str


class Basket(BaseModel):
    items: list[Address]
    counts: dict[str, int]
    note: str | None = None


class Pick(BaseModel):
    code: int | str
    maybe: int | str | None = None


@dataclasses.dataclass
class Parent:
    name: str
    child: Child


@dataclasses.dataclass
class Child:
    parent: Parent


@pytest.mark.unit
def test_object_schema_with_description_comments():
    assert generate_schema(DescribedInvoice) == (
        "{\n"
        "  // Total amount due\n"
        '  "amount": decimal,\n'
        '  "order_id": string\n'
        "}"
    )


@pytest.mark.unit
def test_collections_dictionaries_and_nullables():
    schema = generate_schema(Basket)

    assert '"counts": Dictionary<string, integer>,' in schema
    assert '"note": string | null' in schema
    assert (
        '  "items": [\n'
        "    {\n"
        '      "city": string,\n'
        '      "street": string\n'
        "    }\n"
        "  ],"
    ) in schema


@pytest.mark.unit
def test_leaf_collections_use_array_labels():
    assert generate_schema(list[int]) == "Array<integer>"
    assert generate_schema(dict[str, list[Decimal]]) == "Dictionary<string, Array<decimal>>"


@pytest.mark.unit
def test_cycles_degrade_to_object_instead_of_failing():
    schema = generate_schema(Parent)

    assert '"parent": object' in schema
    assert '"name": string' in schema


@pytest.mark.unit
def test_envelope_wraps_leaf_targets():
    assert generate_schema(Envelope[int]) == (
        "{\n  // The extracted value\n  \"result\": integer\n}"
    )


@pytest.mark.unit
def test_unions_render_every_member():
    assert generate_schema(Pick) == (
        '{\n  "code": integer | string,\n  "maybe": integer | string | null\n}'
    )
