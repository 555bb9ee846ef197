from __future__ import annotations

import dataclasses
from decimal import Decimal
from typing import NamedTuple, TypedDict

from pydantic import BaseModel
import pytest

from gemini_bridge.core.types import Envelope
from gemini_bridge.typesystem import bind_value, generate_schema, wire_type
from tests.helpers import Customer, Invoice


class Person:
    name: str
    age: int


class Pet:
    name: str
    nickname: str | None = None
    owner: Person

    @property
    def label(self) -> str:
        return f"{self.name} ({self.owner.name})"


class Point:
    x: int
    y: int

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        self.built_by_init = True


class Tagged:
    tag: str

    def __init__(self, raw: str) -> None:
        self.tag = raw.upper()


@dataclasses.dataclass
class Visit:
    vet: str
    patient: Pet


class Household(TypedDict):
    people: list[Person]


class Pair(NamedTuple):
    left: Person
    right: Person


def _validate(tp, payload):
    envelope = Envelope[wire_type(tp)].model_validate({"result": payload})
    return bind_value(tp, envelope.result)


@pytest.mark.unit
@pytest.mark.parametrize(
    "tp", [int, str | None, Invoice, Customer, list[Invoice], dict[str, Decimal]]
)
def test_types_pydantic_handles_are_left_alone(tp):
    assert wire_type(tp) == tp


@pytest.mark.unit
def test_plain_class_is_built_from_its_members():
    person = _validate(Person, {"name": "Ada", "age": "3"})

    assert type(person) is Person
    assert (person.name, person.age) == ("Ada", 3)


@pytest.mark.unit
def test_generated_model_is_reused():
    wired = wire_type(Person)

    assert issubclass(wired, BaseModel)
    assert wire_type(Person) is wired
    assert set(wired.model_fields) == {"name", "age"}


@pytest.mark.unit
def test_nested_plain_members_and_class_defaults():
    pet = _validate(Pet, {"name": "Rex", "owner": {"name": "Ada", "age": 30}})

    assert isinstance(pet.owner, Person)
    assert pet.nickname is None
    assert pet.label == "Rex (Ada)"
    assert "label" not in wire_type(Pet).model_fields


@pytest.mark.unit
def test_records_holding_plain_classes_are_rebuilt():
    visit = _validate(
        Visit, {"vet": "Dr. Who", "patient": {"name": "Rex", "owner": {"name": "Ada", "age": 1}}}
    )
    household = _validate(Household, {"people": [{"name": "Ada", "age": 1}]})
    pair = _validate(
        Pair, {"left": {"name": "A", "age": 1}, "right": {"name": "B", "age": 2}}
    )

    assert isinstance(visit, Visit)
    assert isinstance(visit.patient.owner, Person)
    assert isinstance(household["people"][0], Person)
    assert isinstance(pair, Pair)
    assert pair.right.name == "B"


@pytest.mark.unit
def test_containers_keep_their_runtime_type():
    people = _validate(tuple[Person, ...], [{"name": "A", "age": 1}])
    unique = _validate(set[Person], [{"name": "A", "age": 1}])
    by_name = _validate(dict[str, Person], {"a": {"name": "A", "age": 1}})
    either = _validate(int | Person, {"name": "A", "age": 1})

    assert type(people) is tuple
    assert isinstance(people[0], Person)
    assert type(unique) is set
    assert isinstance(by_name["a"], Person)
    assert isinstance(either, Person)


@pytest.mark.unit
def test_matching_init_is_called_and_other_inits_are_bypassed():
    point = _validate(Point, {"x": 1, "y": 2})
    tagged = _validate(Tagged, {"tag": "keep"})

    assert point.built_by_init is True
    assert tagged.tag == "keep"


@pytest.mark.unit
def test_schema_of_generated_model_lists_data_members_only():
    schema = generate_schema(Envelope[wire_type(Pet)])

    assert '"nickname": string | null' in schema
    assert '"age": integer' in schema
    assert '"label"' not in schema
