import datetime
from decimal import Decimal
from enum import Enum
from typing import Literal
import uuid

import pytest

from gemini_bridge.typesystem import type_label
from gemini_bridge.typesystem.names import DATETIME_HINT, TIME_HINT
from tests.helpers import Address


class Status(Enum):
    OPEN = "open"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("tp", "plain", "hinted"),
    [
        (int, "number", "integer"),
        (float, "number", "decimal"),
        (Decimal, "number", "decimal"),
        (bool, "boolean", "boolean"),
        (str, "string", "string"),
        (datetime.date, "string", "date-iso"),
        (uuid.UUID, "string", "uuid"),
        (Status, "string", "string"),
        (Literal["a"], "string", "string"),
        (bytes, "string", "string"),
        (Address, "any", "any"),
        (list[int], "any", "any"),
        (dict[str, int], "any", "any"),
    ],
)
def test_labels_with_and_without_hints(tp, plain, hinted):
    assert type_label(tp, include_format_hints=False) == plain
    assert type_label(tp, include_format_hints=True) == hinted


@pytest.mark.unit
def test_nullable_types_are_unwrapped():
    assert type_label(int | None, include_format_hints=True) == "integer"
    assert type_label(uuid.UUID | None, include_format_hints=False) == "string"


@pytest.mark.unit
def test_datetime_hint_instructs_default_midnight():
    label = type_label(datetime.datetime, include_format_hints=True)
    assert label == DATETIME_HINT
    assert "assume 00:00:00" in label
    assert type_label(datetime.datetime, include_format_hints=False) == "string"


@pytest.mark.unit
def test_time_and_duration_share_fixed_format_hint():
    assert type_label(datetime.time, include_format_hints=True) == TIME_HINT
    assert type_label(datetime.timedelta, include_format_hints=True) == TIME_HINT
    assert "HH:MM:SS" in TIME_HINT


@pytest.mark.unit
def test_union_labels_join_member_labels():
    assert type_label(int | str, include_format_hints=True) == "integer | string"
    assert type_label(int | str | None, include_format_hints=True) == "integer | string"
    assert type_label(int | float, include_format_hints=False) == "number"
