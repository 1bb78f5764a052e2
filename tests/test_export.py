"""Tests for the JSON export boundary."""
import json
from typing import Any

import pytest
from pydantic import BaseModel
from structlog.testing import capture_logs

from metatrace.errors import MetaTraceError, SerializationError
from metatrace.export import model_to_json, models_to_json


class Payload(BaseModel):
    name: str
    value: Any = None


def test_model_to_json_is_pretty_printed():
    exported = model_to_json(Payload(name="ok", value=1))
    assert exported == '{\n  "name": "ok",\n  "value": 1\n}'


def test_indent_can_be_overridden():
    assert model_to_json(Payload(name="ok"), indent=4).startswith('{\n    "name"')


def test_models_to_json_keeps_order():
    exported = models_to_json([Payload(name="b"), Payload(name="a")], Payload)
    assert [row["name"] for row in json.loads(exported)] == ["b", "a"]


def test_unserializable_model_raises_serialization_error():
    with capture_logs() as logs:
        with pytest.raises(SerializationError) as exc_info:
            model_to_json(Payload(name="bad", value=object()))

    assert isinstance(exc_info.value, MetaTraceError)
    assert exc_info.value.__cause__ is not None
    assert logs[0]["event"] == "export_failed"
    assert logs[0]["log_level"] == "error"


def test_unserializable_list_raises_serialization_error():
    with pytest.raises(SerializationError):
        models_to_json([Payload(name="ok"), Payload(name="bad", value=object())], Payload)
