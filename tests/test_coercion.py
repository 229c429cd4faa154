"""Tests for raw value coercion and type inference."""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

import pytest
from entities import Status

from pafiso.coercion import coerce_value, escape_like_pattern, infer_value, parse_interval
from pafiso.exceptions import ValueCoercionError


class TestCoerceValue:
    def test_scalars(self) -> None:
        assert coerce_value("42", int) == 42
        assert coerce_value(" -7 ", int) == -7
        assert coerce_value("2.5", float) == 2.5
        assert coerce_value("19.99", Decimal) == Decimal("19.99")
        assert coerce_value("TRUE", bool) is True
        assert coerce_value("hello", str) == "hello"

    def test_temporal_values(self) -> None:
        assert coerce_value("2024-05-01", datetime.date) == datetime.date(2024, 5, 1)
        assert coerce_value("08:30:00", datetime.time) == datetime.time(8, 30)
        assert coerce_value("2024-05-01T10:00:00Z", datetime.datetime) == datetime.datetime(
            2024, 5, 1, 10, 0, tzinfo=datetime.timezone.utc
        )
        assert coerce_value("1:30:00", datetime.timedelta) == datetime.timedelta(hours=1, minutes=30)

    def test_uuid(self) -> None:
        value = uuid.uuid4()
        assert coerce_value(str(value), uuid.UUID) == value

    def test_enum_by_label_and_name(self) -> None:
        assert coerce_value("published", Status) is Status.PUBLISHED
        assert coerce_value("DRAFT", Status) is Status.DRAFT
        assert coerce_value("Draft", Status) is Status.DRAFT

    def test_none_passes_through(self) -> None:
        assert coerce_value(None, int) is None

    def test_untyped_target_infers(self) -> None:
        assert coerce_value("12", None) == 12.0

    @pytest.mark.parametrize(
        ("raw", "target"),
        [("abc", int), ("1.5", int), ("yes", bool), ("nope", Status), ("2024-13-01", datetime.date)],
    )
    def test_invalid_values_raise(self, raw: str, target: type) -> None:
        with pytest.raises(ValueCoercionError) as exc_info:
            coerce_value(raw, target, field="f")
        assert exc_info.value.field == "f"
        assert exc_info.value.value == raw


class TestInferValue:
    def test_float_wins_over_int(self) -> None:
        """Numbers are inferred as floats, even integral ones."""
        value = infer_value("42")
        assert value == 42.0
        assert isinstance(value, float)

    def test_bool(self) -> None:
        assert infer_value("true") is True
        assert infer_value("False") is False

    def test_digits_are_not_bools(self) -> None:
        assert infer_value("1") == 1.0
        assert infer_value("0") == 0.0

    def test_text_falls_back_to_string(self) -> None:
        assert infer_value("laptop") == "laptop"
        assert infer_value("nan") == "nan"
        assert infer_value("inf") == "inf"


class TestHelpers:
    def test_escape_like_pattern(self) -> None:
        assert escape_like_pattern("50%_off\\") == "50\\%\\_off\\\\"

    def test_parse_interval_shorthand(self) -> None:
        assert parse_interval("2w") == datetime.timedelta(weeks=2)
        assert parse_interval("1 day 2 hours") == datetime.timedelta(days=1, hours=2)
        assert parse_interval("90") == datetime.timedelta(seconds=90)

    def test_parse_interval_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            parse_interval("soon")
