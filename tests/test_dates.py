"""
creationDate normalization tests.
"""

from datetime import date

import pytest

from plan_store.core.dates import normalize_creation_date, parse_day_month_year
from plan_store.core.errors import MalformedInput


class TestParseDayMonthYear:

    @pytest.mark.parametrize("text,expected", [
        ("25-12-2023", date(2023, 12, 25)),
        ("01-01-2000", date(2000, 1, 1)),
        ("5-1-2024", date(2024, 1, 5)),
        ("29-02-2024", date(2024, 2, 29)),
        (" 12-12-2017 ", date(2017, 12, 12)),
    ])
    def test_valid_dates(self, text, expected):
        assert parse_day_month_year(text) == expected

    @pytest.mark.parametrize("text", [
        "2023-12-25",
        "25/12/2023",
        "31-02-2024",
        "29-02-2023",
        "25-13-2023",
        "25-12-23",
        "yesterday",
        "",
    ])
    def test_invalid_dates(self, text):
        with pytest.raises(ValueError):
            parse_day_month_year(text)


class TestNormalizeCreationDate:

    def test_rewrites_to_year_month_day(self):
        result = normalize_creation_date({"objectId": "abc123", "creationDate": "25-12-2023"})
        assert result["creationDate"] == "2023-12-25"

    def test_keeps_member_order_and_does_not_mutate_input(self):
        document = {"objectId": "abc123", "creationDate": "25-12-2023", "plan": "gold"}
        result = normalize_creation_date(document)
        assert list(result) == ["objectId", "creationDate", "plan"]
        assert document["creationDate"] == "25-12-2023"

    def test_absent_field_is_not_injected(self):
        document = {"objectId": "abc123"}
        result = normalize_creation_date(document)
        assert result == {"objectId": "abc123"}
        assert "creationDate" not in result

    def test_non_string_value_is_left_for_validation(self):
        document = {"objectId": "abc123", "creationDate": 20231225}
        assert normalize_creation_date(document)["creationDate"] == 20231225

    def test_malformed_date_is_rejected(self):
        with pytest.raises(MalformedInput) as exc_info:
            normalize_creation_date({"objectId": "abc123", "creationDate": "not a date"})

        error = exc_info.value
        assert error.status_code == 400
        assert error.message == "Malformed creationDate"
        assert [e.field for e in error.errors] == ["$.creationDate"]

    def test_already_normalized_date_is_rejected(self):
        """Only DD-MM-YYYY is accepted on input."""
        with pytest.raises(MalformedInput):
            normalize_creation_date({"creationDate": "2023-12-25"})

    def test_custom_field_name(self):
        result = normalize_creation_date({"effectiveDate": "01-02-2024"}, field="effectiveDate")
        assert result == {"effectiveDate": "2024-02-01"}
