"""Unit tests for pure helpers."""

from datetime import datetime, timedelta
from lookin.schemas.listing import parse_amount
from lookin.utils.encryption import MessageEncryption
from lookin.utils.tags import toggle_tag, unique_tags, invalid_tags, matches_any, matches_all
from lookin.utils.timefmt import format_relative_time


class TestTags:

    def test_toggle_adds_then_removes(self):
        tags = ["Clean", "Quiet"]
        added = toggle_tag(tags, "Social")
        assert added == ["Clean", "Quiet", "Social"]
        assert toggle_tag(added, "Social") == tags
        # Input list is not modified
        assert tags == ["Clean", "Quiet"]

    def test_toggle_on_empty(self):
        assert toggle_tag(None, "Yoga") == ["Yoga"]

    def test_unique_tags(self):
        assert unique_tags([" Clean", "Clean", "", "Quiet "]) == ["Clean", "Quiet"]

    def test_invalid_tags(self):
        assert invalid_tags(["Clean", "Loud"], ["Clean", "Quiet"]) == ["Loud"]

    def test_matches_any(self):
        assert matches_any([], ["Clean"])
        assert matches_any(["Vegan", "Clean"], ["Clean"])
        assert not matches_any(["Vegan"], None)

    def test_matches_all(self):
        assert matches_all(["wifi", "AC"], ["ac", "wifi", "gym"])
        assert not matches_all(["wifi", "gym"], ["wifi"])
        assert matches_all([], [])


class TestRelativeTime:
    NOW = datetime(2024, 3, 15, 12, 0, 0)

    def test_labels(self):
        assert format_relative_time(self.NOW - timedelta(seconds=30), now=self.NOW) == "Just now"
        assert format_relative_time(self.NOW - timedelta(minutes=5), now=self.NOW) == "5m ago"
        assert format_relative_time(self.NOW - timedelta(hours=3), now=self.NOW) == "3h ago"
        assert format_relative_time(self.NOW - timedelta(days=2), now=self.NOW) == "2d ago"

    def test_older_than_a_week_shows_date(self):
        assert format_relative_time(datetime(2024, 3, 1, 9, 30), now=self.NOW) == "01/03/2024"

    def test_missing(self):
        assert format_relative_time(None) == ""


class TestParseAmount:

    def test_values(self):
        assert parse_amount(15000) == 15000
        assert parse_amount("12,500") == 12500
        assert parse_amount("negotiable") == 0
        assert parse_amount(None) == 0
        assert parse_amount(-5) == 0

    def test_leading_integer(self):
        assert parse_amount("12000.5") == 12000
        assert parse_amount(12000.5) == 12000
        assert parse_amount("5000/-") == 5000
        assert parse_amount(" 8000 per month") == 8000
        assert parse_amount("Rs 8000") == 0


class TestMessageEncryption:

    def test_round_trip(self):
        cipher = MessageEncryption("unit-test-key")
        token = cipher.encrypt("see you at 6")
        assert token != "see you at 6"
        assert cipher.decrypt(token) == "see you at 6"

    def test_other_key_returns_stored_value(self):
        token = MessageEncryption("key-one").encrypt("hello")
        assert MessageEncryption("key-two").decrypt(token) == token
