"""
Tests for the stat formatter and its text helpers.
"""

import json

import pytest

from hypepulse.constants import PaginationConstants
from hypepulse.data_models.player import GuildRecord, PlayerIdentity, PlayerRecord, RecentGameEntry
from hypepulse.services.stat_formatter import StatFormatter, ViewSelector, bedwars_stats, skywars_stats
from hypepulse.utils.exceptions import FormatterFault
from hypepulse.utils.text import format_date, format_section, ratio, render_value, split_text

from conftest import TEST_UUID


def make_record(stats=None, **extra):
    payload = {"displayname": "Tester"}
    if stats is not None:
        payload["stats"] = stats
    payload.update(extra)
    return PlayerRecord.from_api(TEST_UUID, payload)


class TestTextHelpers:

    def test_ratio_zero_denominator_returns_numerator(self):
        assert ratio(10, 0) == 10
        assert ratio(10, None) == 10
        assert ratio(None, None) is None

    def test_ratio_rounds_to_two_decimals(self):
        assert ratio(10, 3) == "3.33"
        assert ratio(5, 2) == "2.50"
        assert ratio(4, 4) == "1.00"

    def test_split_is_lossless_and_bounded(self):
        text = "abcdefghij" * 937
        chunks = split_text(text, 1000)
        assert "".join(chunks) == text
        assert all(len(chunk) <= 1000 for chunk in chunks)
        assert len(chunks) == 10

    def test_split_empty(self):
        assert split_text("", 10) == []

    def test_split_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            split_text("abc", 0)

    def test_render_value(self):
        assert render_value({"a": 1}) == '{\n  "a": 1\n}'
        assert render_value(True) == "true"
        assert render_value(125.0) == "125"
        assert render_value(1.5) == "1.5"
        assert render_value(None) == "null"

    def test_format_section_skips_null(self):
        section = format_section("Title", {"a": 1, "b": None, "c": "x"})
        assert section == "**Title:**\n**a:** 1\n**c:** x\n"

    def test_format_date(self):
        assert format_date(1359331200000) == "1/28/2013"
        assert format_date(None) == "N/A"


class TestModeExtractors:

    def test_skywars_without_deaths_keeps_raw_kills(self):
        data = skywars_stats(make_record({"SkyWars": {"skywars_kills": 10}}))
        assert data["kdr"] == 10
        assert data["deaths"] == 0
        assert data["stars"] == "N/A"

    def test_skywars_ratios(self, player_record):
        data = skywars_stats(player_record)
        assert data["stars"] == 12
        assert data["wlr"] == "3.50"
        # no final kills at all: ratio is absent and left out of the section
        assert data["fkdr"] is None

    def test_bedwars_ratios(self, player_record):
        data = bedwars_stats(player_record)
        assert data["kdr"] == "2.50"
        assert data["fkdr"] == 5
        assert data["wlr"] == 4
        assert data["finalDeaths"] == 0

    def test_skywars_text(self):
        formatter = StatFormatter()
        text = formatter.format_text(make_record({"SkyWars": {"skywars_kills": 10}}), ViewSelector.for_mode("skywars"))
        assert text.startswith("**SkyWars Stats for Tester:**\n")
        assert "**kdr:** 10\n" in text
        assert "**deaths:** 0\n" in text
        assert "**fkdr:**" not in text

    def test_mode_without_stats_uses_defaults(self):
        text = StatFormatter().format_text(make_record(), ViewSelector.for_mode("pit"))
        assert "**coins:** 0\n" in text
        assert "**level:** N/A\n" in text

    def test_bridge_duels(self, player_record):
        text = StatFormatter().format_text(player_record, ViewSelector.for_mode("bridgeduels"))
        assert "**kdr:** 1.50\n" in text
        assert "**wlr:** 3\n" in text

    def test_skyblock_sections(self):
        record = make_record({"SkyBlock": {
            "profiles": {"abc": {"cute_name": "Apple"}},
            "slayers": {},
            "fairy_souls": 42,
        }})
        text = StatFormatter().format_text(record, ViewSelector.for_mode("skyblock"))
        assert text.startswith("**SkyBlock Stats for Tester:**\n**Profiles:**\n")
        assert '"cute_name": "Apple"' in text
        assert "**Slayers:**" not in text
        assert "**Other SkyBlock Stats:**\n**fairy_souls:** 42\n" in text

    def test_skyblock_empty(self):
        text = StatFormatter().format_text(make_record(), ViewSelector.for_mode("skyblock"))
        assert text.endswith("No SkyBlock stats available.")

    def test_unknown_mode(self, player_record):
        with pytest.raises(FormatterFault):
            StatFormatter().format_text(player_record, ViewSelector.for_mode("tnt"))


class TestAllStats:

    def test_renders_every_key_generically(self, player_record):
        text = StatFormatter().all_stats_text(player_record)
        assert text.startswith("**All Stats for Notch:**\n")
        assert "\n**Bedwars Stats:**\n" in text
        assert "**favourites_2:** wool,stone\n" in text
        assert "**shop:** " + json.dumps({"slot_1": "wool", "slot_2": None}, indent=2) in text
        # scalars at the mode level carry no stats
        assert "Legacy" not in text

    def test_no_stats_gives_single_placeholder_page(self):
        pages = StatFormatter().format(make_record(), ViewSelector.all_stats())
        assert len(pages) == 1
        assert pages[0].body.endswith("No stats available.")

    def test_record_is_not_mutated(self, player_record):
        before = dict(player_record.stats["Bedwars"].fields)
        StatFormatter().format(player_record, ViewSelector.detailed())
        assert dict(player_record.stats["Bedwars"].fields) == before

    def test_missing_record_is_a_fault(self):
        with pytest.raises(FormatterFault):
            StatFormatter().format(None, ViewSelector.all_stats())


class TestPaging:

    def test_9000_chars_make_three_pages(self):
        text = "x" * 9000
        pages = StatFormatter().paginate_text(text, "Stats for Tester")
        assert [len(page.body) for page in pages] == [3500, 3500, 2000]
        assert "".join(page.body for page in pages) == text
        assert [page.title for page in pages] == [
            "Stats for Tester (Part 1)",
            "Stats for Tester (Part 2)",
            "Stats for Tester (Part 3)",
        ]

    def test_single_chunk_keeps_title(self):
        pages = StatFormatter().paginate_text("short", "Stats for Tester")
        assert len(pages) == 1
        assert pages[0].title == "Stats for Tester"

    def test_every_page_within_limit(self):
        record = make_record({"Arcade": {f"stat_{i}": i for i in range(2000)}})
        formatter = StatFormatter()
        for view, limit in (
            (ViewSelector.all_stats(), PaginationConstants.TEXT_PAGE_LENGTH),
            (ViewSelector.detailed(), PaginationConstants.DETAILED_PAGE_LENGTH),
        ):
            pages = formatter.format(record, view)
            assert len(pages) > 1
            assert all(len(page.body) <= limit for page in pages)


class TestDetailed:

    def test_general_page_then_one_page_per_mode(self, player_record):
        pages = StatFormatter().format(player_record, ViewSelector.detailed())
        assert pages[0].title == "General Info for Notch"
        assert {f.name: f.value for f in pages[0].fields} == {
            "Rank": "MVP_PLUS",
            "First Login": "1/28/2013",
            "Last Login": "1/1/2024",
        }
        assert [page.title for page in pages[1:]] == ["SkyWars Stats", "Bedwars Stats", "Duels Stats", "Pit Stats"]

    def test_long_mode_is_split_into_parts(self):
        record = make_record({"Arcade": {"blob": "y" * 5000}})
        pages = StatFormatter().format(record, ViewSelector.detailed())
        assert [page.title for page in pages[1:]] == ["Arcade Stats (Part 1)", "Arcade Stats (Part 2)"]
        assert len(pages[1].body) == 4000

    def test_empty_mode_says_no_data(self):
        pages = StatFormatter().format(make_record({"Arcade": {}}), ViewSelector.detailed())
        assert pages[1].body == "No data available."


class TestOtherReplies:

    def test_identity_text(self):
        identity = PlayerIdentity(username="Notch", uuid=TEST_UUID)
        assert StatFormatter.identity_text(identity, "notch") == f"UUID for **notch** is: `{TEST_UUID}`"

    def test_recent_games(self):
        games = (RecentGameEntry("BEDWARS", "Lighthouse"), RecentGameEntry(None, None))
        text = StatFormatter.recent_games_text("Notch", games)
        assert text == (
            "**Recent Games for Notch:**\n"
            "**Game 1:** BEDWARS on Lighthouse\n"
            "**Game 2:** Unknown on N/A\n"
        )

    def test_no_recent_games(self):
        assert StatFormatter.recent_games_text("Notch", ()) == "No recent games found for **Notch**."

    def test_guild_page(self):
        page = StatFormatter().guild_page(GuildRecord(name=None, tag="BLD"), "Notch")
        assert page.title == "Guild Info for Notch"
        assert page.body == "**Guild Name:** N/A\n**Tag:** BLD"

    def test_profile_page(self, player_record):
        page = StatFormatter().profile_page(player_record)
        assert page.title == "Hypixel Profile: Notch"
        assert page.body == f"UUID: `{TEST_UUID}`"
