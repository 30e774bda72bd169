"""
Unit tests for the violation matcher.
"""

import re

import pytest

from violation_audit.core.matcher import find_violations, resolve_location
from violation_audit.core.models import DiagnosticRecord, Script, SourceLocation, ViolationMatch
from violation_audit.core.source_maps import MappedPosition

from conftest import PASSIVE_WARNING


SIGNATURE = re.compile(r"passive event listener")


class TestFindViolations:

    def test_empty_records(self):
        assert find_violations(SIGNATURE, []) == []

    def test_matching_record_keeps_only_location(self, passive_record):
        matches = find_violations(SIGNATURE, [passive_record])

        assert matches == [ViolationMatch(source=SourceLocation(url="a.js", line=10, column=0))]

    def test_unrelated_record_dropped(self, unrelated_record):
        assert find_violations(SIGNATURE, [unrelated_record]) == []

    def test_string_signature_is_compiled(self, passive_record):
        assert len(find_violations("passive event listener", [passive_record])) == 1

    def test_match_is_case_sensitive(self):
        record = DiagnosticRecord(message="PASSIVE EVENT LISTENER missing", url="a.js", line=1)
        assert find_violations(SIGNATURE, [record]) == []

    def test_match_is_unanchored(self):
        record = DiagnosticRecord(message="x passive event listenerx", url="a.js", line=1)
        assert len(find_violations(SIGNATURE, [record])) == 1

    def test_order_preserved(self):
        records = [
            DiagnosticRecord(message=PASSIVE_WARNING, url="c.js", line=3),
            DiagnosticRecord(message="noise", url="x.js", line=9),
            DiagnosticRecord(message=PASSIVE_WARNING, url="a.js", line=1),
            DiagnosticRecord(message=PASSIVE_WARNING, url="b.js", line=2),
        ]

        matches = find_violations(SIGNATURE, records)

        assert [m.source.url for m in matches] == ["c.js", "a.js", "b.js"]

    def test_duplicates_pass_through_by_default(self):
        record = DiagnosticRecord(message=PASSIVE_WARNING, url="a.js", line=10, column=2)

        assert len(find_violations(SIGNATURE, [record, record])) == 2

    def test_dedupe_drops_repeated_locations(self):
        records = [
            DiagnosticRecord(message=PASSIVE_WARNING, url="a.js", line=10, column=2),
            DiagnosticRecord(message=PASSIVE_WARNING, url="b.js", line=1, column=0),
            DiagnosticRecord(message=PASSIVE_WARNING, url="a.js", line=10, column=2),
        ]

        matches = find_violations(SIGNATURE, records, dedupe=True)

        assert [m.source.url for m in matches] == ["a.js", "b.js"]

    def test_malformed_records_are_skipped(self):
        records = [
            DiagnosticRecord(message=None, url="a.js", line=1),
            DiagnosticRecord(message=PASSIVE_WARNING, url="b.js", line=2),
        ]

        matches = find_violations(SIGNATURE, records)

        assert [m.source.url for m in matches] == ["b.js"]

    def test_record_sources_filter(self):
        records = [
            DiagnosticRecord(message=PASSIVE_WARNING, url="a.js", line=1, source="violation"),
            DiagnosticRecord(message=PASSIVE_WARNING, url="b.js", line=2, source="console.api"),
            DiagnosticRecord(message=PASSIVE_WARNING, url="c.js", line=3),
        ]

        matches = find_violations(SIGNATURE, records, record_sources={"violation"})

        assert [m.source.url for m in matches] == ["a.js"]

    def test_unknown_location_placeholder(self):
        record = DiagnosticRecord(message=PASSIVE_WARNING)

        matches = find_violations(SIGNATURE, [record])

        assert len(matches) == 1
        assert matches[0].source.is_unknown
        assert matches[0].source.display() == "Unknown"

    def test_source_map_resolution(self, bundle_snapshot):
        matches = find_violations(
            SIGNATURE,
            bundle_snapshot.records,
            source_maps=bundle_snapshot.source_maps,
            scripts=bundle_snapshot.scripts,
        )

        assert len(matches) == 2
        first, second = matches
        assert first.source.url == "https://example.com/bundle.js"
        assert first.source.original == SourceLocation(url="src/scroll.js", line=41, column=4)
        assert first.source.display() == "src/scroll.js:41:4"
        assert second.source.original is None
        assert second.source.display() == "https://cdn.example.com/vendor.js:3:7"


class _BrokenMap:
    def lookup(self, line, column):
        raise ValueError("corrupt mappings")


class _EmptyMap:
    def lookup(self, line, column):
        return None


class TestResolveLocation:

    def test_record_url_wins_over_script_url(self):
        record = DiagnosticRecord(message="m", url="inline.html", line=4, column=1, script_id="7")
        scripts = {"7": Script(script_id="7", url="other.js")}

        assert resolve_location(record, scripts=scripts) == SourceLocation(url="inline.html", line=4, column=1)

    def test_script_url_used_when_record_has_none(self):
        record = DiagnosticRecord(message="m", line=2, column=3, script_id="7")
        scripts = {"7": Script(script_id="7", url="app.js")}

        assert resolve_location(record, scripts=scripts) == SourceLocation(url="app.js", line=2, column=3)

    def test_missing_line_and_column_default_to_zero(self):
        record = DiagnosticRecord(message="m", url="a.js")

        assert resolve_location(record) == SourceLocation(url="a.js", line=0, column=0)

    def test_unknown_script_gives_placeholder(self):
        record = DiagnosticRecord(message="m", script_id="missing")

        assert resolve_location(record, scripts={}) == SourceLocation.unknown()

    def test_failed_lookup_keeps_unmapped_location(self, caplog):
        record = DiagnosticRecord(message="m", url="a.js", line=1, column=2, script_id="1")

        location = resolve_location(record, source_maps={"1": _BrokenMap()})

        assert location == SourceLocation(url="a.js", line=1, column=2)
        assert "Source map lookup failed" in caplog.text

    def test_lookup_without_mapping_keeps_unmapped_location(self):
        record = DiagnosticRecord(message="m", url="a.js", line=1, column=2, script_id="1")

        location = resolve_location(record, source_maps={"1": _EmptyMap()})

        assert location.original is None

    def test_mapped_position(self):
        class _Map:
            def lookup(self, line, column):
                return MappedPosition(source="src/x.ts", line=line + 1, column=column)

        record = DiagnosticRecord(message="m", url="x.js", line=5, column=6, script_id="1")

        location = resolve_location(record, source_maps={"1": _Map()})

        assert location.original == SourceLocation(url="src/x.ts", line=6, column=6)
        assert location.key() == ("x.js", 5, 6)
