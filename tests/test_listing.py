import os

import pytest

from appscout.listing import AppFilter, SortOrder, add_manual, manual_record, matches, visible_records
from appscout.models import ApplicationRecord, sort_catalog

RECORDS = [
    ApplicationRecord("Café Bar", "/opt/cafe/cafe.exe", False),
    ApplicationRecord("calc", "C:/Windows/System32/calc.exe", True),
    ApplicationRecord("Blender", "/opt/blender/blender.exe", False),
    ApplicationRecord("notepad", "C:/Windows/System32/notepad.exe", True),
]


@pytest.mark.parametrize("kind, expected", [
    (AppFilter.ALL, ["Blender", "Café Bar", "calc", "notepad"]),
    (AppFilter.SYSTEM, ["calc", "notepad"]),
    (AppFilter.USER, ["Blender", "Café Bar"]),
])
def test_filter_by_origin(kind, expected):
    assert [r.display_name for r in visible_records(RECORDS, kind)] == expected


def test_search_is_case_and_accent_insensitive():
    assert [r.display_name for r in visible_records(RECORDS, query="CAFE")] == ["Café Bar"]
    assert [r.display_name for r in visible_records(RECORDS, query="  bar  café ")] == ["Café Bar"]
    assert visible_records(RECORDS, query="xyz") == []


def test_blank_query_matches_everything():
    assert len(visible_records(RECORDS, query="   ")) == len(RECORDS)
    assert matches(RECORDS[0], "")


def test_descending_sort_combined_with_filter():
    out = visible_records(RECORDS, AppFilter.SYSTEM, "", SortOrder.NAME_DESC)

    assert [r.display_name for r in out] == ["notepad", "calc"]


def test_visible_records_does_not_mutate_input():
    before = list(RECORDS)
    visible_records(RECORDS, AppFilter.USER, "b", SortOrder.NAME_DESC)
    assert RECORDS == before


def test_manual_record_strips_extension(tmp_path):
    rec = manual_record(str(tmp_path / "Tools" / "MyApp.EXE"))

    assert rec.display_name == "MyApp"
    assert rec.launch_path == os.path.abspath(str(tmp_path / "Tools" / "MyApp.EXE"))
    assert rec.is_system_app is False
    assert manual_record("/usr/bin/krita", exe_extension="").display_name == "krita"


def test_add_manual_skips_exact_duplicates(tmp_path):
    path = str(tmp_path / "Game.exe")

    once = add_manual(RECORDS, path)
    twice = add_manual(once, path)

    assert len(once) == len(RECORDS) + 1
    assert twice == once


def test_sort_catalog_is_ordinal():
    recs = [ApplicationRecord(n, "/x/" + n) for n in ("beta", "Zulu", "alpha", "Alpha")]

    assert [r.display_name for r in sort_catalog(recs)] == ["Alpha", "Zulu", "alpha", "beta"]


def test_record_requires_launch_path():
    with pytest.raises(ValueError):
        ApplicationRecord("Nothing", "")
