"""
Unit tests for StaffRoster.
"""

import tempfile
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import StaffClass
from domain.staff_roster import StaffRoster


class TestDefaultRoster:
    """Tests for the built-in roster."""

    def test_counts(self):
        roster = StaffRoster()

        assert len(roster) == 25
        assert len(roster.nurses) == 15
        assert len(roster.assistants) == 10

    def test_part_time(self):
        roster = StaffRoster()
        part_time = [s.id for s in roster if s.is_part_time]

        assert part_time == ["a7", "a8", "a9", "a10"]

    def test_lookup(self):
        roster = StaffRoster()

        assert roster.get_staff_by_id("n1").staff_class == StaffClass.NURSE
        assert roster.get_staff_by_id("missing") is None


class TestLoadFromCsv:
    """Tests for the CSV loader."""

    def test_load(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "roster.csv"
            path.write_text(
                "id,name,class,part_time\n"
                "n1,สมศรี,nurse,\n"
                "a1,สมชาย,ผู้ช่วย,0\n"
                "a2,สมหญิง,Assistant,true\n"
                ",ไม่มีรหัส,nurse,\n",
                encoding="utf-8"
            )

            roster = StaffRoster.load_from_csv(path)

        assert [s.id for s in roster] == ["n1", "a1", "a2"]
        assert roster.get_staff_by_id("a1").staff_class == StaffClass.ASSISTANT
        assert roster.get_staff_by_id("a2").staff_class == StaffClass.ASSISTANT
        assert roster.get_staff_by_id("a2").is_part_time
        assert not roster.get_staff_by_id("a1").is_part_time

    def test_missing_file(self):
        roster = StaffRoster.load_from_csv(Path("/nonexistent/roster.csv"))
        assert len(roster) == 0
