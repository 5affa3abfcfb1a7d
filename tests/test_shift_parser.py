import unittest
from datetime import date

from cafeops.core.shift_parser import parse_shift_text

TODAY = date(2025, 3, 1)


class ShiftParserTests(unittest.TestCase):
    def test_slash_date_colon_times_name_and_notes(self) -> None:
        parsed = parse_shift_text("Tanaka 10/25 10:00-17:00 first week", today=TODAY)
        self.assertEqual(
            parsed,
            {
                "date": "2025-10-25",
                "start_time": "10:00",
                "end_time": "17:00",
                "employee_name": "Tanaka",
                "notes": "first week",
            },
        )

    def test_japanese_date_and_hour_markers(self) -> None:
        parsed = parse_shift_text("10月5日 10時から17時まで 田中 新人研修", today=TODAY)
        self.assertEqual(parsed["date"], "2025-10-05")
        self.assertEqual(parsed["start_time"], "10:00")
        self.assertEqual(parsed["end_time"], "17:00")
        self.assertEqual(parsed["employee_name"], "田中")
        self.assertEqual(parsed["notes"], "新人研修")

    def test_bare_hours_with_tilde(self) -> None:
        parsed = parse_shift_text("Sato 9~17", today=TODAY)
        self.assertEqual(parsed, {"start_time": "09:00", "end_time": "17:00", "employee_name": "Sato"})

    def test_minutes_and_word_separator(self) -> None:
        parsed = parse_shift_text("Sato 9:30 to 18", today=TODAY)
        self.assertEqual(parsed["start_time"], "09:30")
        self.assertEqual(parsed["end_time"], "18:00")

    def test_year_comes_from_today(self) -> None:
        parsed = parse_shift_text("1/2 Kenji", today=date(2031, 12, 30))
        self.assertEqual(parsed["date"], "2031-01-02")

    def test_impossible_date_is_ignored(self) -> None:
        parsed = parse_shift_text("Sato 13/40", today=TODAY)
        self.assertNotIn("date", parsed)
        self.assertEqual(parsed["employee_name"], "Sato")
        self.assertEqual(parsed["notes"], "13/40")

    def test_full_date_with_year(self) -> None:
        parsed = parse_shift_text("2024/10/25 Taro 9-17", today=TODAY)
        self.assertEqual(
            parsed,
            {
                "date": "2024-10-25",
                "start_time": "09:00",
                "end_time": "17:00",
                "employee_name": "Taro",
            },
        )

    def test_japanese_full_date(self) -> None:
        parsed = parse_shift_text("2026年1月3日 田中", today=TODAY)
        self.assertEqual(parsed["date"], "2026-01-03")
        self.assertEqual(parsed["employee_name"], "田中")

    def test_later_valid_date_is_used_after_an_impossible_one(self) -> None:
        parsed = parse_shift_text("Sato 13/40 4/2", today=TODAY)
        self.assertEqual(parsed["date"], "2025-04-02")
        self.assertEqual(parsed["notes"], "13/40")

    def test_out_of_range_hours_are_left_as_notes(self) -> None:
        parsed = parse_shift_text("Kenji 25:00-26:00", today=TODAY)
        self.assertNotIn("start_time", parsed)
        self.assertNotIn("end_time", parsed)
        self.assertEqual(parsed["notes"], "25:00-26:00")

    def test_empty_text(self) -> None:
        self.assertEqual(parse_shift_text("", today=TODAY), {})
        self.assertEqual(parse_shift_text("   ", today=TODAY), {})

    def test_is_pure(self) -> None:
        text = "Tanaka 10/25 10:00-17:00"
        self.assertEqual(parse_shift_text(text, today=TODAY), parse_shift_text(text, today=TODAY))
