from __future__ import annotations

import unittest

from elmnet.pids import (
    PIDS,
    DataFormatError,
    PidNotFoundError,
    convert_pid_value,
    decode_obd_response,
    find_answer_line,
    get_pid_info,
)


class DecodeKnownPidTests(unittest.TestCase):
    def test_engine_rpm(self) -> None:
        self.assertEqual("2016 RPM", decode_obd_response("0C", "41 0C 1F 80\n"))

    def test_engine_rpm_quarter_revolution_units(self) -> None:
        # (31 * 256 + 136) / 4 = 2018
        self.assertEqual("2018 RPM", decode_obd_response("0C", "41 0C 1F 88\n"))

    def test_vehicle_speed(self) -> None:
        self.assertEqual("90 km/h", decode_obd_response("0D", "41 0D 5A\n"))

    def test_coolant_temperature(self) -> None:
        self.assertEqual("83 °C", decode_obd_response("05", "41 05 7B\n"))

    def test_below_zero_temperature(self) -> None:
        self.assertEqual("-40 °C", decode_obd_response("0F", "41 0F 00\n"))

    def test_fuel_pressure(self) -> None:
        self.assertEqual("300 kPa", decode_obd_response("0A", "41 0A 64\n"))

    def test_intake_manifold_pressure(self) -> None:
        self.assertEqual("33 kPa", decode_obd_response("0B", "41 0B 21\n"))

    def test_engine_load(self) -> None:
        self.assertEqual("100.0 %", decode_obd_response("04", "41 04 FF\n"))

    def test_control_module_voltage(self) -> None:
        self.assertEqual("12.345 V", decode_obd_response("42", "41 42 30 39\n"))

    def test_lowercase_hex_data(self) -> None:
        self.assertEqual("2016 RPM", decode_obd_response("0C", "41 0C 1f 80\n"))

    def test_lowercase_pid_code(self) -> None:
        self.assertEqual("2016 RPM", decode_obd_response("0c", "41 0C 1F 80\n"))
        self.assertEqual("90 km/h", decode_obd_response("0d", "41 0D 5A\n"))

    def test_answer_found_among_other_lines(self) -> None:
        response = "SEARCHING...\nBUS INIT\n41 0D 5A\n>\n"
        self.assertEqual("90 km/h", decode_obd_response("0D", response))

    def test_extra_data_bytes_are_ignored(self) -> None:
        self.assertEqual("90 km/h", decode_obd_response("0D", "41 0D 5A 00 00\n"))


class DecodePassthroughTests(unittest.TestCase):
    def test_unknown_pid_returns_raw_bytes(self) -> None:
        self.assertEqual("BE 3F A8 13", decode_obd_response("00", "41 00 BE 3F A8 13\n"))

    def test_loose_match_returned_verbatim(self) -> None:
        # Headers on: the answer does not start with "41 0D"
        response = "7E8 03 41 0D 5A\n>\n"
        self.assertEqual("7E8 03 41 0D 5A", decode_obd_response("0D", response))

    def test_short_lines_never_match_loosely(self) -> None:
        with self.assertRaises(PidNotFoundError):
            decode_obd_response("0D", "x 0D\n")

    def test_prefix_without_data_is_not_an_answer(self) -> None:
        with self.assertRaises(PidNotFoundError):
            find_answer_line("0D", "41 0D\n")

    def test_exact_match_wins_over_earlier_loose_line(self) -> None:
        line, exact = find_answer_line("0D", "7E8 03 41 0D 5A\n41 0D 5A\n")
        self.assertEqual("41 0D 5A", line)
        self.assertTrue(exact)


class DecodeErrorTests(unittest.TestCase):
    def test_no_data(self) -> None:
        with self.assertRaises(PidNotFoundError) as ctx:
            decode_obd_response("0A", "NO DATA\n>\n")
        self.assertEqual("0A", ctx.exception.pid)

    def test_empty_response(self) -> None:
        with self.assertRaises(PidNotFoundError):
            decode_obd_response("0C", "")

    def test_missing_data_byte(self) -> None:
        with self.assertRaises(DataFormatError) as ctx:
            decode_obd_response("0C", "41 0C 1F\n")
        self.assertEqual("0C", ctx.exception.pid)

    def test_non_hex_data(self) -> None:
        with self.assertRaises(DataFormatError):
            decode_obd_response("0D", "41 0D ZZ\n")

    def test_convert_checks_byte_count(self) -> None:
        with self.assertRaises(DataFormatError):
            convert_pid_value("0C", ["1F"])


class PidTableTests(unittest.TestCase):
    def test_every_entry_is_keyed_by_its_code(self) -> None:
        for code, info in PIDS.items():
            self.assertEqual(code, info.pid)
            self.assertEqual(2, len(code))

    def test_every_entry_formats_zero_bytes(self) -> None:
        for code, info in PIDS.items():
            value = convert_pid_value(code, ["00"] * info.bytes)
            self.assertTrue(value.endswith(info.unit), msg=f"{code}: {value}")

    def test_lookup_is_case_insensitive(self) -> None:
        self.assertIs(PIDS["0C"], get_pid_info("0c"))
        self.assertIsNone(get_pid_info("FF"))


if __name__ == "__main__":
    unittest.main()
