import unittest

from sheet_gateway.errors import (
    OP_DATA,
    OP_HEADERS,
    OP_SHEETS,
    UpstreamError,
    error_body,
    translate_error,
)


class TranslateErrorTests(unittest.TestCase):
    def test_permission_denied_for_every_operation(self):
        for op in (OP_SHEETS, OP_HEADERS, OP_DATA):
            with self.subTest(op=op):
                message = translate_error(UpstreamError("forbidden", 403), op, client_email="sa@x.iam")
                self.assertEqual(message, "Permission denied - ensure service account sa@x.iam has access to the sheet")

    def test_not_found_wording_depends_on_operation(self):
        error = UpstreamError("missing", 404)
        self.assertEqual(translate_error(error, OP_SHEETS), "Spreadsheet not found - check the spreadsheet ID")
        self.assertEqual(
            translate_error(error, OP_DATA),
            "Sheet not found - check the sheet name and spreadsheet ID",
        )

    def test_bad_request_is_a_range_error_only_for_range_reads(self):
        error = UpstreamError("Unable to parse range", 400)
        self.assertEqual(translate_error(error, OP_HEADERS), "Invalid range - check the range format")
        self.assertEqual(translate_error(error, OP_DATA), "Invalid range - check the range format")
        self.assertEqual(translate_error(error, OP_SHEETS), "Unable to parse range")

    def test_unmapped_code_uses_message_then_fallback(self):
        self.assertEqual(translate_error(UpstreamError("quota exceeded", 429), OP_SHEETS), "quota exceeded")
        self.assertEqual(translate_error(UpstreamError("", 500), OP_HEADERS), "Failed to fetch headers")
        self.assertEqual(translate_error(UpstreamError(""), OP_DATA), "Failed to fetch data")


class ErrorBodyTests(unittest.TestCase):
    def test_code_sentinel_when_absent(self):
        body = error_body(UpstreamError("bad key"), OP_SHEETS)
        self.assertEqual(body, {"success": False, "error": "bad key", "code": "UNKNOWN_ERROR"})

    def test_upstream_code_is_kept(self):
        body = error_body(UpstreamError("gone", 404), OP_SHEETS)
        self.assertEqual(body["code"], 404)


if __name__ == "__main__":
    unittest.main()
