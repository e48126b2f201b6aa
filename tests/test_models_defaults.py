import unittest

from sheet_gateway.models import AccessResponse, ServiceAccountConnection, SheetRequest


class ModelDefaultsTests(unittest.TestCase):
    def test_connection_requires_all_three_fields(self):
        full = ServiceAccountConnection(clientEmail="a@b", privateKey="k", projectId="p")
        self.assertTrue(full.is_complete)
        self.assertFalse(ServiceAccountConnection(clientEmail="a@b", privateKey="k").is_complete)
        self.assertFalse(ServiceAccountConnection(clientEmail="a@b", privateKey="", projectId="p").is_complete)

    def test_connection_name_is_coerced_to_text(self):
        self.assertEqual(ServiceAccountConnection(name=42).name, "42")
        self.assertIsNone(ServiceAccountConnection().name)

    def test_unknown_fields_are_ignored(self):
        req = SheetRequest.model_validate(
            {"spreadsheetId": "abc", "sheetName": "S", "connection": {"clientEmail": "a@b", "type": "sa"}, "x": 1}
        )
        self.assertEqual(req.spreadsheetId, "abc")
        self.assertEqual(req.connection.clientEmail, "a@b")

    def test_blank_range_counts_as_absent(self):
        self.assertIsNone(SheetRequest(range="  ").range)
        self.assertIsNone(SheetRequest().range)
        self.assertEqual(SheetRequest(range="A1:B2").range, "A1:B2")

    def test_access_response_defaults_to_success(self):
        denied = AccessResponse(hasAccess=False, error="nope", code=403)
        self.assertTrue(denied.success)
        self.assertIsNone(denied.spreadsheetTitle)


if __name__ == "__main__":
    unittest.main()
