import unittest

import requests

from student_dashboard.backend.services.gateway import GENERIC_ERROR, NOT_CONFIGURED, GatewayError, RemoteGateway

from fakes import API_URL, FakeResponse, FakeSession, assignment, fail, make_gateway, ok, real_response


class TestGatewayRequestContract(unittest.TestCase):
    def test_query_carries_key_action_and_params_in_order(self):
        gw = make_gateway({"updateStatus": ok()})
        gw.call("updateStatus", {"uid": "abc", "status": "Completed"})
        call = gw.session.calls[0]
        self.assertEqual(call["url"], API_URL)
        self.assertEqual(
            call["params"],
            [("key", "secret-key"), ("action", "updateStatus"), ("uid", "abc"), ("status", "Completed")],
        )

    def test_no_timeout_unless_configured(self):
        gw = make_gateway({"sync": ok()})
        gw.sync()
        self.assertIsNone(gw.session.calls[0]["timeout"])

        timed = RemoteGateway(API_URL, "k", timeout=5, session=FakeSession({"sync": ok()}))
        timed.sync()
        self.assertEqual(timed.session.calls[0]["timeout"], 5)

    def test_returns_unwrapped_data(self):
        gw = make_gateway({"getCategories": ok(["Math", "History"])})
        self.assertEqual(gw.call("getCategories"), ["Math", "History"])

    def test_unconfigured_url_fails_per_call(self):
        notices = []
        gw = RemoteGateway("", "key", notify=notices.append, session=FakeSession({"sync": ok()}))
        with self.assertRaises(GatewayError) as ctx:
            gw.sync()
        self.assertEqual(ctx.exception.message, NOT_CONFIGURED)
        self.assertEqual(notices, [f"❌ Error: {NOT_CONFIGURED}"])
        self.assertEqual(gw.session.calls, [])


class TestGatewayFailureContract(unittest.TestCase):
    def _assert_fails(self, answer, message):
        notices = []
        gw = make_gateway({"getAssignments": answer}, notices)
        with self.assertRaises(GatewayError) as ctx:
            gw.call("getAssignments")
        self.assertEqual(ctx.exception.message, message)
        self.assertEqual(ctx.exception.action, "getAssignments")
        self.assertEqual(notices, [f"❌ Error: {message}"])
        self.assertEqual(len(gw.session.calls), 1)  # single attempt

    def test_server_error_message(self):
        self._assert_fails(fail("Invalid key"), "Invalid key")

    def test_generic_fallback(self):
        self._assert_fails(fail(), GENERIC_ERROR)

    def test_network_error(self):
        self._assert_fails(requests.ConnectionError("connection refused"), GENERIC_ERROR)

    def test_unparseable_body(self):
        self._assert_fails(FakeResponse(bad_json=True), "Malformed API response")

    def test_http_status(self):
        self._assert_fails(FakeResponse(ok([]), status_code=502), f"{GENERIC_ERROR} (HTTP 502)")

    def test_http_status_with_unreadable_body(self):
        self._assert_fails(FakeResponse(status_code=503, bad_json=True), f"{GENERIC_ERROR} (HTTP 503)")

    def test_malformed_envelope(self):
        self._assert_fails({"data": []}, "Malformed API response")

    def test_works_without_notify_hook(self):
        gw = make_gateway({"sync": fail("nope")})
        with self.assertRaises(GatewayError):
            gw.sync()


class TestGatewayKeepsKeyPrivateContract(unittest.TestCase):
    KEY = "TOPSECRET"
    URL = f"{API_URL}?key={KEY}&action=getAssignments"

    def _failure(self, answer):
        notices = []
        gw = RemoteGateway(API_URL, self.KEY, notify=notices.append, session=FakeSession({"getAssignments": answer}))
        with self.assertLogs("student_dashboard.backend.services.gateway", level="WARNING") as logs:
            with self.assertRaises(GatewayError) as ctx:
                gw.get_assignments()
        for text in notices + logs.output + [ctx.exception.message]:
            self.assertNotIn(self.KEY, text)
        return notices

    def test_error_envelope_on_4xx_carries_server_message(self):
        answer = real_response(401, b'{"success": false, "error": "Invalid key"}', self.URL)
        self.assertEqual(self._failure(answer), ["❌ Error: Invalid key"])

    def test_4xx_without_envelope(self):
        answer = real_response(401, b"<html>denied</html>", self.URL)
        self.assertEqual(self._failure(answer), [f"❌ Error: {GENERIC_ERROR} (HTTP 401)"])

    def test_connection_error_text_is_not_shown(self):
        answer = requests.ConnectionError(
            f"HTTPSConnectionPool(host='script.example.com', port=443): "
            f"Max retries exceeded with url: /exec?key={self.KEY}&action=getAssignments"
        )
        self.assertEqual(self._failure(answer), [f"❌ Error: {GENERIC_ERROR}"])


class TestGatewayActionsContract(unittest.TestCase):
    def test_get_assignments_validates_and_drops_bad_records(self):
        gw = make_gateway({
            "getAssignments": ok([
                assignment("a", 2),
                {"title": "no uid"},
                "not a record",
                assignment(42, "n/a"),
            ])
        })
        records = gw.get_assignments()
        self.assertEqual([r.uid for r in records], ["a", "42"])
        self.assertIsNone(records[1].days_until_due)

    def test_get_assignments_rejects_non_list(self):
        notices = []
        gw = make_gateway({"getAssignments": ok({"oops": True})}, notices)
        with self.assertRaises(GatewayError):
            gw.get_assignments()
        self.assertEqual(len(notices), 1)

    def test_get_categories_deduplicates_in_order(self):
        gw = make_gateway({"getCategories": ok(["Math", "History", "Math", None, "", "Art"])})
        self.assertEqual(gw.get_categories(), ["Math", "History", "Art"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
