import unittest

import requests

from common.constants import ADMIN_PASSWORD_HEADER
from common.errors import AuthError, PasswordError, RequestError, ServerLogicError, TransportError
from fakes import TOKEN, make_client, make_response


class ApiClientTests(unittest.TestCase):
    def setUp(self):
        self.client, self.http = make_client()

    def test_get_attaches_bearer_token(self):
        self.http.add("GET", "/api/gallery", make_response(200, [{"id": "1"}]))
        data = self.client.get("/api/gallery")
        self.assertEqual(data, [{"id": "1"}])
        self.assertEqual(self.http.calls[0].headers["Authorization"], f"Bearer {TOKEN}")
        self.assertNotIn(ADMIN_PASSWORD_HEADER, self.http.calls[0].headers)

    def test_no_authorization_header_without_token(self):
        client, http = make_client(token=None)
        http.add("GET", "/api/teams", make_response(200, []))
        client.get("/api/teams")
        self.assertNotIn("Authorization", http.calls[0].headers)

    def test_unauthorized_get_clears_token(self):
        for status in (401, 403):
            client, http = make_client()
            http.add("GET", "/api/contact", make_response(status, {"message": "nope"}))
            with self.assertRaises(AuthError) as ctx:
                client.get("/api/contact")
            self.assertEqual(ctx.exception.status, status)
            self.assertIsNone(client.session.token)

    def test_unauthorized_upload_clears_token(self):
        self.http.add("POST", "/api/upload", make_response(401))
        with self.assertRaises(AuthError):
            self.client.upload("/api/upload", b"img", "a.png")
        self.assertFalse(self.client.session.authenticated)

    def test_other_errors_keep_token_and_carry_server_message(self):
        self.http.add("POST", "/api/results", make_response(422, {"message": "Bad score"}, reason="Unprocessable"))
        with self.assertRaises(RequestError) as ctx:
            self.client.post("/api/results", [])
        self.assertEqual(ctx.exception.status, 422)
        self.assertEqual(ctx.exception.server_message, "Bad score")
        self.assertEqual(ctx.exception.message, "API Error: Unprocessable")
        self.assertEqual(self.client.session.token, TOKEN)

    def test_gated_post_sends_password_and_keeps_token_on_rejection(self):
        self.http.add("POST", "/api/schedule", make_response(403))
        with self.assertRaises(PasswordError):
            self.client.post("/api/schedule", [{"id": "1"}], admin_password="secret")
        call = self.http.calls[0]
        self.assertEqual(call.headers[ADMIN_PASSWORD_HEADER], "secret")
        self.assertEqual(call.headers["Authorization"], f"Bearer {TOKEN}")
        self.assertEqual(call.json, [{"id": "1"}])
        self.assertEqual(self.client.session.token, TOKEN)

    def test_upload_sends_multipart_and_returns_url(self):
        self.http.add("POST", "/api/upload", make_response(200, {"success": True, "url": "/uploads/a.png"}))
        url = self.client.upload("/api/upload", b"img-bytes", "a.png")
        self.assertEqual(url, "/uploads/a.png")
        call = self.http.calls[0]
        self.assertEqual(call.files, {"image": ("a.png", b"img-bytes")})
        self.assertIsNone(call.json)
        self.assertNotIn("Content-Type", call.headers)

    def test_upload_logical_failure(self):
        self.http.add("POST", "/api/upload", make_response(200, {"success": False, "message": "Too big"}))
        with self.assertRaises(ServerLogicError) as ctx:
            self.client.upload("/api/upload", b"x", "a.png")
        self.assertEqual(ctx.exception.server_message, "Too big")

    def test_network_failure_is_transport_error(self):
        self.http.add("GET", "/api/results", requests.ConnectionError("down"))
        with self.assertRaises(TransportError):
            self.client.get("/api/results")
        self.assertEqual(self.client.session.token, TOKEN)

    def test_malformed_body_is_transport_error(self):
        self.http.add("GET", "/api/results", make_response(200, b"<html>"))
        with self.assertRaises(TransportError):
            self.client.get("/api/results")

    def test_empty_success_body_decodes_to_none(self):
        self.http.add("POST", "/api/contact", make_response(204))
        self.assertIsNone(self.client.post("/api/contact", {}, admin_password="pw"))

    def test_logout_swallows_failure_and_clears_token(self):
        self.http.add("POST", "/api/logout", requests.ConnectionError("down"))
        self.client.logout()
        self.assertIsNone(self.client.session.token)
        self.assertEqual(self.http.calls[0].json, {})

    def test_logout_server_error_still_clears_token(self):
        self.http.add("POST", "/api/logout", make_response(500))
        self.client.logout()
        self.assertFalse(self.client.session.authenticated)

    def test_logout_without_token_skips_network(self):
        client, http = make_client(token=None)
        client.logout()
        self.assertEqual(http.calls, [])

    def test_login_starts_session(self):
        client, http = make_client(token=None)
        http.add("POST", "/api/login", make_response(200, {"token": "fresh"}))
        client.login("admin", "pw")
        self.assertEqual(client.session.token, "fresh")
        self.assertEqual(http.calls[0].json, {"username": "admin", "password": "pw"})

    def test_login_without_token_fails(self):
        client, http = make_client(token=None)
        http.add("POST", "/api/login", make_response(200, {"success": False, "message": "Invalid credentials"}))
        with self.assertRaises(ServerLogicError):
            client.login("admin", "bad")
        self.assertFalse(client.session.authenticated)


if __name__ == "__main__":
    unittest.main()
