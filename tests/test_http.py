import io
import unittest
from unittest.mock import Mock, patch

from requests.structures import CaseInsensitiveDict

from arvan_vod._http_client import HTTPClient, HTTPRequest


class TestHTTPClient(unittest.TestCase):
    def setUp(self):
        self.client = HTTPClient()

    @patch("arvan_vod._http_client.requests.Session.request")
    def test_send_success(self, mock_request):
        mock_response = Mock()
        mock_response.status_code = 200
        mock_response.content = b'{"result": "success"}'
        mock_response.headers = CaseInsensitiveDict({"Content-Type": "application/json"})
        mock_request.return_value = mock_response

        request = HTTPRequest(
            method="POST",
            url="https://api.test.com/endpoint",
            headers={"Authorization": "Apikey test"},
            body='{"name":"video1"}',
        )

        response = self.client.send(request)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b'{"result": "success"}')
        self.assertEqual(response.headers["content-type"], "application/json")
        mock_request.assert_called_once_with(
            method="POST",
            url="https://api.test.com/endpoint",
            headers={"Authorization": "Apikey test"},
            data=b'{"name":"video1"}',
            timeout=15,
            hooks=None,
        )

    @patch("arvan_vod._http_client.requests.Session.request")
    def test_send_failure_status_is_returned(self, mock_request):
        mock_response = Mock()
        mock_response.status_code = 404
        mock_response.content = b""
        mock_response.headers = CaseInsensitiveDict()
        mock_request.return_value = mock_response

        response = self.client.send(HTTPRequest(method="GET", url="https://api.test.com/notfound"))

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.text, "")
        mock_request.assert_called_once()

    @patch("arvan_vod._http_client.requests.Session.request")
    def test_send_with_trace_registers_hook(self, mock_request):
        mock_response = Mock(status_code=200, content=b"", headers=CaseInsensitiveDict())
        mock_request.return_value = mock_response

        self.client.send(HTTPRequest(method="GET", url="https://api.test.com"), io.StringIO())

        hooks = mock_request.call_args.kwargs["hooks"]
        self.assertEqual(len(hooks["response"]), 1)

    def test_session_reuse(self):
        session1 = self.client._get_session()
        session2 = self.client._get_session()

        self.assertIs(session1, session2)

    def test_close_resets_session(self):
        session = self.client._get_session()

        self.client.close()

        self.assertIsNot(self.client._get_session(), session)

    def test_trace_hook_masks_authorization(self):
        trace = io.StringIO()
        response = Mock(status_code=201, reason="Created", headers={"Location": "/videos/v1"})
        response.request = Mock(
            method="POST", url="https://api.test.com/videos", headers={"Authorization": "Apikey secret"}
        )

        returned = HTTPClient._trace_hook(trace)(response)

        self.assertIs(returned, response)
        text = trace.getvalue()
        self.assertIn("> POST https://api.test.com/videos", text)
        self.assertIn("> Authorization: ********", text)
        self.assertNotIn("secret", text)
        self.assertIn("< 201 Created", text)
        self.assertIn("< Location: /videos/v1", text)

    def test_request_uppercases_method(self):
        self.assertEqual(HTTPRequest(method="patch", url="https://api.test.com").method, "PATCH")


if __name__ == "__main__":
    unittest.main()
