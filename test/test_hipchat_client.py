#!/usr/bin/env python3
import unittest
from unittest.mock import Mock, patch

import requests

from circonus_proxy.errors import SendError
from circonus_proxy.hipchat import HipchatClient, MessageRequest


def make_response(status_code=200, body=None, text=""):
    resp = Mock()
    resp.status_code = status_code
    resp.text = text
    if body is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = body
    return resp


def make_request():
    return MessageRequest(room_id="42", sender="Circonus", message="hello", color="red", notify=True)


class TestHipchatClient(unittest.TestCase):
    def setUp(self):
        patcher = patch("circonus_proxy.hipchat.requests.post")
        self.post = patcher.start()
        self.addCleanup(patcher.stop)
        self.client = HipchatClient(auth_token="tok", base_url="https://hipchat.example.com/", timeout=3)

    def test_posts_room_message_form(self):
        self.post.return_value = make_response(body={"status": "sent"})

        self.client.post_message(make_request())

        self.post.assert_called_once_with(
            "https://hipchat.example.com/v1/rooms/message",
            params={"auth_token": "tok", "format": "json"},
            data={
                "room_id": "42",
                "from": "Circonus",
                "message": "hello",
                "message_format": "text",
                "notify": "1",
                "color": "red",
            },
            timeout=3,
        )

    def test_each_message_is_an_independent_request(self):
        self.post.return_value = make_response(body={"status": "sent"})

        self.client.post_message(make_request())
        self.client.post_message(make_request())

        self.assertEqual(self.post.call_count, 2)
        self.assertFalse(hasattr(self.client, "session"))

    def test_notify_false(self):
        self.post.return_value = make_response(body={"status": "sent"})
        self.client.post_message(MessageRequest(room_id="1", sender="x", message="m"))
        data = self.post.call_args.kwargs["data"]
        self.assertEqual(data["notify"], "0")
        self.assertEqual(data["color"], "yellow")

    def test_api_error_message_is_reported(self):
        self.post.return_value = make_response(
            status_code=401,
            body={"error": {"code": 401, "type": "Unauthorized", "message": "Auth token not found"}},
        )
        with self.assertRaises(SendError) as ctx:
            self.client.post_message(make_request())
        self.assertIn("401", str(ctx.exception))
        self.assertIn("Auth token not found", str(ctx.exception))

    def test_non_json_error_uses_body_text(self):
        self.post.return_value = make_response(status_code=502, text="Bad Gateway")
        with self.assertRaises(SendError) as ctx:
            self.client.post_message(make_request())
        self.assertIn("Bad Gateway", str(ctx.exception))

    def test_unexpected_status(self):
        self.post.return_value = make_response(body={"status": "queued"})
        with self.assertRaises(SendError):
            self.client.post_message(make_request())

    def test_transport_error(self):
        self.post.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(SendError) as ctx:
            self.client.post_message(make_request())
        self.assertIn("connection refused", str(ctx.exception))

    def test_timeout(self):
        self.post.side_effect = requests.Timeout("read timed out")
        with self.assertRaises(SendError):
            self.client.post_message(make_request())


if __name__ == '__main__':
    unittest.main()
