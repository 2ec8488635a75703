import json
import os
import tempfile
import unittest
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from arvan_vod import BaseModel, BodyEncoder, BodyKind, FileAccessError, sanitize_for_serialization, to_string
from arvan_vod._body_encoder import build_query


class Quality(str, Enum):
    HD = "hd"


@dataclass
class VideoPayload(BaseModel):
    title: str
    description: Optional[str] = None
    quality: Quality = Quality.HD


class Watermark:
    def __init__(self):
        self.position = "top-left"
        self._cache = "hidden"


class TestToString(unittest.TestCase):
    def test_scalars(self):
        self.assertEqual(to_string(True), "true")
        self.assertEqual(to_string(False), "false")
        self.assertEqual(to_string(42), "42")
        self.assertEqual(to_string(1.5), "1.5")
        self.assertEqual(to_string("active"), "active")
        self.assertEqual(to_string(Quality.HD), "hd")
        self.assertEqual(to_string(date(2024, 1, 2)), "2024-01-02")
        self.assertEqual(to_string(datetime(2024, 1, 2, 3, 4, 5)), "2024-01-02T03:04:05")

    def test_nested_values_rejected(self):
        with self.assertRaises(ValueError):
            to_string({"a": 1})
        with self.assertRaises(ValueError):
            to_string([1, 2])


class TestBuildQuery(unittest.TestCase):
    def test_omits_none_and_keeps_order(self):
        query = build_query({"filter": "active", "page": None, "per_page": 10})

        self.assertEqual(query, "filter=active&per_page=10")

    def test_percent_encoding(self):
        query = build_query({"filter": "a b&c=d/é", "secure_ip": "10.0.0.1"})

        self.assertEqual(query, "filter=a%20b%26c%3Dd%2F%C3%A9&secure_ip=10.0.0.1")

    def test_sequence_repeats_key(self):
        self.assertEqual(build_query({"tag": ["a", "b"]}), "tag=a&tag=b")

    def test_empty(self):
        self.assertEqual(build_query({"page": None}), "")


class TestSanitizeForSerialization(unittest.TestCase):
    def test_models_and_objects(self):
        value = {
            "video": VideoPayload(title="intro"),
            "watermark": Watermark(),
            "tags": ("a", "b"),
            "created": datetime(2024, 1, 2, 3, 4, 5),
            "nothing": None,
        }

        self.assertEqual(
            sanitize_for_serialization(value),
            {
                "video": {"title": "intro", "quality": "hd"},
                "watermark": {"position": "top-left"},
                "tags": ["a", "b"],
                "created": "2024-01-02T03:04:05",
                "nothing": None,
            },
        )

    def test_unserializable_object(self):
        with self.assertRaises(TypeError):
            sanitize_for_serialization(object())


class TestBodyEncoder(unittest.TestCase):
    def setUp(self):
        self.encoder = BodyEncoder(boundary="testboundary")

    def test_json_form_params(self):
        encoded = self.encoder.encode({"name": "video1"}, BodyKind.JSON)

        self.assertEqual(encoded.content, '{"name":"video1"}')
        self.assertEqual(encoded.content_type, "application/json")

    def test_json_direct_payload(self):
        encoded = self.encoder.encode(None, BodyKind.JSON, payload=[VideoPayload(title="a"), {"b": 1}])

        self.assertEqual(json.loads(encoded.content), [{"title": "a", "quality": "hd"}, {"b": 1}])

    def test_json_round_trip(self):
        params = {"title": "intro", "nested": {"list": [1, 2.5, True, None]}, "quality": Quality.HD}

        encoded = self.encoder.encode(params, BodyKind.JSON)

        self.assertEqual(json.loads(encoded.content), sanitize_for_serialization(params))

    def test_form(self):
        encoded = self.encoder.encode({"title": "my video", "public": True, "skip": None}, BodyKind.FORM)

        self.assertEqual(encoded.content, "title=my%20video&public=true")
        self.assertEqual(encoded.content_type, "application/x-www-form-urlencoded")

    def test_form_rejects_direct_payload(self):
        with self.assertRaises(ValueError):
            self.encoder.encode(None, BodyKind.FORM, payload={"a": 1})

    def test_empty_body(self):
        for kind in BodyKind:
            self.assertEqual(self.encoder.encode({}, kind), (None, None))
            self.assertEqual(self.encoder.encode(None, kind), (None, None))

    def test_multipart_with_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "clip.bin")
            with open(path, "wb") as f:
                f.write(b"\x00\x01binary-video")

            encoded = self.encoder.encode(
                {"title": "clip", "convert_mode": "auto", "upload": path}, BodyKind.JSON, file_field="upload"
            )

        self.assertEqual(encoded.content_type, "multipart/form-data; boundary=testboundary")
        body = encoded.content
        self.assertEqual(body.count(b"Content-Disposition: form-data"), 3)
        self.assertIn(b'name="title"', body)
        self.assertIn(b'name="convert_mode"', body)
        self.assertIn(b'name="upload"; filename="clip.bin"', body)
        self.assertIn(b"\x00\x01binary-video", body)

    def test_multipart_without_file(self):
        encoded = self.encoder.encode({"title": "clip", "public": False}, BodyKind.MULTIPART)

        self.assertEqual(encoded.content.count(b"Content-Disposition: form-data"), 2)
        self.assertIn(b"false", encoded.content)

    def test_multipart_unreadable_file(self):
        with self.assertRaises(FileAccessError) as context:
            self.encoder.encode({"upload": "/nonexistent/clip.mp4"}, BodyKind.MULTIPART, file_field="upload")

        self.assertEqual(context.exception.status_code, 0)
        self.assertIsNone(context.exception.headers)
        self.assertIsNone(context.exception.body)

    def test_missing_file_field(self):
        with self.assertRaises(ValueError):
            self.encoder.encode({"title": "clip"}, BodyKind.MULTIPART, file_field="upload")

    def test_file_with_direct_payload(self):
        with self.assertRaises(ValueError):
            self.encoder.encode({"upload": "x"}, BodyKind.MULTIPART, file_field="upload", payload={"a": 1})


if __name__ == "__main__":
    unittest.main()
