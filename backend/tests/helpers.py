"""Shared builders and fakes for the test suite."""

import copy
import json
from datetime import UTC, datetime
from typing import Any

from botocore.exceptions import ClientError

SAMPLE_DOCUMENT: dict[str, Any] = {
    "logo": {"url": "https://cdn.example.com/logo.png", "width": "120", "height": "auto"},
    "colors": {
        "heading": "#111111",
        "subheading": "#424242",
        "body": "#FFFFFF",
        "background": "#F5F5F5",
        "text": "#212121",
        "button": "#2196F3",
        "buttonText": "#FFFFFF",
        "primary": "#FF5722",
        "accent": "#42A5F5",
    },
    "menus": [
        {
            "id": "main",
            "name": "Main Menu",
            "items": [
                {"id": "i-home", "label": "Home", "url": "/"},
                {
                    "id": "i-about",
                    "label": "About",
                    "url": "/about",
                    "children": [
                        {"id": "i-team", "label": "Team", "url": "/team"},
                        {"id": "i-ext", "label": "Blog", "url": "https://blog.example.com"},
                    ],
                },
                {"id": "i-anchor", "label": "Contact", "url": "#contact"},
            ],
        },
        {
            "id": "footer-links",
            "name": "Footer Links",
            "items": [{"id": "f-about", "label": "About us", "url": "/about"}],
        },
    ],
    "settings": {
        "siteTitle": "Acme Studio",
        "tagline": "We build things",
        "enableDarkMode": False,
        "selectedMenuId": "main",
    },
    "pages": [
        {
            "id": "home",
            "name": "Home",
            "slug": "/",
            "title": "Welcome to Acme",
            "status": "published",
            "sections": [
                {"heading": "Welcome", "textAlign": "center"},
                {"heading": "Hidden section", "hidden": True},
            ],
        },
        {
            "id": "about",
            "name": "About",
            "slug": "/about",
            "title": "About Acme",
            "status": "published",
            "sections": [
                {"heading": "Team", "img": "https://cdn.example.com/team.jpg", "align": "right"},
            ],
        },
        {
            "id": "team",
            "name": "Team",
            "slug": "/team",
            "title": "",
            "status": "draft",
            "sections": [],
        },
    ],
}


def sample_document() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_DOCUMENT)


def make_section(**fields: Any) -> dict[str, Any]:
    section = {"heading": "Heading"}
    section.update(fields)
    return section


class FakeS3Client:
    """In-memory stand-in for the boto3 S3 client calls the media library makes."""

    def __init__(self, fail: bool = False):
        self.objects: dict[str, dict[str, Any]] = {}
        self.fail = fail
        self.deleted: list[str] = []

    def _maybe_fail(self, operation: str) -> None:
        if self.fail:
            raise ClientError(
                {"Error": {"Code": "InternalError", "Message": "asset host unavailable"}},
                operation,
            )

    def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str) -> dict:  # noqa: N803
        self._maybe_fail("PutObject")
        self.objects[Key] = {
            "Body": Body,
            "ContentType": ContentType,
            "LastModified": datetime.now(UTC),
        }
        return {"ETag": '"fake"'}

    def _listing(self, Prefix: str) -> list[dict[str, Any]]:  # noqa: N803
        # S3 lists keys in ascending UTF-8 byte order.
        return [
            {"Key": key, "Size": len(obj["Body"]), "LastModified": obj["LastModified"]}
            for key, obj in sorted(self.objects.items())
            if key.startswith(Prefix)
        ]

    def list_objects_v2(self, Bucket: str, Prefix: str, MaxKeys: int = 1000) -> dict:  # noqa: N803
        self._maybe_fail("ListObjectsV2")
        return {"Contents": self._listing(Prefix)[:MaxKeys]}

    def get_paginator(self, operation_name: str) -> "FakePaginator":
        assert operation_name == "list_objects_v2"
        return FakePaginator(self)

    def delete_object(self, Bucket: str, Key: str) -> dict:  # noqa: N803
        self._maybe_fail("DeleteObject")
        self.objects.pop(Key, None)
        self.deleted.append(Key)
        return {}


def read_document(store) -> dict[str, Any]:
    """The raw JSON document as written to disk."""
    return json.loads(store.path.read_text(encoding="utf-8"))


class FakePaginator:
    """Pages through ``FakeS3Client`` listings the way boto3 paginators do."""

    def __init__(self, client: FakeS3Client, page_size: int = 1000):
        self.client = client
        self.page_size = page_size

    def paginate(self, Bucket: str, Prefix: str):  # noqa: N803
        self.client._maybe_fail("ListObjectsV2")
        listing = self.client._listing(Prefix)
        for start in range(0, len(listing), self.page_size):
            yield {"Contents": listing[start : start + self.page_size]}
