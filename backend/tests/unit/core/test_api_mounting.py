# tests/unit/core/test_api_mounting.py
from __future__ import annotations

import pytest

from ecommerce.api import join_prefix


@pytest.mark.parametrize(
    "segments,expected",
    [
        (("/api", "v1", ""), "/api/v1"),
        (("/api/", "v1", "/auth"), "/api/v1/auth"),
        (("api", "v1", "users/"), "/api/v1/users"),
        (("", "v1", "/"), "/v1"),
    ],
)
def test_join_prefix(segments, expected):
    assert join_prefix(*segments) == expected


def test_v1_routes_are_mounted(app):
    rules = {rule.rule for rule in app.url_map.iter_rules()}

    assert "/api/v1/health" in rules
    assert "/api/v1/auth/login" in rules
    assert "/api/v1/users/<string:public_id>" in rules
    assert "/api/v1/admin/users/<string:public_id>" in rules
