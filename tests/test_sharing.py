from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.sharing import ShareTarget, build_share_link, parse_share_params


def test_build_share_link():
    link = build_share_link("https://ledger.example.com/", "expense", 12)

    assert link == "https://ledger.example.com/?page=share&type=expense&id=12"


def test_build_share_link_rejects_unknown_kind():
    with pytest.raises(ValueError):
        build_share_link("http://localhost:8501", "transfer", 1)


def test_parse_share_params():
    assert parse_share_params({"page": "share", "type": "earning", "id": "4"}) == ShareTarget("earning", 4)
    assert parse_share_params({"page": ["share"], "type": ["expense"], "id": ["7"]}) == ShareTarget("expense", 7)


@pytest.mark.parametrize(
    "params",
    [
        {},
        {"page": "dashboard", "type": "expense", "id": "1"},
        {"page": "share", "type": "transfer", "id": "1"},
        {"page": "share", "type": "expense", "id": "abc"},
        {"page": "share", "type": "expense", "id": "0"},
        {"page": "share", "type": "expense"},
    ],
)
def test_parse_share_params_rejects_invalid_links(params):
    assert parse_share_params(params) is None
