"""Test setup for scxdata."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from scxdata.schemas import ContentNode  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    This allows running integration tests selectively:
        pytest -m integration       # run only integration tests
        pytest -m "not integration" # skip integration tests
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (make real network calls)",
    )


def _translation(lang: str, author_uid: str, *, segmented: bool = False, **extra: Any) -> dict:
    return {
        "lang": lang,
        "author_uid": author_uid,
        "author": author_uid.title(),
        "segmented": segmented,
        **({"bilara_data": {"html_text": {"x:1": "<p>{}</p>"}}} if segmented else {}),
        "suttas_data": {"translation": {"text": "body"}},
        **extra,
    }


def _leaf(uid: str, translations: list[dict] | None = None, **extra: Any) -> dict:
    return {"uid": uid, "node_type": "leaf", "translations": translations or [], **extra}


def _branch(uid: str, children: list[dict], *, node_type: str = "branch", **extra: Any) -> dict:
    return {"uid": uid, "node_type": node_type, "children": children, **extra}


@pytest.fixture
def dhp_range() -> dict:
    """Range leaf ``dhp1-20`` with one segmented and one legacy translation."""
    return _leaf(
        "dhp1-20",
        [
            _translation(
                "en",
                "sujato",
                segmented=True,
                suttas_data={"translation": {"previous": None, "next": {"uid": "dhp21-32"}}},
            ),
            _translation("en", "buddharakkhita"),
        ],
        acronym="Dhp 1-20",
        parallels={
            "dhp1": ["a"],
            "dhp1-2": ["b", "c"],
            "dhp5#3": ["d"],
            "dhp15-20": ["e"],
            "dhp40": ["f"],
        },
    )


@pytest.fixture
def sample_tree(dhp_range: dict) -> list[ContentNode]:
    """A small catalog with an uneven level, a duplicate route and a pātimokkha branch.

    sutta/long/dn/{dn-silakkhandhavagga/{dn1,dn2}, dn-mahavagga/dn14}
    sutta/minor/kn/dhp/dhp-yamakavagga/dhp1-20
    sutta/minor/dharmapadas/{g2dhp, dhp/dhp-yamakavagga/dhp1-20}
    vinaya/pli-tv-pm/pli-tv-bu-pm
    """
    dhp = _branch("dhp", [_branch("dhp-yamakavagga", [dhp_range])])
    sutta = _branch(
        "sutta",
        [
            _branch(
                "long",
                [
                    _branch(
                        "dn",
                        [
                            _branch(
                                "dn-silakkhandhavagga",
                                [
                                    _leaf(
                                        "dn1",
                                        [
                                            _translation("en", "sujato", segmented=True),
                                            _translation("ru", "sv"),
                                            _translation("ru", "sv", title="duplicate"),
                                        ],
                                    ),
                                    _leaf("dn2", [_translation("en", "bodhi")]),
                                ],
                            ),
                            _branch("dn-mahavagga", [_leaf("dn14")]),
                        ],
                    )
                ],
            ),
            _branch(
                "minor",
                [
                    _branch("kn", [dhp]),
                    _branch("dharmapadas", [_leaf("g2dhp"), dhp]),
                ],
            ),
        ],
        node_type="root",
    )
    vinaya = _branch(
        "vinaya",
        [
            _branch(
                "pli-tv-pm",
                [_leaf("pli-tv-bu-pm", [_translation("en", "brahmali")])],
                has_detail=True,
                translations=[_translation("en", "brahmali")],
            )
        ],
        node_type="root",
    )
    return [ContentNode.model_validate(sutta), ContentNode.model_validate(vinaya)]
