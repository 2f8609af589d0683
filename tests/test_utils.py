from __future__ import annotations

from marketplace_agent.utils import new_id, smart_capitalize


def test_smart_capitalize_preserves_interior_capitals() -> None:
    assert smart_capitalize("red kurti by FabIndia") == "Red Kurti By FabIndia"
    assert smart_capitalize("iPhone case") == "IPhone Case"


def test_smart_capitalize_keeps_spacing_and_empty_input() -> None:
    assert smart_capitalize("two  spaces\nnew line") == "Two  Spaces\nNew Line"
    assert smart_capitalize("") == ""


def test_new_id_is_unique() -> None:
    ids = {new_id() for _ in range(100)}
    assert len(ids) == 100
