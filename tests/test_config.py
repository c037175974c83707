from __future__ import annotations

import logging

import pytest

from cvlayout import config


@pytest.mark.parametrize("number", range(1, 11))
def test_every_template_id_has_a_preset(number: int) -> None:
    template = config.get_template(f"template-{number}")
    assert template["id"] == f"template-{number}"
    expected = 197 if number == 3 else 207
    assert config.page_budget_for(template) == expected


def test_unknown_template_falls_back_and_logs(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="cvlayout.config"):
        template = config.get_template("template-42")
    assert template["id"] == "template-1"
    assert "Unknown template 'template-42'" in caplog.text


def test_default_template_is_silent(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="cvlayout.config"):
        assert config.get_template(None)["id"] == "template-1"
    assert caplog.records == []
