"""Tests for JSON and xcconfig output."""

from __future__ import annotations

import json
from pathlib import Path

from xcconfparse.export import export_json, render_settings, settings_to_data
from xcconfparse.parser import parse_setting


def test_export_json_writes_settings(tmp_path: Path) -> None:
    settings = [parse_setting("A[sdk=iphoneos*] = $(B)"), parse_setting("C =")]
    output = tmp_path / "out" / "settings.json"

    export_json(settings, output)

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data == settings_to_data(settings)
    assert data[0]["conditions"] == [{"key": "sdk", "value": "iphoneos", "is_prefix": True}]
    assert data[1]["value"] == []


def test_render_settings_reparses() -> None:
    settings = [
        parse_setting("OTHER_LDFLAGS[arch=arm64][sdk=iphoneos*] = -L${DIR}/lib $(inherited)"),
        parse_setting("EMPTY ="),
    ]

    text = render_settings(settings)

    assert text == (
        "OTHER_LDFLAGS[arch=arm64,sdk=iphoneos*] = -L$(DIR)/lib $(inherited)\n"
        "EMPTY =\n"
    )
    assert [parse_setting(line) for line in text.splitlines()] == settings
