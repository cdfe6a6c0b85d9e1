from __future__ import annotations

import os

import pytest

from retro_stats.config import load_config, resolve_output_dir, resolve_panel_preset
from retro_stats.models import ConfigError


def test_defaults() -> None:
    config = load_config({})
    assert config.account == "hcelante"
    assert config.page_size == 50
    assert config.panel_width == 39
    assert config.top_language_count == 2
    assert config.lookback_days == 7
    assert config.search_max_pages is None
    assert config.github_token == ""
    assert config.pacing == "fixed"
    assert config.hold_as_single_frame is False


def test_wide_panel_from_environment() -> None:
    config = load_config(
        {
            "GITHUB_USERNAME": " octo ",
            "GITHUB_TOKEN": "abc",
            "RETRO_STATS_PANEL": "Wide",
            "RETRO_STATS_PAGE_SIZE": "100",
            "RETRO_STATS_SEARCH_MAX_PAGES": "10",
        }
    )
    assert config.account == "octo"
    assert config.github_token == "abc"
    assert (config.panel_width, config.top_language_count) == (80, 4)
    assert config.preset.name == "wide"
    assert config.page_size == 100
    assert config.search_max_pages == 10


def test_page_size_is_clamped() -> None:
    assert load_config({"RETRO_STATS_PAGE_SIZE": "500"}).page_size == 100
    assert load_config({"RETRO_STATS_PAGE_SIZE": "0"}).page_size == 1


@pytest.mark.parametrize(
    "environ",
    [
        {"RETRO_STATS_PAGE_SIZE": "fifty"},
        {"RETRO_STATS_SEARCH_MAX_PAGES": "0"},
        {"RETRO_STATS_PANEL": "huge"},
        {"RETRO_STATS_PACING": "bursty"},
        {"RETRO_STATS_END_HOLD": "forever"},
    ],
)
def test_malformed_settings_raise(environ: dict) -> None:
    with pytest.raises(ConfigError):
        load_config(environ)


def test_presets_fit_their_panels() -> None:
    compact = resolve_panel_preset("compact")
    wide = resolve_panel_preset("wide")
    assert (compact.width, compact.top_language_count) == (39, 2)
    assert (wide.width, wide.top_language_count) == (80, 4)


def test_output_dir(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert resolve_output_dir({}) == os.path.abspath(str(tmp_path))
    assert resolve_output_dir({"RETRO_STATS_OUTPUT_DIR": "out"}) == os.path.join(os.path.abspath(str(tmp_path)), "out")


def test_pacing_settings_from_environment() -> None:
    config = load_config({"RETRO_STATS_PACING": " Line ", "RETRO_STATS_END_HOLD": "SINGLE"})
    assert config.pacing == "line"
    assert config.hold_as_single_frame is True
