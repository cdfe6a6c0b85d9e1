from __future__ import annotations

import pytest

from retro_stats.models import RetroStatsConfig


@pytest.fixture
def config() -> RetroStatsConfig:
    return RetroStatsConfig(account="octo", page_size=50, top_language_count=2, panel_width=39, github_token="t0ken")
