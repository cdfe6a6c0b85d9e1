#------------------------------------------------------------
#                          config.py
#   Centralizes environment names, defaults, panel presets
#             and runtime configuration loading.

import os
from typing import Dict, Mapping, Optional
from .models import ConfigError, PanelPreset, RetroStatsConfig

# Environment variable names for configuration
ENV_GITHUB_USERNAME = "GITHUB_USERNAME"
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
ENV_PAGE_SIZE = "RETRO_STATS_PAGE_SIZE"
ENV_PANEL = "RETRO_STATS_PANEL"
ENV_SEARCH_MAX_PAGES = "RETRO_STATS_SEARCH_MAX_PAGES"
ENV_OUTPUT_DIR = "RETRO_STATS_OUTPUT_DIR"
ENV_PACING = "RETRO_STATS_PACING"
ENV_END_HOLD = "RETRO_STATS_END_HOLD"

# Default values for configuration parameters
DEFAULT_GITHUB_USERNAME = "hcelante"
DEFAULT_PAGE_SIZE = 50
DEFAULT_LOOKBACK_DAYS = 7
DEFAULT_PANEL = "compact"
DEFAULT_PACING = "fixed"
DEFAULT_END_HOLD = "repeat"

# Constants for GitHub API interaction
GITHUB_API_ACCEPT_HEADER = "application/vnd.github+json"
GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_MAX_PAGE_SIZE = 100
GITHUB_COMMITS_PER_PAGE = 100
GITHUB_SEARCH_PER_PAGE = 100
GITHUB_REQUEST_TIMEOUT_SECONDS = 30

# Panel presets: the narrow card and the full terminal width.
PANEL_PRESETS: Dict[str, PanelPreset] = {
    "compact": PanelPreset(name="compact", width=39, top_language_count=2, canvas_width=480, canvas_height=440),
    "wide": PanelPreset(name="wide", width=80, top_language_count=4, canvas_width=840, canvas_height=480),
}

# Placeholder shown for anything that could not be determined.
NOT_AVAILABLE = "N/A"

# Animation look and pacing.
BACKGROUND_COLOR = "#000000"
FOREGROUND_COLOR = "#00ff00"
FONT_SIZE = 16
LINE_SPACING = 20
FIRST_LINE_Y = 40
CHAR_DELAY_MS = 100
LINE_PAUSE_FRAMES = 3
END_HOLD_MS = 2000
GIF_PALETTE_COLORS = 16
LINE_DURATION_MS = 500
LINE_PAUSE_MS = 300

# Pacing styles: "fixed" types at a constant rate per character, "line"
# gives every line the same total time. The end hold is either repeated
# at the character rate or shown as one long frame.
PACING_FIXED = "fixed"
PACING_LINE = "line"
PACING_CHOICES = (PACING_FIXED, PACING_LINE)
END_HOLD_CHOICES = ("repeat", "single")
FONT_PATHS = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/System/Library/Fonts/Menlo.ttc",
    "C:\\Windows\\Fonts\\consola.ttf",
)

# Messages and templates for logging.
NO_GITHUB_TOKEN_MESSAGE = "WARNING: no GITHUB_TOKEN found - only public data will be visible"

# Output file names, written under the output directory.
GIF_FILENAME = "retro-stats.gif"
PANEL_MARKDOWN_FILENAME = "retro-stats.md"
README_FILENAME = "README.md"


# This function does resolve where generated files are written.
# Relative paths and the default both resolve against the working directory.
def resolve_output_dir(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    configured = environ.get(ENV_OUTPUT_DIR, "").strip()
    return os.path.abspath(configured or os.curdir)

# This function does parse an optional integer environment value.
# It raises ConfigError when the value is present but not a number.
def _read_int(environ: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None

# This function does resolve a panel preset by name.
# Unknown names are a configuration error.
def resolve_panel_preset(name: str) -> PanelPreset:
    key = (name or DEFAULT_PANEL).strip().lower()
    preset = PANEL_PRESETS.get(key)
    if preset is None:
        choices = ", ".join(sorted(PANEL_PRESETS))
        raise ConfigError(f"{ENV_PANEL} must be one of: {choices} (got {name!r})")
    return preset

# This function does read a setting restricted to a fixed set of words.
# Matching ignores case; anything else is a configuration error.
def _read_choice(environ: Mapping[str, str], name: str, default: str, choices) -> str:
    value = (environ.get(name, "").strip() or default).lower()
    if value not in choices:
        raise ConfigError(f"{name} must be one of: {', '.join(choices)} (got {value!r})")
    return value

# This function does build the runtime configuration from the environment.
# Page size is clamped to what the GitHub API accepts.
def load_config(environ: Optional[Mapping[str, str]] = None) -> RetroStatsConfig:
    environ = os.environ if environ is None else environ

    account = environ.get(ENV_GITHUB_USERNAME, "").strip() or DEFAULT_GITHUB_USERNAME
    page_size = _read_int(environ, ENV_PAGE_SIZE, DEFAULT_PAGE_SIZE)
    page_size = max(1, min(GITHUB_MAX_PAGE_SIZE, page_size))

    search_max_pages = _read_int(environ, ENV_SEARCH_MAX_PAGES, None)
    if search_max_pages is not None and search_max_pages < 1:
        raise ConfigError(f"{ENV_SEARCH_MAX_PAGES} must be at least 1 (got {search_max_pages})")

    preset = resolve_panel_preset(environ.get(ENV_PANEL, DEFAULT_PANEL))
    pacing = _read_choice(environ, ENV_PACING, DEFAULT_PACING, PACING_CHOICES)
    end_hold = _read_choice(environ, ENV_END_HOLD, DEFAULT_END_HOLD, END_HOLD_CHOICES)

    return RetroStatsConfig(
        account=account,
        page_size=page_size,
        top_language_count=preset.top_language_count,
        panel_width=preset.width,
        github_token=environ.get(ENV_GITHUB_TOKEN, "").strip(),
        lookback_days=DEFAULT_LOOKBACK_DAYS,
        search_max_pages=search_max_pages,
        preset=preset,
        pacing=pacing,
        hold_as_single_frame=end_hold == "single",
    )
