#!/usr/bin/env python3
"""
Render the last 7 days of GitHub activity as a retro terminal panel,
animate it into retro-stats.gif and refresh retro-stats.md and README.md.

Environment variables:
  GITHUB_TOKEN: token used for API requests; private repositories are only
    counted when it belongs to GITHUB_USERNAME
  GITHUB_USERNAME: account to report on (default: hcelante)
  RETRO_STATS_PAGE_SIZE: repositories per listing page (default: 50)
  RETRO_STATS_PANEL: "compact" (39 columns) or "wide" (80 columns)
  RETRO_STATS_SEARCH_MAX_PAGES: optional cap on search pages per query
  RETRO_STATS_OUTPUT_DIR: where the files are written (default: current directory)
  RETRO_STATS_PACING: "fixed" (per character) or "line" (per line) typing speed
  RETRO_STATS_END_HOLD: "repeat" or "single" frame for the final pause
"""

import sys

from retro_stats.controller import main

if __name__ == "__main__":
    sys.exit(main())
