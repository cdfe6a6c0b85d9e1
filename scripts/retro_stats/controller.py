#------------------------------------------------------------
#                        controller.py
#        Coordinates stats collection, panel rendering and
#                   artifact generation.

import os
import sys
from datetime import datetime, timezone
from typing import Mapping, Optional
from .config import (
    GIF_FILENAME,
    NO_GITHUB_TOKEN_MESSAGE,
    NOT_AVAILABLE,
    PANEL_MARKDOWN_FILENAME,
    PANEL_PRESETS,
    README_FILENAME,
    load_config,
    resolve_output_dir,
)
from .models import ActivityStats, RetroStatsConfig
from .services.github_service import GitHubService
from .services.output_service import save_gif, save_text
from .services.stats_service import collect_activity_stats
from .views.frame_view import build_pacing, generate_frames
from .views.markdown_view import render_panel_markdown, render_readme
from .views.panel_view import render_panel

FAILED_REPOS_WARNING_TEMPLATE = "WARNING: {count} repositories contributed nothing: {names}"
SUMMARY_MESSAGE = (
    "Commits: {commits} | PRs: {prs} | Issues: {issues} | "
    "Most active: {most_active} | Languages: {languages}"
)


# This function does write every artifact for one stats snapshot.
# Paths are returned in order; pacing defaults to the configured style.
def write_artifacts(
    stats: ActivityStats,
    config: RetroStatsConfig,
    output_dir: str,
    updated_at: datetime,
    pacing=None,
) -> list:
    preset = config.preset or PANEL_PRESETS["compact"]
    lines = render_panel(stats, config.panel_width, updated_at)

    gif_path = os.path.join(output_dir, GIF_FILENAME)
    panel_path = os.path.join(output_dir, PANEL_MARKDOWN_FILENAME)
    readme_path = os.path.join(output_dir, README_FILENAME)

    frames = generate_frames(
        lines,
        (preset.canvas_width, preset.canvas_height),
        pacing if pacing is not None else build_pacing(config.pacing, config.hold_as_single_frame),
    )
    save_gif(frames, gif_path)
    save_text(panel_path, render_panel_markdown(lines))
    save_text(readme_path, render_readme(stats, GIF_FILENAME, updated_at))
    return [gif_path, panel_path, readme_path]


# This function does execute the full update workflow end-to-end.
# It collects stats, then writes the GIF, panel text and README.
def run_update(
    environ: Optional[Mapping[str, str]] = None,
    github_service: Optional[GitHubService] = None,
    now: Optional[datetime] = None,
) -> ActivityStats:
    config = load_config(environ)
    output_dir = resolve_output_dir(environ)
    now = now or datetime.now(timezone.utc)

    print(f"Collecting stats for {config.account} (panel: {config.panel_width} columns, top {config.top_language_count} languages)")
    print(f"Animation pacing: {config.pacing}")
    if not config.github_token:
        print(NO_GITHUB_TOKEN_MESSAGE, file=sys.stderr)

    github_service = github_service or GitHubService(config)
    stats = collect_activity_stats(github_service, config, now)

    failed = stats.failed_repos()
    if failed:
        print(FAILED_REPOS_WARNING_TEMPLATE.format(count=len(failed), names=", ".join(failed)), file=sys.stderr)
    print(
        SUMMARY_MESSAGE.format(
            commits=stats.commit_count_7d,
            prs=stats.pr_count_7d,
            issues=stats.issue_count_7d,
            most_active=stats.most_active_repo,
            languages=", ".join(language for language, _ in stats.top_languages) or NOT_AVAILABLE,
        )
    )

    write_artifacts(stats, config, output_dir, now)
    print("Retro stats updated successfully.")
    return stats


# This function does run the update as a process entry point.
# Any uncaught error is reported on stderr and exits with status 1.
def main() -> int:
    try:
        run_update()
    except Exception as exc:
        print(f"ERROR: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    return 0
