# =========================================
# 📄 File: src/analysis/report.py
# Purpose: Answer the EDA questions over the cleaned table
# - Log every result table
# - Save the charts (optional)
# - Write a markdown analysis report next to the quality report
# =========================================

import os  # Used for report/figure paths
import logging  # Used to log result tables
from datetime import datetime, timezone  # Report timestamp
from typing import Any, Dict  # Type hints for clarity
import pandas as pd

from src.analysis import charts
from src.analysis.stats import (
    describe_views,
    engagement_correlation,
    outlier_threshold,
    phone_brand_summary,
    top_categories_by_median,
    top_categories_by_total,
    top_channels,
    top_upload_hours,
)

log = logging.getLogger(__name__)

REPORT_NAME = "analysis_report.md"


def compute_results(df: pd.DataFrame, analysis_cfg: Dict[str, Any]) -> Dict[str, Any]:
    """
    Run every query over the cleaned table and return the results keyed by question.
    """
    music = analysis_cfg["music_category"]
    return {
        "view_summary": describe_views(df),
        "correlation": engagement_correlation(df),
        "upper_outlier": outlier_threshold(df["view_count"], float(analysis_cfg["outlier_multiplier"])),
        "top_categories_total": top_categories_by_total(df, int(analysis_cfg["top_categories"])),
        "top_categories_median": top_categories_by_median(df, int(analysis_cfg["top_categories"])),
        "top_hours": top_upload_hours(df, int(analysis_cfg["top_hours"])),
        "top_channels": top_channels(df, int(analysis_cfg["top_channels"])),
        "top_music_channels": top_channels(df, int(analysis_cfg["top_channels"]), category=music),
        "phone_brands": phone_brand_summary(df),
    }


def render_charts(df: pd.DataFrame, results: Dict[str, Any], figures_dir: str) -> list:
    """Save one PNG per question and return the written paths."""
    return [
        charts.plot_view_histogram(df, figures_dir),
        charts.plot_likes_vs_views(df, figures_dir),
        charts.plot_category_spread(df, figures_dir),
        charts.plot_top_categories_median(results["top_categories_median"], figures_dir),
        charts.plot_top_hours(results["top_hours"], figures_dir),
        charts.plot_top_channels(
            results["top_channels"], figures_dir, "top_channels.png", "Top performace youtuber", "salmon"
        ),
        charts.plot_top_channels(
            results["top_music_channels"],
            figures_dir,
            "top_music_channels.png",
            "Popular music YouTube channels",
            "seagreen",
        ),
        charts.plot_phone_brands(results["phone_brands"], figures_dir),
    ]


def write_report(results: Dict[str, Any], path: str, environment: str, figures=None) -> None:
    """
    Markdown summary: one section per question with the result table.
    """
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%SZ")
    sections = [
        ("Descriptive statistics of view count", results["view_summary"].to_frame()),
        ("Correlation (likes, comments, views)", results["correlation"]),
        ("Top categories by total views", results["top_categories_total"]),
        ("Top categories by median views", results["top_categories_median"]),
        ("Most common upload hours", results["top_hours"]),
        ("Top channels by views", results["top_channels"]),
        ("Top music channels by views", results["top_music_channels"]),
        ("Samsung vs iPhone", results["phone_brands"]),
    ]

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write("# Trending Videos Analysis Report\n\n")
        f.write(f"- Generated at: {ts}\n")
        f.write(f"- Environment: **{environment}**\n")
        f.write(f"- Upper outlier threshold (view_count): {results['upper_outlier']:,.1f}\n\n")
        for title, table in sections:
            f.write(f"## {title}\n\n")
            f.write("```\n")
            f.write(table.to_string())
            f.write("\n```\n\n")
        if figures:
            f.write("## Charts\n\n")
            for p in figures:
                f.write(f"- `{p}`\n")


def run_analysis(df: pd.DataFrame, cfg: Dict[str, Any], make_charts: bool = True) -> Dict[str, Any]:
    """
    Entry point of the analysis stage: compute, log, chart, report.
    """
    results = compute_results(df, cfg["analysis"])

    log.info(f"View count summary:\n{results['view_summary'].to_string()}")
    log.info(f"Correlation matrix:\n{results['correlation'].round(3).to_string()}")
    log.info(f"Upper outlier threshold for view_count: {results['upper_outlier']:,.1f}")
    log.info(f"Top categories by total views:\n{results['top_categories_total'].to_string(index=False)}")
    log.info(f"Top upload hours:\n{results['top_hours'].to_string(index=False)}")
    log.info(f"Top channels:\n{results['top_channels'].to_string(index=False)}")
    log.info(f"Samsung vs iPhone:\n{results['phone_brands'].to_string(index=False)}")

    figures = []
    if make_charts and df.empty:
        log.warning("Cleaned table is empty; skipping charts")
    elif make_charts:
        figures = render_charts(df, results, cfg["paths"]["figures_dir"])
        log.info(f"Saved {len(figures)} charts to {cfg['paths']['figures_dir']}")

    report_path = os.path.join(cfg["paths"]["log_dir"], REPORT_NAME)
    write_report(results, report_path, cfg["environment"], figures)
    log.info(f"Analysis report at {report_path}")

    results["figures"] = figures
    return results
