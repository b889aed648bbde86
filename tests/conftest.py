# tests/conftest.py
# ------------------------------------------------------------
# Purpose: Shared fixtures: a tiny trending export, its category
# lookup, the files written to tmp_path, and a config dict that
# points every path at tmp_path (no real data needed).
# ------------------------------------------------------------

import json

import matplotlib

matplotlib.use("Agg")  # No display in CI

import pandas as pd
import pytest


@pytest.fixture
def category_doc():
    """Same shape as the US_category_id.json export (trimmed)."""
    return {
        "kind": "youtube#videoCategoryListResponse",
        "items": [
            {"kind": "youtube#videoCategory", "id": "10", "snippet": {"title": "Music", "assignable": True}},
            {"kind": "youtube#videoCategory", "id": "24", "snippet": {"title": "Entertainment", "assignable": True}},
            {"kind": "youtube#videoCategory", "id": "28", "snippet": {"title": "Science & Technology", "assignable": True}},
        ],
    }


@pytest.fixture
def trending_df():
    """
    Raw snapshots:
      A: zero-view placeholder + real snapshot  -> keeps the 500 row
      B: two snapshots                          -> keeps the 1000 row
      C: only a zero-view snapshot              -> dropped
      D: unknown category 99                    -> dropped by the join
      E: no publish timestamp, no tags          -> hour "No information"
      F: single snapshot                        -> kept
    """
    return pd.DataFrame(
        {
            "video_id": ["A", "A", "B", "B", "C", "D", "E", "F"],
            "title": ["a0", "a1", "b0", "b1", "c0", "d0", "e0", "f0"],
            "publishedAt": [
                "2020-08-11T19:20:14Z",
                "2020-08-11T19:20:14Z",
                "2020-08-12T05:00:00Z",
                "2020-08-12T05:00:00Z",
                "2020-08-12T07:30:00Z",
                "2020-08-12T08:00:00Z",
                None,
                "2020-08-13T19:45:00Z",
            ],
            "channelTitle": ["Chan1", "Chan1", "Chan2", "Chan2", "Chan3", "Chan4", "Chan1", "Chan2"],
            "categoryId": [10, 10, 24, 24, 28, 99, 10, 24],
            "trending_date": ["2020-08-12T00:00:00Z"] * 8,
            "tags": [
                "best samsung review",
                "best samsung review",
                "new iphone unboxing",
                "new iphone unboxing",
                "[None]",
                "misc",
                None,
                "cooking tutorial",
            ],
            "view_count": [0, 500, 1000, 1500, 0, 300, 800, 2000],
            "likes": [0, 50, 100, 120, 0, 30, 80, 200],
            "dislikes": [0, 1, 2, 3, 0, 1, 4, 5],
            "comment_count": [0, 10, 20, 25, 0, 3, 8, 40],
        }
    )


@pytest.fixture
def trending_files(tmp_path, trending_df, category_doc):
    """Write the raw CSV + category JSON and return their paths."""
    raw_dir = tmp_path / "raw"
    raw_dir.mkdir()
    csv_path = raw_dir / "US_youtube_trending_data.csv"
    json_path = raw_dir / "US_category_id.json"
    trending_df.to_csv(csv_path, index=False)
    json_path.write_text(json.dumps(category_doc), encoding="utf-8")
    return str(csv_path), str(json_path)


@pytest.fixture
def test_cfg(tmp_path, trending_files):
    """Config dict shaped like config/dev.yaml, rooted in tmp_path."""
    csv_path, json_path = trending_files
    return {
        "environment": "test",
        "log_level": "WARNING",
        "paths": {
            "trending_csv": csv_path,
            "category_json": json_path,
            "output_csv": str(tmp_path / "processed" / "finalyoutube.csv"),
            "figures_dir": str(tmp_path / "figures"),
            "log_dir": str(tmp_path / "logs"),
        },
        "analysis": {
            "missing_hour_label": "No information",
            "outlier_multiplier": 1.5,
            "top_categories": 10,
            "top_hours": 5,
            "top_channels": 5,
            "music_category": "Music",
        },
    }
