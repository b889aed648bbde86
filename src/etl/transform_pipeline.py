# =========================================
# 📄 File: src/etl/transform_pipeline.py
# Purpose: Trending-video cleaning pipeline
# - Extract the trending CSV export and the category JSON lookup
# - Transform: join categories, keep earliest snapshot per video, derive date/hour
# - Load the cleaned table into a flat CSV
# =========================================

import os  # Used for path handling
import json  # Used to parse the category lookup document
import time  # Used to measure processing time
import logging  # Used for structured logging of pipeline stages
from typing import Dict, Any  # Type hints for readability
import pandas as pd  # Core data manipulation library

log = logging.getLogger(__name__)  # Module-level logger

# Columns kept after the join, in the order the cleaner expects them
SELECTED_COLUMNS = [
    "video_id",
    "publishedat",
    "channeltitle",
    "title",
    "category_name",
    "tags",
    "view_count",
    "likes",
    "dislikes",
    "comment_count",
]

# Final layout of the cleaned CSV
OUTPUT_COLUMNS = [
    "channeltitle",
    "title",
    "category_name",
    "tags",
    "view_count",
    "likes",
    "dislikes",
    "comment_count",
    "date",
    "hour",
]

MISSING_HOUR_LABEL = "No information"


# -----------------------
# Extract
# -----------------------


def load_trending_csv(path: str) -> pd.DataFrame:
    """
    Read the trending export. categoryId is kept as text so it joins cleanly
    with the string ids of the category lookup.
    """
    log.info(f"Extracting trending data from {path}…")
    df = pd.read_csv(path, dtype={"categoryId": str})
    log.info(f"Loaded {len(df)} trending rows with {df.shape[1]} columns")
    return df


def load_category_json(path: str) -> Dict[str, Any]:
    """
    Read the category lookup document ({"items": [{"id", "snippet": {"title"}}]}).
    """
    log.info(f"Extracting category lookup from {path}…")
    with open(path, "r", encoding="utf-8") as f:
        doc = json.load(f)  # Malformed JSON raises and aborts the run
    return doc


# -----------------------
# Transform
# -----------------------


def as_text_key(ids: pd.Series) -> pd.Series:
    """
    Category ids as text. Numeric ids go through Int64 first, so a float column
    (ints plus a missing value) gives "10" rather than "10.0".
    """
    if pd.api.types.is_numeric_dtype(ids):
        ids = ids.astype("Int64")
    return ids.astype(str)


def flatten_categories(doc: Dict[str, Any]) -> pd.DataFrame:
    """
    Flatten the nested lookup into (item_id, category_name) pairs.
    """
    items = pd.json_normalize(doc["items"])  # Nested snippet fields become "snippet.title"
    categories = items[["id", "snippet.title"]].rename(
        columns={"id": "item_id", "snippet.title": "category_name"}
    )
    categories["item_id"] = as_text_key(categories["item_id"])  # Join key as text
    return categories.reset_index(drop=True)


def join_categories(trending: pd.DataFrame, categories: pd.DataFrame) -> pd.DataFrame:
    """
    Inner-join the trending rows with their category names.
    Rows whose categoryId has no lookup entry are dropped. Column names are lowercased.
    """
    t = trending.copy()  # Copy to avoid mutating input
    t["categoryId"] = as_text_key(t["categoryId"])  # Coerce the key on the dataset side too

    joined = t.merge(categories, left_on="categoryId", right_on="item_id", how="inner")
    joined = joined.drop(columns=["item_id"])  # Same values as categoryId after the join
    joined.columns = [c.lower() for c in joined.columns]

    dropped = len(trending) - len(joined)
    if dropped:
        log.debug(f"Dropped {dropped} rows with unknown category ids")
    return joined


def select_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Project the joined table onto the fields used downstream.
    """
    return df[SELECTED_COLUMNS].copy()


def keep_earliest_snapshot(df: pd.DataFrame) -> pd.DataFrame:
    """
    Keep, for every video, the row(s) with the minimum non-zero view count.

    A trending snapshot with 0 views is a placeholder, so it never counts as the
    minimum and never survives; a video with only zero-view snapshots is dropped.
    Ties on the minimum keep every tied row.
    """
    views = df["view_count"]
    nonzero = views.where(views != 0)  # Zeros become NaN and are skipped by min()
    group_min = nonzero.groupby(df["video_id"]).transform("min")
    mask = (views == group_min) & (views != 0)
    return df[mask].copy()


def derive_date_hour(df: pd.DataFrame) -> pd.DataFrame:
    """
    Split publishedat into a calendar date and an hour of day (UTC).
    Unparseable timestamps leave both fields missing. Drops publishedat and video_id.
    """
    out = df.copy()
    published = pd.to_datetime(out["publishedat"], errors="coerce", utc=True, format="ISO8601")
    out["date"] = published.dt.date
    out["hour"] = published.dt.hour.astype("Int64")  # Nullable int keeps <NA> for bad timestamps
    return out.drop(columns=["publishedat", "video_id"])


def fill_missing_hour(df: pd.DataFrame, label: str = MISSING_HOUR_LABEL) -> pd.DataFrame:
    """
    Store hour as text and replace missing hours with `label`.
    No other column is imputed.
    """
    out = df.copy()
    hour = out["hour"]
    out["hour"] = hour.astype(object).where(hour.notna(), label)
    out["hour"] = out["hour"].map(lambda h: h if h == label else str(int(h)))
    return out


def missing_value_summary(df: pd.DataFrame) -> Dict[str, Any]:
    """
    Share of complete rows and the number of rows holding at least one missing value.
    """
    incomplete = df.isna().any(axis=1)
    total = len(df)
    return {
        "rows": total,
        "complete_ratio": float((~incomplete).mean()) if total else 1.0,
        "rows_with_missing": int(incomplete.sum()),
        "missing_by_column": {c: int(n) for c, n in df.isna().sum().items() if n},
    }


def clean_trending(joined: pd.DataFrame, missing_hour_label: str = MISSING_HOUR_LABEL) -> pd.DataFrame:
    """
    Full cleaning chain over the joined table: projection, dedup, date/hour, hour fill.
    """
    selected = select_columns(joined)
    deduped = keep_earliest_snapshot(selected)
    log.info(f"Kept {len(deduped)} of {len(selected)} rows after earliest-snapshot filter")

    dated = derive_date_hour(deduped)

    summary = missing_value_summary(dated)
    log.info(
        f"Complete rows: {summary['complete_ratio']:.2%} | "
        f"rows with missing values: {summary['rows_with_missing']}"
    )
    if summary["missing_by_column"]:
        log.debug(f"Missing values by column: {summary['missing_by_column']}")

    cleaned = fill_missing_hour(dated, missing_hour_label)
    return cleaned[OUTPUT_COLUMNS].reset_index(drop=True)


# -----------------------
# Load (flat file)
# -----------------------


def write_clean_csv(df: pd.DataFrame, path: str) -> None:
    """
    Write the cleaned table with a header row and no index column.
    """
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)  # Ensure output folder exists
    df.to_csv(path, index=False)
    log.info(f"Wrote {len(df)} cleaned rows to {path}")


def read_clean_csv(path: str) -> pd.DataFrame:
    """
    Read a cleaned CSV back; hour stays text so "No information" and "7" share one column.
    """
    return pd.read_csv(path, dtype={"hour": str})


# -----------------------
# Orchestration (single entry point)
# -----------------------


def run(cfg: Dict[str, Any]) -> pd.DataFrame:
    """
    Steps:
      1) Extract the trending CSV and category JSON.
      2) Flatten + join categories.
      3) Clean (projection, earliest snapshot, date/hour, missing hour).
      4) Write the cleaned CSV.
    Returns the cleaned table for the analysis stage.
    """
    started = time.time()
    paths = cfg["paths"]

    trending = load_trending_csv(paths["trending_csv"])
    categories = flatten_categories(load_category_json(paths["category_json"]))

    joined = join_categories(trending, categories)
    log.info(f"Joined {len(joined)} rows with {len(categories)} categories")

    cleaned = clean_trending(joined, cfg["analysis"]["missing_hour_label"])
    write_clean_csv(cleaned, paths["output_csv"])

    elapsed = time.time() - started
    log.info(f"[{cfg['environment'].upper()}] ETL completed in {elapsed:.2f}s | ROWS={len(cleaned)}")
    return cleaned
