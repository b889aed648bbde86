# tests/unit/test_transforms.py
# ------------------------------------------------------------
# Purpose: Unit tests for pure DataFrame transforms in
#          src/etl/transform_pipeline.py (tiny in-memory tables).
# ------------------------------------------------------------

import datetime

import pandas as pd

from src.etl.transform_pipeline import (
    OUTPUT_COLUMNS,
    clean_trending,
    derive_date_hour,
    fill_missing_hour,
    flatten_categories,
    join_categories,
    keep_earliest_snapshot,
    missing_value_summary,
    read_clean_csv,
    write_clean_csv,
)


def test_flatten_categories_extracts_id_and_title(category_doc):
    cats = flatten_categories(category_doc)
    assert list(cats.columns) == ["item_id", "category_name"]
    assert dict(zip(cats["item_id"], cats["category_name"])) == {
        "10": "Music",
        "24": "Entertainment",
        "28": "Science & Technology",
    }


def test_join_matches_lookup_and_drops_unknown_ids(trending_df, category_doc):
    cats = flatten_categories(category_doc)
    joined = join_categories(trending_df, cats)

    # Integer ids on the dataset side still match the text ids of the lookup.
    lookup = dict(zip(cats["item_id"], cats["category_name"]))
    for cid, name in zip(joined["categoryid"], joined["category_name"]):
        assert lookup[cid] == name

    # Category 99 has no lookup entry.
    assert "D" not in set(joined["video_id"])
    assert len(joined) == len(trending_df) - 1

    # Column names are lowercased.
    assert all(c == c.lower() for c in joined.columns)
    assert "channeltitle" in joined.columns and "publishedat" in joined.columns


def test_join_float_category_ids_with_missing_value(trending_df, category_doc):
    # A missing id turns the integer column into float (10 -> 10.0).
    df = trending_df.copy()
    df["categoryId"] = df["categoryId"].astype(float)
    df.loc[df["video_id"] == "F", "categoryId"] = None

    joined = join_categories(df, flatten_categories(category_doc))

    # F (missing id) and D (unknown id) are dropped, the rest match.
    assert sorted(set(joined["video_id"])) == ["A", "B", "C", "E"]
    assert len(joined) == 6
    assert set(joined["categoryid"]) == {"10", "24", "28"}


def test_join_does_not_mutate_input(trending_df, category_doc):
    before = trending_df["categoryId"].tolist()
    join_categories(trending_df, flatten_categories(category_doc))
    assert trending_df["categoryId"].tolist() == before


def test_keep_earliest_snapshot_ignores_zero_views():
    df = pd.DataFrame(
        {
            "video_id": ["A", "A", "B", "B", "C", "T", "T"],
            "view_count": [0, 500, 1500, 1000, 0, 70, 70],
        }
    )
    kept = keep_earliest_snapshot(df)

    by_video = kept.groupby("video_id")["view_count"].apply(list).to_dict()
    assert by_video["A"] == [500]  # zero placeholder never wins
    assert by_video["B"] == [1000]  # minimum snapshot
    assert "C" not in by_video  # only snapshot had zero views
    assert by_video["T"] == [70, 70]  # ties are all kept


def test_derive_date_hour_parses_utc_and_drops_source_columns():
    df = pd.DataFrame(
        {
            "video_id": ["A", "B"],
            "publishedat": ["2020-08-11T19:20:14Z", "not a timestamp"],
            "view_count": [1, 2],
        }
    )
    out = derive_date_hour(df)

    assert "publishedat" not in out.columns
    assert "video_id" not in out.columns
    assert out.loc[0, "date"] == datetime.date(2020, 8, 11)
    assert out.loc[0, "hour"] == 19
    assert pd.isna(out.loc[1, "hour"])
    assert pd.isna(out.loc[1, "date"])


def test_derive_date_hour_converts_offsets_to_utc():
    df = pd.DataFrame(
        {
            "video_id": ["A"],
            "publishedat": ["2020-08-11T23:30:00-05:00"],
            "view_count": [1],
        }
    )
    out = derive_date_hour(df)

    # 23:30 at UTC-5 is 04:30 UTC on the next day.
    assert out.loc[0, "hour"] == 4
    assert out.loc[0, "date"] == datetime.date(2020, 8, 12)


def test_fill_missing_hour_uses_label_and_text():
    df = pd.DataFrame({"hour": pd.array([19, None, 0], dtype="Int64"), "tags": [None, None, "x"]})
    out = fill_missing_hour(df)

    assert out["hour"].tolist() == ["19", "No information", "0"]
    # Only hour is imputed.
    assert out["tags"].isna().sum() == 2


def test_clean_trending_end_to_end(trending_df, category_doc):
    joined = join_categories(trending_df, flatten_categories(category_doc))
    cleaned = clean_trending(joined)

    assert list(cleaned.columns) == OUTPUT_COLUMNS
    assert sorted(cleaned["view_count"].tolist()) == [500, 800, 1000, 2000]

    hours = dict(zip(cleaned["title"], cleaned["hour"]))
    assert hours == {"a1": "19", "b0": "5", "e0": "No information", "f0": "19"}

    # Tags stay missing for E (no imputation beyond hour).
    assert cleaned.loc[cleaned["title"] == "e0", "tags"].isna().all()


def test_write_then_read_round_trip(tmp_path, trending_df, category_doc):
    cleaned = clean_trending(join_categories(trending_df, flatten_categories(category_doc)))
    path = tmp_path / "out" / "finalyoutube.csv"

    write_clean_csv(cleaned, str(path))
    back = read_clean_csv(str(path))

    assert list(back.columns) == list(cleaned.columns)
    assert len(back) == len(cleaned)
    assert sorted(back["hour"].tolist()) == sorted(cleaned["hour"].tolist())
    # No index column in the header.
    assert path.read_text(encoding="utf-8").splitlines()[0] == ",".join(OUTPUT_COLUMNS)


def test_missing_value_summary_counts_incomplete_rows():
    df = pd.DataFrame({"a": [1, None, 3, 4], "b": ["x", "y", None, "z"]})
    summary = missing_value_summary(df)
    assert summary["rows"] == 4
    assert summary["rows_with_missing"] == 2
    assert summary["complete_ratio"] == 0.5
    assert summary["missing_by_column"] == {"a": 1, "b": 1}
