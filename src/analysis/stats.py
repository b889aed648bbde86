# =========================================
# 📄 File: src/analysis/stats.py
# Purpose: Read-only queries over the cleaned trending table
# - Descriptive statistics, correlation, IQR outlier bound
# - Top categories / upload hours / channels
# - Samsung vs iPhone tag comparison
# =========================================

from typing import Iterable, Optional
import numpy as np
import pandas as pd

ENGAGEMENT_COLUMNS = ["likes", "comment_count", "view_count"]
PHONE_BRANDS = ["samsung", "iphone"]  # Checked in this order; first match wins
OTHER_BRAND = "others"


def describe_views(df: pd.DataFrame) -> pd.Series:
    """
    Five-number summary plus mean of view_count (min, Q1, median, mean, Q3, max).
    """
    views = df["view_count"]
    return pd.Series(
        {
            "min": views.min(),
            "q1": views.quantile(0.25),
            "median": views.median(),
            "mean": views.mean(),
            "q3": views.quantile(0.75),
            "max": views.max(),
        },
        name="view_count",
    )


def engagement_correlation(df: pd.DataFrame) -> pd.DataFrame:
    """Pearson correlation matrix of likes, comment_count and view_count."""
    return df[ENGAGEMENT_COLUMNS].corr(method="pearson")


def outlier_threshold(values: Iterable[float], multiplier: float = 1.5) -> float:
    """
    Upper whisker for outlier detection: Q3 + multiplier * (Q3 - Q1).
    Quartiles use linear interpolation. The bound is reported, never used to filter.
    NaN when there is no non-missing value.
    """
    arr = np.asarray(list(values), dtype=float)
    arr = arr[~np.isnan(arr)]
    if arr.size == 0:
        return float("nan")
    q1, q3 = np.quantile(arr, [0.25, 0.75])
    return float(q3 + multiplier * (q3 - q1))


def top_categories_by_total(df: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    """Categories ranked by summed views, largest first."""
    totals = (
        df.groupby("category_name")["view_count"]
        .sum()
        .reset_index(name="total_view")
        .sort_values("total_view", ascending=False, kind="stable")
    )
    return totals.head(n).reset_index(drop=True)


def top_categories_by_median(df: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    """
    Categories ranked by median views. Ties at the cut-off are all kept.
    """
    medians = df.groupby("category_name")["view_count"].median().reset_index(name="median_view")
    top = medians.nlargest(n, "median_view", keep="all")
    return top.reset_index(drop=True)


def top_upload_hours(df: pd.DataFrame, n: int = 5) -> pd.DataFrame:
    """Upload hours (including the missing-hour label) ranked by number of videos."""
    counts = (
        df.groupby("hour")
        .size()
        .reset_index(name="count")
        .sort_values("count", ascending=False, kind="stable")
    )
    return counts.head(n).reset_index(drop=True)


def top_channels(df: pd.DataFrame, n: int = 5, category: Optional[str] = None) -> pd.DataFrame:
    """
    Channels ranked by summed views; restricted to one category when given.
    """
    subset = df if category is None else df[df["category_name"] == category]
    totals = (
        subset.groupby("channeltitle")["view_count"]
        .sum()
        .reset_index(name="view")
        .sort_values("view", ascending=False, kind="stable")
    )
    return totals.head(n).reset_index(drop=True)


def classify_phone_brand(tags: pd.Series) -> pd.Series:
    """
    Label each row "samsung", "iphone" or "others" by case-sensitive substring
    match on tags. samsung is checked before iphone; missing tags are "others".
    """
    text = tags.astype("string")  # All-missing columns load as float
    brand = pd.Series(OTHER_BRAND, index=tags.index, dtype=object)
    matched = pd.Series(False, index=tags.index, dtype=bool)
    for name in PHONE_BRANDS:
        hit = text.str.contains(name, case=True, regex=False, na=False).astype(bool) & ~matched
        brand[hit] = name
        matched |= hit
    return brand


def phone_brand_summary(df: pd.DataFrame) -> pd.DataFrame:
    """
    Total and median views of samsung-tagged vs iphone-tagged videos.
    Brands without any tagged video are absent from the result.
    """
    phone = df.assign(type=classify_phone_brand(df["tags"]))
    phone = phone[phone["type"].isin(PHONE_BRANDS)]
    summary = (
        phone.groupby("type")["view_count"]
        .agg(total_view="sum", median_view="median")
        .reset_index()
    )
    return summary
