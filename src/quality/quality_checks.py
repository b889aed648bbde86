# =========================================
# 📄 File: src/quality/quality_checks.py
# Purpose: Data Quality checks on the cleaned trending table
# - Define expectation suites (custom)
# - Create data quality report (markdown)
# - Set up alerting (fail on critical issues)
# - Document data lineage in the report
# =========================================

import os  # Used for paths
import logging  # Used for logging
from datetime import datetime, timezone  # Used to timestamp reports
from typing import Dict, List  # Type hints for clarity
import pandas as pd  # Data manipulation for checks

from src.etl.transform_pipeline import OUTPUT_COLUMNS, MISSING_HOUR_LABEL

log = logging.getLogger(__name__)  # Module logger

REPORT_NAME = "quality_report.md"  # Written under the configured log_dir
VALID_HOURS = {str(h) for h in range(24)}  # Hours are stored as text


def _expect_columns(df: pd.DataFrame, cols: List[str]) -> List[str]:
    """
    Expectation: the table has exactly the listed columns, in order.
    """
    if list(df.columns) != list(cols):
        return [f"Unexpected columns {list(df.columns)} (expected {list(cols)})"]
    return []


def _expect_not_null(df: pd.DataFrame, cols: List[str]) -> List[str]:
    """
    Expectation: specified columns must have no nulls.
    Returns list of error messages (empty if all good).
    """
    errs = []
    for c in cols:
        if df[c].isna().any():
            errs.append(f"Nulls found in column '{c}'")
    return errs


def _expect_positive(df: pd.DataFrame, cols: List[str]) -> List[str]:
    """
    Expectation: numeric columns must be > 0.
    """
    errs = []
    for c in cols:
        if (df[c] <= 0).any():
            errs.append(f"Non-positive values in column '{c}'")
    return errs


def is_valid_hour(value, label: str = MISSING_HOUR_LABEL) -> bool:
    """An hour is 0-23 (int or its text form) or the missing-hour label."""
    if value == label:
        return True
    return str(value) in VALID_HOURS


def _expect_valid_hour(df: pd.DataFrame, col: str, label: str) -> List[str]:
    """
    Expectation: every hour is 0-23 or the missing-hour label.
    """
    bad = ~df[col].map(lambda v: is_valid_hour(v, label))
    if bad.any():
        return [f"Invalid hour values in '{col}' ({int(bad.sum())} rows)"]
    return []


def _report_missing(df: pd.DataFrame) -> List[str]:
    """
    Informational: columns that still hold missing values (no imputation beyond hour).
    """
    return [f"{int(n)} missing values in '{c}'" for c, n in df.isna().sum().items() if n]


def run_quality_checks(df: pd.DataFrame, log_dir: str, environment: str,
                       missing_hour_label: str = MISSING_HOUR_LABEL) -> Dict[str, List[str]]:
    """
    Runs expectation suites on the cleaned table and writes a markdown report:
      - schema: exact output column list
      - hour: never null, always 0-23 or the missing-hour label
      - view_count: never null, strictly positive (zero-view snapshots are filtered out)
    Missing values in other columns are listed as informational only.
    Raises SystemExit(1) if any critical expectation fails (alerting).
    """
    os.makedirs(log_dir, exist_ok=True)
    report_path = os.path.join(log_dir, REPORT_NAME)
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%SZ")

    errors: Dict[str, List[str]] = {}

    errors["schema"] = _expect_columns(df, OUTPUT_COLUMNS)
    if errors["schema"]:  # Remaining suites need the expected columns
        errors["hour"] = []
        errors["view_count"] = []
    else:
        errors["hour"] = _expect_not_null(df, ["hour"]) + _expect_valid_hour(df, "hour", missing_hour_label)
        errors["view_count"] = _expect_not_null(df, ["view_count"]) + _expect_positive(df, ["view_count"])

    info = _report_missing(df)
    total_issues = sum(len(v) for v in errors.values())

    with open(report_path, "w", encoding="utf-8") as f:
        f.write("# Data Quality Report\n\n")
        f.write(f"- Generated at: {ts}\n")
        f.write(f"- Environment: **{environment}**\n")
        f.write(f"- Rows checked: {len(df)}\n\n")
        f.write("## Lineage (simplified)\n")
        f.write("- Source: trending CSV export + category JSON lookup\n")
        f.write("- Steps: inner join on category id → earliest non-zero snapshot per video → date/hour → hour fill\n")
        f.write("- Downstream targets: cleaned CSV, analysis report and charts\n\n")
        f.write("## Expectations Summary\n\n")
        for suite, errs in errors.items():
            f.write(f"### {suite}\n")
            if not errs:
                f.write("- ✅ No issues found\n\n")
            else:
                for e in errs:
                    f.write(f"- ❌ {e}\n")
                f.write("\n")
        f.write("## Informational\n\n")
        if info:
            for line in info:
                f.write(f"- {line}\n")
        else:
            f.write("- No missing values\n")
        f.write(f"\n**Total issues:** {total_issues}\n")

    if total_issues > 0:
        log.error(f"Data quality failed with {total_issues} issues. See {report_path}")
        raise SystemExit(1)
    log.info(f"Data quality passed. Report at {report_path}")
    return errors
