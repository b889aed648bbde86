import csv
import logging
import os
from datetime import datetime

log = logging.getLogger(__name__)

# Columns the pipeline reads from the trending export (original casing)
REQUIRED_COLUMNS = [
    "video_id",
    "publishedAt",
    "channelTitle",
    "title",
    "categoryId",
    "tags",
    "view_count",
    "likes",
    "dislikes",
    "comment_count",
]
COUNT_COLUMNS = ["view_count", "likes", "dislikes", "comment_count"]

# --- Helper functions for validation ---


def is_valid_timestamp(value):
    """Check that a publish timestamp parses as ISO-8601 (e.g. 2020-08-11T19:20:14Z)."""
    if not value:
        return False
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
        return True
    except ValueError:
        return False


def is_valid_count(value):
    """Counts must be non-negative integers; empty cells are reported separately."""
    try:
        return int(value) >= 0
    except (TypeError, ValueError):
        return False


def missing_columns(header):
    """Return the required columns absent from a CSV header row."""
    present = set(header or [])
    return [c for c in REQUIRED_COLUMNS if c not in present]


def write_log(log_file, message):
    """Append a message to the validation log file."""
    with open(log_file, "a", encoding="utf-8") as f:
        f.write(message + "\n")


# --- Main validation function ---
def validate_trending_csv(file_path, log_file):
    """
    Scan the raw trending export row by row and record problems in log_file.

    Missing required columns abort the run. Row-level findings (bad timestamp,
    negative or non-numeric counts, empty category id) are only logged, since
    the cleaning step decides what survives. Returns the number of row issues.
    """
    filename = os.path.basename(file_path)

    if not os.path.exists(file_path):
        write_log(log_file, f"[ERROR] File not found: {filename}")
        raise FileNotFoundError(file_path)

    issues = 0
    with open(file_path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        absent = missing_columns(reader.fieldnames)
        if absent:
            write_log(log_file, f"[ERROR] [{filename}] Missing columns: {', '.join(absent)}")
            log.error(f"Raw input {filename} is missing columns: {', '.join(absent)}")
            raise SystemExit(1)

        row_num = 1
        for row in reader:
            if not is_valid_timestamp(row.get("publishedAt", "")):
                write_log(
                    log_file,
                    f"[{filename}] Row {row_num}: Invalid timestamp '{row.get('publishedAt')}'",
                )
                issues += 1

            if not (row.get("categoryId") or "").strip():
                write_log(log_file, f"[{filename}] Row {row_num}: Empty categoryId")
                issues += 1

            for field in COUNT_COLUMNS:
                value = row.get(field)
                if value in ("", None):
                    write_log(log_file, f"[{filename}] Row {row_num}: Null value in '{field}'")
                    issues += 1
                elif not is_valid_count(value):
                    write_log(log_file, f"[{filename}] Row {row_num}: Invalid count '{field}={value}'")
                    issues += 1

            row_num += 1

    write_log(log_file, f"[OK] Finished validating {filename} ({row_num - 1} rows, {issues} issues)")
    return issues


def main(file_path, log_dir):
    """Validate the raw export, truncating any previous validation log first."""
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "validation.log")
    open(log_file, "w").close()  # Clear previous log
    write_log(log_file, "Starting data validation...\n")

    issues = validate_trending_csv(file_path, log_file)

    write_log(log_file, "\nValidation complete.")
    if issues:
        log.warning(f"Raw input has {issues} row-level issues. See {log_file}")
    else:
        log.info("Raw input validation passed.")
    return issues
