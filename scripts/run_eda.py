#!/usr/bin/env python3
# =========================================
# 📄 File: scripts/run_eda.py
# Purpose: Run the trending-video EDA end to end, using the YAML config loader
# - Validate raw input → clean + write CSV → quality checks → analysis report/charts
# =========================================

import os
import sys
import time
import logging
import argparse

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))  # Project root for config/ and src/

from config.config_loader import get_config
from src import data_validator
from src.etl import transform_pipeline
from src.quality.quality_checks import run_quality_checks
from src.analysis.report import run_analysis

log = logging.getLogger(__name__)


# -----------------------
# CLI interface
# -----------------------
def parse_args(argv=None):
    """
    Command-line interface options:
    --env           : config environment (dev/prod), overrides ENV
    --skip-charts   : compute and report results without rendering PNGs
    --skip-quality  : do not run the cleaned-table quality checks
    """
    p = argparse.ArgumentParser(description="YouTube trending videos EDA (YAML config enabled)")
    p.add_argument("--env", type=str, default=None, help="Config environment, e.g. dev or prod")
    p.add_argument("--skip-charts", action="store_true", help="Do not render chart PNGs")
    p.add_argument("--skip-quality", action="store_true", help="Skip quality checks on the cleaned table")
    return p.parse_args(argv)


def run(cfg, make_charts=True, check_quality=True):
    """
    Main execution flow:
    - Validates the raw CSV (row issues logged, missing columns fatal)
    - Builds and writes the cleaned table
    - Runs quality checks on it
    - Answers the analysis questions
    """
    started = time.time()
    paths = cfg["paths"]

    data_validator.main(paths["trending_csv"], paths["log_dir"])
    cleaned = transform_pipeline.run(cfg)

    if check_quality:
        run_quality_checks(
            cleaned, paths["log_dir"], cfg["environment"], cfg["analysis"]["missing_hour_label"]
        )

    results = run_analysis(cleaned, cfg, make_charts=make_charts)
    log.info(f"✅ EDA complete in {time.time() - started:.2f}s")
    return cleaned, results


def main(argv=None):
    args = parse_args(argv)
    cfg = get_config(args.env)

    logging.basicConfig(
        level=cfg["log_level"],  # Uses "DEBUG" or "INFO" from YAML
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        run(cfg, make_charts=not args.skip_charts, check_quality=not args.skip_quality)
        return 0
    except SystemExit as e:  # Raised by validator / quality alerting
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        log.exception(f"❌ EDA run failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
