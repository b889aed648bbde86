# =========================================
# 📄 File: config/config_loader.py
# Purpose: Load YAML config (dev/prod), substitute ${ENV_VARS}, validate, and expose helpers
# =========================================

import os                      # Used to read ENV to pick dev/prod and to resolve ${VAR} placeholders
import re                      # Used to find and replace ${VAR} patterns inside YAML text
import sys                     # Used to exit early with a clear error message on invalid config
from typing import Dict, Any   # Type hints for better readability and tooling
import yaml                    # Safe YAML parsing (install: PyYAML)

CONFIG_DIR = os.path.dirname(os.path.abspath(__file__))   # config/ folder holding {env}.yaml
PROJECT_ROOT = os.path.dirname(CONFIG_DIR)                # Relative paths in YAML resolve from here

REQUIRED_TOP = ["environment", "log_level", "paths", "analysis"]
REQUIRED_PATHS = ["trending_csv", "category_json", "output_csv", "figures_dir", "log_dir"]
REQUIRED_ANALYSIS = [
    "missing_hour_label",
    "outlier_multiplier",
    "top_categories",
    "top_hours",
    "top_channels",
    "music_category",
]


def _substitute_env_placeholders(yaml_text: str) -> str:
    """
    Replace ${VAR} placeholders in YAML text with their environment variable values.
    If an env var is missing, mark it as <MISSING:VAR> to fail validation cleanly.
    """
    pattern = re.compile(r"\$\{([^}^{]+)\}")
    def repl(match):
        var_name = match.group(1)                              # Extract VAR name from ${VAR}
        return os.getenv(var_name, f"<MISSING:{var_name}>")    # Return env value or a sentinel
    return pattern.sub(repl, yaml_text)


def _load_yaml_file(path: str) -> Dict[str, Any]:
    """
    Read a YAML file from disk, perform ${VAR} substitution, and parse it to a dict.
    """
    if not os.path.exists(path):
        print(f"❌ Configuration file not found: {path}")
        sys.exit(1)

    with open(path, "r", encoding="utf-8") as f:
        raw = f.read()

    substituted = _substitute_env_placeholders(raw)

    try:
        cfg = yaml.safe_load(substituted)
    except yaml.YAMLError as e:
        print(f"❌ YAML parsing error in {path}: {e}")
        sys.exit(1)

    if not isinstance(cfg, dict):                              # Empty file or a bare scalar
        print(f"❌ Configuration file is empty or not a mapping: {path}")
        sys.exit(1)

    return cfg


def _missing_keys(section: Dict[str, Any], required, prefix: str = ""):
    """Return the required keys that are absent, empty, or still marked <MISSING:...>."""
    return [
        f"{prefix}{k}"
        for k in required
        if k not in section or section[k] in (None, "") or "MISSING:" in str(section[k])
    ]


def _validate_config(cfg: Dict[str, Any]) -> None:
    """
    Validate presence of required keys and ensure no <MISSING:...> placeholders remain.
    """
    missing_top = [k for k in REQUIRED_TOP if k not in cfg or cfg[k] in (None, "")]
    if missing_top:
        print(f"❌ Missing top-level config keys: {', '.join(missing_top)}")
        sys.exit(1)

    missing_paths = _missing_keys(cfg["paths"], REQUIRED_PATHS, prefix="paths.")
    if missing_paths:
        print(f"❌ Missing/invalid path config keys: {', '.join(missing_paths)}")
        sys.exit(1)

    missing_analysis = _missing_keys(cfg["analysis"], REQUIRED_ANALYSIS, prefix="analysis.")
    if missing_analysis:
        print(f"❌ Missing/invalid analysis config keys: {', '.join(missing_analysis)}")
        sys.exit(1)

    if float(cfg["analysis"]["outlier_multiplier"]) <= 0:     # Whisker length must be positive
        print("❌ analysis.outlier_multiplier must be greater than 0.")
        sys.exit(1)


def _resolve_paths(cfg: Dict[str, Any], base_dir: str) -> None:
    """Turn relative entries under `paths` into absolute ones anchored at base_dir."""
    for key, value in cfg["paths"].items():
        if not os.path.isabs(str(value)):
            cfg["paths"][key] = os.path.join(base_dir, str(value))


def load_config(path: str, base_dir: str = PROJECT_ROOT) -> Dict[str, Any]:
    """
    Load + validate a config file from an explicit path.
    Relative data paths are resolved against base_dir (the project root by default).
    """
    cfg = _load_yaml_file(path)
    _validate_config(cfg)
    _resolve_paths(cfg, base_dir)
    return cfg


def get_config(env: str | None = None) -> Dict[str, Any]:
    """
    Public API: pick env from argument or ENV (default 'dev'), load YAML, validate, return dict.
    """
    env = (env or os.getenv("ENV", "dev")).lower()             # Choose 'dev' or 'prod'
    path = os.path.join(CONFIG_DIR, f"{env}.yaml")             # Build path like config/dev.yaml
    return load_config(path)
