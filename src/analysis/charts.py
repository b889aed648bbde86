# =========================================
# 📄 File: src/analysis/charts.py
# Purpose: Render the EDA charts as PNG files (one figure per question)
# =========================================

import os
import logging
import matplotlib

matplotlib.use("Agg")  # Headless rendering; figures are only saved to disk

import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter
import pandas as pd
import seaborn as sns

log = logging.getLogger(__name__)


def scaled_formatter(scale: float, suffix: str, decimals: int = 0) -> FuncFormatter:
    """Axis labels like 1.5M or 300K (value * scale, thousands separator, suffix)."""
    return FuncFormatter(lambda x, _pos: f"{x * scale:,.{decimals}f}{suffix}")


MILLIONS = scaled_formatter(1e-6, "M", decimals=1)
THOUSANDS = scaled_formatter(1e-3, "K")


def _save(fig, figures_dir: str, filename: str) -> str:
    """Save a figure under figures_dir, close it, and return the written path."""
    os.makedirs(figures_dir, exist_ok=True)
    path = os.path.join(figures_dir, filename)
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    log.debug(f"Saved chart {path}")
    return path


def plot_view_histogram(df: pd.DataFrame, figures_dir: str) -> str:
    """Histogram of view_count, axis in millions."""
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.hist(df["view_count"].dropna(), bins=30, color="steelblue", edgecolor="white")
    ax.xaxis.set_major_formatter(MILLIONS)
    ax.set_title("Histogram of view count")
    ax.set_xlabel("View Count (Millions)")
    ax.set_ylabel("Frequency")
    return _save(fig, figures_dir, "view_histogram.png")


def plot_likes_vs_views(df: pd.DataFrame, figures_dir: str) -> str:
    """Scatter of likes vs views coloured by category, with one overall linear fit."""
    fig, ax = plt.subplots(figsize=(12, 7))
    sns.scatterplot(data=df, x="likes", y="view_count", hue="category_name", s=15, ax=ax)
    sns.regplot(data=df, x="likes", y="view_count", scatter=False, color="red", ax=ax)
    ax.xaxis.set_major_formatter(MILLIONS)
    ax.yaxis.set_major_formatter(MILLIONS)
    ax.set_title("Correlation between likes and view")
    ax.set_xlabel("Likes (Millions)")
    ax.set_ylabel("View Count (Millions)")
    ax.legend(fontsize=7, loc="upper left", bbox_to_anchor=(1.01, 1))
    return _save(fig, figures_dir, "likes_vs_views.png")


def plot_category_spread(df: pd.DataFrame, figures_dir: str) -> str:
    """Jittered strip of views per category, categories on the vertical axis."""
    with sns.axes_style("whitegrid"):
        fig, ax = plt.subplots(figsize=(12, 8))
    sns.stripplot(
        data=df,
        x="view_count",
        y="category_name",
        hue="category_name",
        alpha=0.7,
        size=3,
        jitter=0.3,
        legend=False,
        ax=ax,
    )
    ax.xaxis.set_major_formatter(MILLIONS)
    ax.set_title("Spread of view in each category")
    ax.set_xlabel("")
    ax.set_ylabel("")
    return _save(fig, figures_dir, "category_spread.png")


def plot_top_categories_median(top: pd.DataFrame, figures_dir: str) -> str:
    """Horizontal bars of median views per category, largest on top."""
    ordered = top.sort_values("median_view")
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.barh(ordered["category_name"], ordered["median_view"], color="skyblue")
    ax.xaxis.set_major_formatter(MILLIONS)
    ax.set_title("The most of view in each category")
    ax.set_xlabel("View")
    ax.set_ylabel("Category")
    return _save(fig, figures_dir, "top_categories_median.png")


def plot_top_hours(hours: pd.DataFrame, figures_dir: str) -> str:
    """Bar chart of video counts for the most common upload hours."""
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar(hours["hour"].astype(str), hours["count"], color="wheat")
    ax.set_title("Most common upload hours")
    ax.set_xlabel("Hour")
    ax.set_ylabel("Videos")
    return _save(fig, figures_dir, "top_upload_hours.png")


def plot_top_channels(channels: pd.DataFrame, figures_dir: str, filename: str, title: str, color: str) -> str:
    """Bar chart of channels by total views, highest first."""
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar(channels["channeltitle"], channels["view"], color=color)
    ax.yaxis.set_major_formatter(MILLIONS)
    ax.set_title(title)
    ax.set_xlabel("Channel name")
    ax.set_ylabel("View")
    ax.tick_params(axis="x", labelrotation=30)
    return _save(fig, figures_dir, filename)


def plot_phone_brands(summary: pd.DataFrame, figures_dir: str) -> str:
    """Median views of samsung vs iphone tagged videos, axis in thousands."""
    palette = {"iphone": "lightpink", "samsung": "lightgreen"}
    ordered = summary.sort_values("type")
    fig, ax = plt.subplots(figsize=(6, 5))
    ax.bar(
        ordered["type"],
        ordered["median_view"],
        color=[palette.get(t, "grey") for t in ordered["type"]],
    )
    ax.yaxis.set_major_formatter(THOUSANDS)
    ax.set_title("Iphone vs Samsung")
    ax.set_xlabel("")
    ax.set_ylabel("View")
    return _save(fig, figures_dir, "iphone_vs_samsung.png")
