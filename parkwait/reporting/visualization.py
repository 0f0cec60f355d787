"""
Charts for the aggregate views.

Creates plots for:
- Wait-time profile across the day (by_hour)
- Attractions with the longest waits (by_attraction)
- Weekend vs weekday comparison (weekend_vs_weekday)
"""

from pathlib import Path

import matplotlib.pyplot as plt
import seaborn as sns
import polars as pl
from loguru import logger


# Set style
sns.set_theme(style="darkgrid")
plt.rcParams["figure.figsize"] = (12, 8)
plt.rcParams["font.size"] = 10


def _finish(fig, save_path: str | Path | None) -> None:
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150)
        logger.info(f"Saved plot to {save_path}")
    else:
        plt.show()

    plt.close(fig)


def plot_hourly_wait_profile(
    by_hour: pl.DataFrame,
    save_path: str | Path | None = None,
    title: str = "Wait Time by Hour of Day",
) -> None:
    """
    Plot average and median wait per start hour.

    Args:
        by_hour: The by_hour view
        save_path: Optional path to save the plot
        title: Plot title
    """
    if by_hour.is_empty():
        logger.warning("Empty by_hour view, skipping plot")
        return

    fig, ax1 = plt.subplots(figsize=(12, 6))

    hours = by_hour["hour"].to_numpy()
    ax1.bar(
        hours,
        by_hour["avg_wait_time"].to_numpy(),
        alpha=0.7,
        label="Average wait",
        color="steelblue",
    )
    ax1.plot(
        hours,
        by_hour["median_wait_time"].to_numpy(),
        color="darkorange",
        marker="o",
        linewidth=2,
        label="Median wait",
    )
    ax1.set_xlabel("Hour of Day")
    ax1.set_ylabel("Wait Time (min)")
    ax1.set_xticks(hours)
    ax1.set_title(title)
    ax1.legend(loc="upper left")

    _finish(fig, save_path)


def plot_top_attractions(
    by_attraction: pl.DataFrame,
    save_path: str | Path | None = None,
    title: str = "Attractions with the Longest Average Wait",
) -> None:
    """
    Horizontal bar chart of the by_attraction view.

    Args:
        by_attraction: The by_attraction view
        save_path: Optional path to save the plot
        title: Plot title
    """
    if by_attraction.is_empty():
        logger.warning("Empty by_attraction view, skipping plot")
        return

    # Longest wait on top
    ordered = by_attraction.reverse()

    fig, ax = plt.subplots(figsize=(12, 7))
    ax.barh(
        ordered["attraction_name"].to_list(),
        ordered["avg_wait_time"].to_numpy(),
        color="steelblue",
        edgecolor="black",
        alpha=0.8,
    )
    ax.set_xlabel("Average Wait Time (min)")
    ax.set_title(title)

    _finish(fig, save_path)


def plot_weekend_comparison(
    weekend_vs_weekday: pl.DataFrame,
    save_path: str | Path | None = None,
    title: str = "Weekend vs Weekday",
) -> None:
    """
    Side-by-side bars of wait and utilization for weekend vs weekday.

    Args:
        weekend_vs_weekday: The weekend_vs_weekday view
        save_path: Optional path to save the plot
        title: Plot title
    """
    if weekend_vs_weekday.is_empty():
        logger.warning("Empty weekend_vs_weekday view, skipping plot")
        return

    labels = ["Weekend" if flag else "Weekday" for flag in weekend_vs_weekday["is_weekend"].to_list()]

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    axes[0].bar(labels, weekend_vs_weekday["avg_wait_time"].to_numpy(), color="steelblue", alpha=0.8)
    axes[0].set_ylabel("Average Wait Time (min)")
    axes[0].set_title("Wait Time")

    axes[1].bar(labels, weekend_vs_weekday["avg_utilization"].to_numpy(), color="seagreen", alpha=0.8)
    axes[1].set_ylabel("Average Utilization (%)")
    axes[1].set_title("Utilization")

    fig.suptitle(title)
    _finish(fig, save_path)


PLOTTERS = {
    "by_hour": plot_hourly_wait_profile,
    "by_attraction": plot_top_attractions,
    "weekend_vs_weekday": plot_weekend_comparison,
}


def save_report_plots(views: dict[str, pl.DataFrame], output_dir: str | Path = "reports") -> list[Path]:
    """
    Save a PNG for every plottable view present.

    Args:
        views: Computed views keyed by name
        output_dir: Directory to save plots

    Returns:
        Paths of the saved plots
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    saved = []
    for name, plotter in PLOTTERS.items():
        view = views.get(name)
        if view is None or view.is_empty():
            continue
        path = output_path / f"{name}.png"
        plotter(view, save_path=path)
        saved.append(path)

    logger.info(f"Saved {len(saved)} plots to {output_path}")
    return saved


__all__ = [
    "plot_hourly_wait_profile",
    "plot_top_attractions",
    "plot_weekend_comparison",
    "save_report_plots",
]
