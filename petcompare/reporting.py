"""Console rendering of comparison results with rich."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from petcompare.domain.models import ComparisonAnalysis, HealthTrend, HealthTrendComparison

_TREND_STYLES = {
    HealthTrend.IMPROVING: "green",
    HealthTrend.STABLE: "yellow",
    HealthTrend.DECLINING: "red",
}


def render_comparison(analysis: ComparisonAnalysis, console: Console) -> None:
    """Print per-pet statistics, the cross-pet summary, insights and recommendations."""
    period = analysis.comparison.comparison_period
    table = Table(title=f"Pet health comparison ({period.days} days)")
    table.add_column("Pet", style="cyan")
    table.add_column("Records", justify="right")
    table.add_column("Healthy", justify="right", style="green")
    table.add_column("Warning", justify="right", style="yellow")
    table.add_column("Concerning", justify="right", style="red")
    table.add_column("Per week", justify="right")
    table.add_column("Last record")

    for pet in analysis.pets:
        stats = pet.statistics
        last = stats.last_analysis_date.strftime("%Y-%m-%d") if stats.last_analysis_date else "-"
        table.add_row(
            pet.pet_name,
            str(stats.total_records),
            f"{stats.healthy_percentage}%",
            f"{stats.warning_percentage}%",
            f"{stats.concerning_percentage}%",
            f"{stats.average_per_week:.1f}",
            last,
        )
    console.print(table)

    summary = analysis.comparison
    console.print(
        Panel(
            f"Healthiest: [green]{summary.healthiest_pet.pet_name}[/green] "
            f"({summary.healthiest_pet.healthy_percentage}% healthy)\n"
            f"Most concerning: [red]{summary.most_concerning_pet.pet_name}[/red] "
            f"({summary.most_concerning_pet.concerning_percentage}% concerning)\n"
            f"Overall healthy rate: {summary.average_health_percentage}% "
            f"across {summary.total_records_compared} records",
            title="Summary",
        )
    )

    if analysis.insights:
        console.print(Panel("\n".join(f"- {i}" for i in analysis.insights), title="Insights"))
    console.print(
        Panel("\n".join(f"- {r}" for r in analysis.recommendations), title="Recommendations")
    )


def render_trends(comparison: HealthTrendComparison, console: Console) -> None:
    """Print one row per date with each pet's daily healthy rate."""
    trends = comparison.trends
    table = Table(title="Daily healthy rate")
    table.add_column("Date")
    pet_names = [pet.pet_name for pet in trends[0].pets] if trends else []
    for name in pet_names:
        table.add_column(name, justify="right")

    for day in trends:
        table.add_row(
            day.date,
            *(f"{pet.health_percentage}% ({pet.total})" if pet.total else "-" for pet in day.pets),
        )
    console.print(table)

    direction = comparison.summary.average_health_trend
    style = _TREND_STYLES[direction]
    console.print(
        f"{comparison.summary.pets_compared} pets over {comparison.summary.total_days} days: "
        f"[{style}]{direction.value}[/{style}]"
    )
