"""Tests for console rendering in `petcompare/reporting.py`."""

import pytest
from rich.console import Console

from petcompare.domain.models import HealthStatus
from petcompare.reporting import render_comparison, render_trends


@pytest.fixture
def console() -> Console:
    return Console(record=True, width=140, color_system=None)


@pytest.mark.asyncio
async def test_render_comparison(service, store, make_history, owner_id, console) -> None:
    store.add(make_history("pet-a", [HealthStatus.HEALTHY] * 4))
    store.add(make_history("pet-b", [HealthStatus.CONCERNING] * 4))
    analysis = await service.compare_pets(owner_id, ["pet-a", "pet-b"])

    render_comparison(analysis, console)

    text = console.export_text()
    assert "Pet health comparison (30 days)" in text
    assert "Pet A" in text and "Pet B" in text
    assert "Healthiest: Pet A (100% healthy)" in text
    assert "Insights" in text
    assert "Recommendations" in text


@pytest.mark.asyncio
async def test_render_comparison_without_insights(
    service, store, make_history, owner_id, console
) -> None:
    # both pets at 70% healthy with the same cadence match no insight rule
    mixed = [HealthStatus.HEALTHY] * 7 + [HealthStatus.WARNING] * 3
    store.add(make_history("pet-a", mixed))
    store.add(make_history("pet-b", mixed))
    analysis = await service.compare_pets(owner_id, ["pet-a", "pet-b"])

    render_comparison(analysis, console)

    text = console.export_text()
    assert "Insights" not in text
    assert "Recommendations" in text


@pytest.mark.asyncio
async def test_render_trends(service, store, make_history, owner_id, console) -> None:
    store.add(make_history("pet-a", [HealthStatus.HEALTHY, HealthStatus.WARNING]))
    comparison = await service.compare_health_trends(owner_id, ["pet-a", "pet-b"])

    render_trends(comparison, console)

    text = console.export_text()
    assert "2024-06-30" in text
    assert "100% (1)" in text
    assert "2 pets over 30 days: stable" in text


@pytest.mark.asyncio
async def test_render_trends_without_data(service, owner_id, console) -> None:
    comparison = await service.compare_health_trends(owner_id, ["pet-a", "pet-b"])

    render_trends(comparison, console)

    assert "2 pets over 30 days: stable" in console.export_text()
