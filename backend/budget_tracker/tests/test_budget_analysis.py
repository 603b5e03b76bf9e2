"""
Tests for the budget analysis calculator and endpoint.
"""
from decimal import Decimal

import pytest

from budget_tracker.models import ActivityStatus
from budget_tracker.services.budget_analysis import (
    calculate_budget_analysis, convert_crc_to_usd, project_total_cost
)
from budget_tracker.tests.factories import make_project, make_activity


def test_project_without_activities():
    """Scenario A: nothing planned or spent means no risk."""
    analysis = calculate_budget_analysis(make_project(total_budget_usd="100000"), [])

    assert analysis.total_budget_usd == Decimal("100000")
    assert analysis.total_planned_budget_usd == 0
    assert analysis.total_actual_cost_usd == 0
    assert analysis.remaining_budget_usd == Decimal("100000")
    assert analysis.budget_utilization_percentage == 0
    assert analysis.project_completion_percentage == 0
    assert analysis.projected_total_cost_usd == 0
    assert analysis.projected_over_budget_usd == 0
    assert analysis.total_activities_count == 0
    assert analysis.is_over_budget_risk is False


def test_planned_activities_only_fall_back_to_planned_budget():
    """Scenario B: without spend, the projection is the planned budget."""
    project = make_project(total_budget_usd="50000", current_exchange_rate="600")
    activities = [make_activity("10000"), make_activity("15000")]

    analysis = calculate_budget_analysis(project, activities)

    assert analysis.total_planned_budget_usd == Decimal("25000")
    assert analysis.total_actual_cost_usd == 0
    assert analysis.projected_total_cost_usd == Decimal("25000")
    assert analysis.projected_over_budget_usd == 0
    assert analysis.is_over_budget_risk is False


def test_mixed_statuses_extrapolate_from_completion():
    """Scenario C: half the activities done with 60% of the budget spent."""
    project = make_project(total_budget_usd="80000", current_exchange_rate="500")
    activities = [
        make_activity("20000", ActivityStatus.COMPLETED, "12000000"),
        make_activity("15000", ActivityStatus.COMPLETED, "7000000"),
        make_activity("25000", ActivityStatus.IN_PROGRESS, "5000000"),
        make_activity("20000", ActivityStatus.PLANNED),
    ]

    analysis = calculate_budget_analysis(project, activities)

    assert analysis.total_planned_budget_usd == Decimal("80000")
    assert analysis.total_actual_cost_usd == Decimal("48000")
    assert analysis.remaining_budget_usd == Decimal("32000")
    assert analysis.budget_utilization_percentage == 60.0
    assert analysis.completed_activities_count == 2
    assert analysis.total_activities_count == 4
    assert analysis.project_completion_percentage == 50.0
    assert analysis.projected_total_cost_usd == Decimal("96000")
    assert analysis.projected_over_budget_usd == Decimal("16000")
    assert analysis.is_over_budget_risk is True


def test_high_utilization_with_low_completion_is_a_risk():
    project = make_project(total_budget_usd="10000", current_exchange_rate="500")
    # 4,500,000 CRC = 9,000 USD spent, nothing completed, planned under budget
    activities = [
        make_activity("4000", ActivityStatus.IN_PROGRESS, "4500000"),
        make_activity("4000", ActivityStatus.PLANNED),
    ]

    analysis = calculate_budget_analysis(project, activities)

    assert analysis.budget_utilization_percentage == 90.0
    assert analysis.project_completion_percentage == 0
    assert analysis.projected_total_cost_usd == Decimal("8000")
    assert analysis.projected_over_budget_usd == 0
    assert analysis.is_over_budget_risk is True


def test_risk_thresholds_can_be_overridden():
    project = make_project(total_budget_usd="10000", current_exchange_rate="500")
    activities = [make_activity("4000", ActivityStatus.IN_PROGRESS, "4500000")]

    analysis = calculate_budget_analysis(project, activities, utilization_threshold=95)

    assert analysis.is_over_budget_risk is False


def test_cancelled_activities_count_costs_but_not_completion():
    project = make_project(total_budget_usd="50000", current_exchange_rate="500")
    activities = [
        make_activity("10000", ActivityStatus.CANCELLED, "1000000"),
        make_activity("10000", ActivityStatus.COMPLETED, "2500000"),
    ]

    analysis = calculate_budget_analysis(project, activities)

    assert analysis.total_planned_budget_usd == Decimal("20000")
    assert analysis.total_actual_cost_usd == Decimal("7000")
    assert analysis.completed_activities_count == 1
    assert analysis.project_completion_percentage == 50.0
    assert analysis.projected_total_cost_usd == Decimal("14000")


def test_actual_costs_use_current_rate_and_are_rounded():
    project = make_project(total_budget_usd="1000", current_exchange_rate="600")
    activities = [make_activity("500", ActivityStatus.IN_PROGRESS, "1000")]

    analysis = calculate_budget_analysis(project, activities)

    # 1000 / 600 = 1.6666...
    assert analysis.total_actual_cost_usd == Decimal("1.67")
    assert analysis.remaining_budget_usd == Decimal("998.33")


@pytest.mark.parametrize("statuses", [
    [],
    [ActivityStatus.PLANNED],
    [ActivityStatus.COMPLETED, ActivityStatus.CANCELLED, ActivityStatus.IN_PROGRESS],
    [ActivityStatus.COMPLETED, ActivityStatus.COMPLETED],
])
def test_aggregate_invariants(statuses):
    project = make_project(total_budget_usd="30000", current_exchange_rate="520.5")
    planned = ["1234.56", "9876.54", "5000.00"]
    activities = [
        make_activity(planned[i % len(planned)], status, "2500000")
        for i, status in enumerate(statuses)
    ]

    analysis = calculate_budget_analysis(project, activities)

    assert analysis.total_planned_budget_usd == sum(
        (a.planned_budget_usd for a in activities), Decimal(0)
    )
    assert analysis.completed_activities_count <= analysis.total_activities_count
    assert analysis.projected_over_budget_usd >= 0
    if not activities:
        assert analysis.project_completion_percentage == 0
    if analysis.projected_total_cost_usd > analysis.total_budget_usd:
        assert analysis.is_over_budget_risk is True


def test_zero_budget_is_guarded():
    project = make_project(total_budget_usd="0", current_exchange_rate="500")
    activities = [make_activity("100", ActivityStatus.IN_PROGRESS, "50000")]

    analysis = calculate_budget_analysis(project, activities)

    assert analysis.budget_utilization_percentage == 0
    assert analysis.projected_over_budget_usd == Decimal("100")
    assert analysis.is_over_budget_risk is True


def test_helpers():
    assert convert_crc_to_usd(Decimal("5000000"), Decimal("500")) == Decimal("10000")
    assert convert_crc_to_usd(Decimal("5000000"), Decimal("0")) == 0
    assert project_total_cost(Decimal("48000"), Decimal("50"), Decimal("80000")) == Decimal("96000")
    assert project_total_cost(Decimal("0"), Decimal("50"), Decimal("80000")) == Decimal("80000")
    assert project_total_cost(Decimal("0"), Decimal("0"), Decimal("0")) == 0


def test_budget_analysis_endpoint(client, project_payload):
    """Scenario C end to end through the API."""
    project_id = client.post("/api/projects", json=project_payload).json()["id"]
    rows = [
        ("20000.00", "completed", "12000000.00"),
        ("15000.00", "completed", "7000000.00"),
        ("25000.00", "in_progress", "5000000.00"),
        ("20000.00", None, None),
    ]
    for planned, status, cost in rows:
        activity = client.post(
            f"/api/projects/{project_id}/activities",
            json={
                "name": "Work",
                "estimated_start_date": "2024-02-01",
                "estimated_end_date": "2024-03-01",
                "planned_budget_usd": planned,
            },
        ).json()
        if status:
            response = client.patch(
                f"/api/activities/{activity['id']}",
                json={"status": status, "actual_cost_crc": cost},
            )
            assert response.status_code == 200

    response = client.get(f"/api/projects/{project_id}/budget-analysis")

    assert response.status_code == 200
    data = response.json()
    assert data["project_id"] == project_id
    assert Decimal(data["total_actual_cost_usd"]) == Decimal("48000")
    assert data["budget_utilization_percentage"] == 60.0
    assert data["project_completion_percentage"] == 50.0
    assert Decimal(data["projected_total_cost_usd"]) == Decimal("96000")
    assert Decimal(data["projected_over_budget_usd"]) == Decimal("16000")
    assert data["is_over_budget_risk"] is True


def test_budget_analysis_for_missing_project(client):
    response = client.get("/api/projects/999/budget-analysis")

    assert response.status_code == 404
    assert response.json()["detail"] == "Project with id 999 not found"
