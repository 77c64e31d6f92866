"""
Tests for `services/workflow_service.py`.

Covers rules:
- Hot leads are promoted to prospect with one urgent, high-priority automated task due now.
- Hot customers that are not leads are left unchanged.
- Warm and cold scores replace all automated tasks with a single new one
  (2-day medium follow-up / 7-day low nurture).
- Lukewarm scores change nothing and emit no notification.
- User-created tasks are never touched.
- Repeated runs never accumulate automated tasks.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from domain.customer import CustomerStatus
from domain.task import Task, TaskPriority
from domain.temperature import LeadTemperature
from services.workflow_service import NotificationKind, apply_workflow


def test_hot_lead_is_promoted_with_urgent_task(make_customer, now) -> None:
    """Verify a hot lead becomes a prospect and gets one high-priority task due now."""

    customer = make_customer(status=CustomerStatus.LEAD)
    user_task = customer.add_task("Call back about pricing", now + timedelta(days=3))

    outcome = apply_workflow(customer, 85, now=now)

    assert outcome.customer is customer
    assert outcome.temperature is LeadTemperature.HOT
    assert outcome.promoted is True
    assert customer.status is CustomerStatus.PROSPECT

    automated = customer.automated_tasks
    assert len(automated) == 1
    assert automated[0] is outcome.created_task
    assert automated[0].priority is TaskPriority.HIGH
    assert automated[0].due_at == now
    assert automated[0].trigger is LeadTemperature.HOT
    assert customer.tasks[0] is user_task

    assert len(outcome.notifications) == 1
    assert outcome.notifications[0].kind is NotificationKind.SUCCESS
    assert "hot prospect" in outcome.notifications[0].message


def test_repeated_hot_scoring_keeps_exactly_one_automated_task(make_customer, now) -> None:
    """Verify re-running the workflow with the same hot score does not duplicate automated tasks."""

    customer = make_customer(status=CustomerStatus.LEAD)

    first = apply_workflow(customer, 90, now=now)
    second = apply_workflow(customer, 90, now=now + timedelta(hours=1))

    assert customer.status is CustomerStatus.PROSPECT
    assert len(customer.automated_tasks) == 1
    assert customer.automated_tasks[0] is first.created_task
    assert second.promoted is False
    assert second.created_task is None
    assert second.notifications == []


def test_hot_non_lead_is_left_unchanged(make_customer, now) -> None:
    """Verify the hot branch neither promotes nor falls through to task replacement for non-leads."""

    customer = make_customer(status=CustomerStatus.ACTIVE)
    apply_workflow(customer, 65, now=now)  # warm task
    tasks_before = list(customer.tasks)

    outcome = apply_workflow(customer, 95, now=now)

    assert customer.status is CustomerStatus.ACTIVE
    assert customer.tasks == tasks_before
    assert customer.automated_tasks[0].trigger is LeadTemperature.WARM
    assert outcome.notifications == []


def test_warm_score_replaces_automated_tasks_with_follow_up(make_customer, now) -> None:
    """Verify warm scoring removes prior automated tasks and adds a 2-day medium follow-up."""

    customer = make_customer(status=CustomerStatus.PROSPECT)
    user_task = customer.add_task("Send brochure", now + timedelta(days=1), TaskPriority.LOW)
    apply_workflow(customer, 10, now=now)  # cold nurture task
    stale = customer.automated_tasks[0]

    outcome = apply_workflow(customer, 70, now=now)

    assert outcome.removed_tasks == [stale]
    assert customer.tasks == [user_task, outcome.created_task]
    assert outcome.created_task.priority is TaskPriority.MEDIUM
    assert outcome.created_task.due_at == now + timedelta(days=2)
    assert outcome.created_task.automated is True
    assert customer.status is CustomerStatus.PROSPECT
    assert "warm lead" in outcome.notifications[0].message


def test_cold_score_schedules_nurture_and_keeps_status(make_customer, now) -> None:
    """Verify cold scoring adds a 7-day low-priority nurture task without touching status."""

    customer = make_customer(status=CustomerStatus.LEAD)

    outcome = apply_workflow(customer, 23, now=now)

    assert customer.status is CustomerStatus.LEAD
    assert len(customer.automated_tasks) == 1
    assert outcome.created_task.priority is TaskPriority.LOW
    assert outcome.created_task.due_at == now + timedelta(days=7)
    assert outcome.created_task.trigger is LeadTemperature.COLD
    assert "cold lead" in outcome.notifications[0].message


def test_repeated_warm_scoring_reflects_latest_trigger(make_customer, now) -> None:
    """Verify each warm run replaces the previous automated task instead of adding another."""

    customer = make_customer()

    first = apply_workflow(customer, 62, now=now)
    later = now + timedelta(days=1)
    second = apply_workflow(customer, 62, now=later)

    assert customer.automated_tasks == [second.created_task]
    assert second.removed_tasks == [first.created_task]
    assert second.created_task.due_at == later + timedelta(days=2)


@pytest.mark.parametrize("score", [40, 50, 59])
def test_lukewarm_score_changes_nothing(make_customer, now, score: int) -> None:
    """Verify lukewarm scores leave status and tasks as they are, with no notification."""

    customer = make_customer(status=CustomerStatus.LEAD)
    apply_workflow(customer, 30, now=now)
    tasks_before = list(customer.tasks)

    outcome = apply_workflow(customer, score, now=now)

    assert outcome.temperature is LeadTemperature.LUKEWARM
    assert customer.status is CustomerStatus.LEAD
    assert customer.tasks == tasks_before
    assert outcome.created_task is None
    assert outcome.notifications == []


def test_user_tasks_marked_completed_survive_replacement(make_customer, now) -> None:
    """Verify user-created tasks are kept regardless of completion state."""

    customer = make_customer()
    done = customer.add_task("Intro call", now)
    customer.complete_task(done.task_id)

    apply_workflow(customer, 65, now=now)
    apply_workflow(customer, 15, now=now)

    assert [task for task in customer.tasks if not task.automated] == [done]
    assert done.completed is True


def test_workflow_requires_utc_now(make_customer) -> None:
    """Verify a naive evaluation instant is rejected."""

    with pytest.raises(ValueError):
        apply_workflow(make_customer(), 85, now=datetime(2025, 1, 1, 0, 0, 0))


def test_automated_task_must_be_flagged(now) -> None:
    """Verify only automated tasks may record a trigger temperature."""

    with pytest.raises(ValueError):
        Task(task_id="t-1", title="Follow up", due_at=now, trigger=LeadTemperature.WARM)
