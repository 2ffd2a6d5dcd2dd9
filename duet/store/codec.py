"""Conversion between domain entities and JSON documents."""

from datetime import date
from typing import Any

from duet.domain.categories import resolve_category
from duet.domain.models import (
    BudgetItem,
    BudgetType,
    CategoryName,
    CustomCategory,
    Description,
    EntryKind,
    Frequency,
    Goal,
    Installments,
    Money,
    PaidBy,
    PlannerSettings,
    Priority,
    Transaction,
)


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _iso_or_none(value: date | None) -> str | None:
    return value.isoformat() if value else None


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    return {
        "id": txn.id,
        "date": txn.date.isoformat(),
        "description": txn.description,
        "category": txn.category,
        "amount": txn.amount,
        "kind": txn.kind.value,
        "frequency": txn.frequency.value if txn.frequency else None,
        "paid_by": txn.paid_by.value if txn.paid_by else None,
        "budget_item_id": txn.budget_item_id,
        "movement_type_id": txn.movement_type_id,
        "category_id": txn.category_id,
    }


def transaction_from_dict(data: dict[str, Any]) -> Transaction:
    return Transaction(
        id=str(data["id"]),
        date=date.fromisoformat(data["date"]),
        description=Description(data.get("description", "")),
        category=resolve_category(data.get("category")),
        amount=Money(float(data["amount"])),
        kind=EntryKind(data["kind"]),
        frequency=Frequency(data["frequency"]) if data.get("frequency") else None,
        paid_by=PaidBy(data["paid_by"]) if data.get("paid_by") else None,
        budget_item_id=data.get("budget_item_id"),
        movement_type_id=data.get("movement_type_id"),
        category_id=data.get("category_id"),
    )


def budget_item_to_dict(item: BudgetItem) -> dict[str, Any]:
    installments = None
    if item.installments is not None:
        installments = {
            "total": item.installments.total,
            "current": item.installments.current,
            "parent_id": item.installments.parent_id,
        }
    return {
        "id": item.id,
        "description": item.description,
        "category": item.category,
        "amount": item.amount,
        "type": item.budget_type.value,
        "due_date": _iso_or_none(item.due_date),
        "is_paid": item.is_paid,
        "paid_by": item.paid_by.value if item.paid_by else None,
        "installments": installments,
    }


def budget_item_from_dict(data: dict[str, Any]) -> BudgetItem:
    installments = data.get("installments")
    return BudgetItem(
        id=str(data["id"]),
        description=Description(data.get("description", "")),
        category=CategoryName(data.get("category", "")),
        amount=Money(float(data["amount"])),
        budget_type=BudgetType(data["type"]),
        due_date=_date_or_none(data.get("due_date")),
        is_paid=bool(data.get("is_paid", False)),
        paid_by=PaidBy(data["paid_by"]) if data.get("paid_by") else None,
        installments=Installments(
            total=int(installments["total"]),
            current=int(installments["current"]),
            parent_id=str(installments["parent_id"]),
        )
        if installments
        else None,
    )


def goal_to_dict(goal: Goal) -> dict[str, Any]:
    return {
        "id": goal.id,
        "name": goal.name,
        "target": goal.target,
        "current": goal.current,
        "deadline": _iso_or_none(goal.deadline),
        "priority": goal.priority.value,
    }


def goal_from_dict(data: dict[str, Any]) -> Goal:
    return Goal(
        id=str(data["id"]),
        name=data["name"],
        target=Money(float(data["target"])),
        current=Money(float(data.get("current", 0.0))),
        deadline=_date_or_none(data.get("deadline")),
        priority=Priority(data.get("priority", Priority.MEDIUM.value)),
    )


def custom_category_to_dict(category: CustomCategory) -> dict[str, Any]:
    return {"id": category.id, "name": category.name, "kind": category.kind.value}


def custom_category_from_dict(data: dict[str, Any]) -> CustomCategory:
    return CustomCategory(id=str(data["id"]), name=CategoryName(data["name"]), kind=EntryKind(data["kind"]))


def settings_to_dict(settings: PlannerSettings) -> dict[str, Any]:
    return {
        "planner_name": settings.planner_name,
        "spouse_a": settings.spouse_a,
        "spouse_b": settings.spouse_b,
    }


def settings_from_dict(data: dict[str, Any], defaults: PlannerSettings) -> PlannerSettings:
    return PlannerSettings(
        planner_name=data.get("planner_name", defaults.planner_name),
        spouse_a=data.get("spouse_a", defaults.spouse_a),
        spouse_b=data.get("spouse_b", defaults.spouse_b),
    )
