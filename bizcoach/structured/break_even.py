"""Break-even analysis: partial-update schema and text rendering."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CostComponent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: int | float | None = None
    description: str = ""


class BreakEvenPoint(BaseModel):
    model_config = ConfigDict(extra="forbid")

    units: int | float | None = None
    revenue: int | float | None = None


class BreakEvenUpdate(BaseModel):
    """Keys the assistant may set on the stored break-even data.

    Field aliases match the camelCase keys stored in the business plan
    content document and emitted by the model.  Numbers keep the type they
    arrive with, so ``25`` is stored as an int and ``19.5`` as a float.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    fixed_costs: CostComponent | None = Field(default=None, alias="fixedCosts")
    variable_costs: CostComponent | None = Field(default=None, alias="variableCosts")
    unit_price: int | float | None = Field(default=None, alias="unitPrice")
    contribution_margin: int | float | None = Field(default=None, alias="contributionMargin")
    break_even_point: BreakEvenPoint | None = Field(default=None, alias="breakEvenPoint")
    time_to_break_even: str | int | float | None = Field(default=None, alias="timeToBreakEven")
    assumptions: list[str] | None = None
    sensitivity_analysis: str | int | float | None = Field(
        default=None, alias="sensitivityAnalysis"
    )


def _number(value: Any) -> str:
    """Render a number with thousands separators, dropping a zero fraction."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(value)


def _cost_line(cost: dict[str, Any]) -> str:
    amount = cost.get("amount")
    description = cost.get("description") or ""
    if amount is None:
        return description
    return f"${_number(amount)} ({description})"


def format_break_even_text(data: dict[str, Any]) -> str:
    """Render break-even data as a markdown block in a fixed section order.

    Sections whose field is missing or empty are omitted.
    """
    if not data:
        return ""

    parts: list[str] = ["## Break-Even Analysis", ""]

    fixed = data.get("fixedCosts")
    if fixed:
        parts += ["### Fixed Costs", _cost_line(fixed), ""]

    variable = data.get("variableCosts")
    if variable:
        parts += ["### Variable Costs Per Unit", _cost_line(variable), ""]

    if data.get("unitPrice"):
        parts += ["### Price Per Unit", f"${_number(data['unitPrice'])}", ""]

    if data.get("contributionMargin"):
        parts += ["### Contribution Margin Per Unit", f"${_number(data['contributionMargin'])}", ""]

    point = data.get("breakEvenPoint")
    if point:
        parts.append("### Break-Even Point")
        if point.get("units") is not None:
            parts.append(f"- Units: {_number(point['units'])}")
        if point.get("revenue") is not None:
            parts.append(f"- Revenue: ${_number(point['revenue'])}")
        parts.append("")

    if data.get("timeToBreakEven"):
        parts += ["### Projected Time to Break Even", str(data["timeToBreakEven"]), ""]

    assumptions = data.get("assumptions")
    if assumptions:
        parts.append("### Key Assumptions")
        parts += [f"{i}. {assumption}" for i, assumption in enumerate(assumptions, 1)]
        parts.append("")

    if data.get("sensitivityAnalysis"):
        parts += ["### Sensitivity Analysis", str(data["sensitivityAnalysis"]), ""]

    return "\n".join(parts) + "\n"
