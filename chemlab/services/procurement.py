"""
Procurement service.

Hands the reorder plan to the external report generator (Gemini, over
HTTP) and returns whatever document it produces.

This module does NOT compute anything about stock or costs. Selection,
quantities and prices come from:
    chemlab.services.reorder
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import requests

from chemlab.app.core.config import Settings
from chemlab.app.models.core_types import CURRENCY_SYMBOLS
from chemlab.app.models.inventory import AppSettings, ReorderPlan, UnitInUse

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

NO_ITEMS_MESSAGE = "No items selected for reorder."
NO_KEY_MESSAGE = "Error generating report. No GEMINI_API_KEY configured."
FAILURE_MESSAGE = "Error generating report. Please check your API Key and internet connection."
EMPTY_RESPONSE_MESSAGE = "Failed to generate report text."


def describe_units(units: list[UnitInUse]) -> str:
    """'1@50%, 1@25%' for two open units, 'None' when nothing is open."""
    if not units:
        return "None"
    return ", ".join(f"1@{u.remaining}%" for u in units)


def build_report_payload(plan: ReorderPlan, settings: AppSettings) -> dict[str, Any]:
    """Structured hand-off for the report generator. No text formatting here."""
    return {
        "org_name": settings.org_name,
        "currency": settings.currency.value,
        "currency_symbol": CURRENCY_SYMBOLS[settings.currency],
        "total_cost": plan.total_cost,
        "items": [
            {
                "name": i.name,
                "functionality": i.functionality,
                "package_size": i.package_size,
                "unit": i.unit,
                "current_stock": i.current_stock,
                "min_level": i.min_level,
                "suggested_qty": i.suggested_qty,
                "unit_cost": i.unit_cost,
                "units_in_use_count": len(i.units_in_use),
                "units_in_use_detail": describe_units(i.units_in_use),
            }
            for i in plan.items
        ],
    }


def build_prompt(payload: dict[str, Any], today: date | None = None) -> str:
    sym = payload["currency_symbol"]
    org = payload["org_name"]
    today = today or date.today()

    lines = "\n".join(
        f'- {i["name"]}: Functionality="{i["functionality"]}", '
        f'Packaging={i["package_size"]}/{i["unit"]}, '
        f'In Use Count={i["units_in_use_count"]} ({i["units_in_use_detail"]}), '
        f'Warehouse Stock={i["current_stock"]:g} {i["unit"]}s, '
        f'Safety Stock={i["min_level"]:g} {i["unit"]}s, '
        f'Suggested Buy={i["suggested_qty"]} {i["unit"]}s, '
        f"Approx Unit Cost={sym}{i['unit_cost']:.2f}"
        for i in payload["items"]
    )

    return f"""
You are a Lab Manager assisting with procurement for **{org}**.
Write a very **concise** Chemical Procurement List in **Traditional Chinese**.

Constraints:
- No long executive summary and no risk-assessment paragraphs.
- One clear table and a brief closing.
- Break down "Currently In Use" versus "Warehouse Stock".
- Include Functionality and Packaging to justify each purchase.
- For "In Use", give the count and the details (e.g. "2 (1@50%, 1@25%)").
- Use **{sym}** for every monetary value.

Data:
{lines}

Total Estimated Cost: {sym}{payload["total_cost"]:.2f}

Title: Chemical Procurement Request - {org}
Date: {today.isoformat()}
""".strip()


class ReportClient:
    """
    Thin HTTP client for the text-generation service.

    ``generate`` always returns a string: the document, or an error message.
    The returned document is opaque and is not parsed.
    """

    def __init__(self, api_key: str | None, model: str = "gemini-2.5-flash", timeout: float = 30.0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReportClient":
        return cls(settings.gemini_api_key, settings.gemini_model, settings.gemini_timeout)

    def generate(self, payload: dict[str, Any]) -> str:
        if not payload["items"]:
            return NO_ITEMS_MESSAGE
        if not self.api_key:
            return NO_KEY_MESSAGE

        body = {
            "contents": [{"parts": [{"text": build_prompt(payload)}]}],
            "generationConfig": {"thinkingConfig": {"thinkingBudget": 0}},
        }
        try:
            response = requests.post(
                GEMINI_URL.format(model=self.model),
                headers={"x-goog-api-key": self.api_key},
                json=body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("report generation failed: %s", exc)
            return FAILURE_MESSAGE

        parts = (
            (data.get("candidates") or [{}])[0]
            .get("content", {})
            .get("parts", [])
        )
        text = "".join(p.get("text", "") for p in parts)
        return text or EMPTY_RESPONSE_MESSAGE
