from __future__ import annotations

from fastapi import Request

from chemlab.services.inventory import InventoryService
from chemlab.services.procurement import ReportClient


def get_inventory(request: Request) -> InventoryService:
    return request.app.state.inventory


def get_report_client(request: Request) -> ReportClient:
    return request.app.state.report_client
