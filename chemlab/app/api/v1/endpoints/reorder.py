from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from chemlab.app.api.deps import get_inventory, get_report_client
from chemlab.app.models.inventory import ReorderPlan
from chemlab.services.inventory import InventoryService
from chemlab.services.procurement import ReportClient, build_report_payload
from chemlab.services.purchase_order import render_purchase_order

router = APIRouter(prefix="/reorder")


@router.get("", response_model=ReorderPlan)
def get_reorder_plan(svc: InventoryService = Depends(get_inventory)):
    """
    Reorder (READ ONLY)
    - recomputed on every call, nothing stored
    - costs in the currency of the active settings
    """
    return svc.reorder_plan()


@router.get("/payload")
def get_report_payload(svc: InventoryService = Depends(get_inventory)):
    return build_report_payload(svc.reorder_plan(), svc.get_settings())


@router.post("/report")
def generate_report(
    svc: InventoryService = Depends(get_inventory),
    client: ReportClient = Depends(get_report_client),
):
    payload = build_report_payload(svc.reorder_plan(), svc.get_settings())
    return {"report": client.generate(payload)}


@router.get("/purchase-order.pdf")
def download_purchase_order(svc: InventoryService = Depends(get_inventory)):
    pdf_bytes = render_purchase_order(svc.reorder_plan(), svc.get_settings())
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="purchase_order.pdf"'},
    )
