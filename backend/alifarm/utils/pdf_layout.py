"""
Shared page layout (header, footer, branding) for Ali Farm PDF documents
"""
import logging
from copy import deepcopy
from datetime import datetime
from io import BytesIO
from typing import Any, Dict, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate

from alifarm.core.config import settings

logger = logging.getLogger(__name__)


DEFAULT_BRANDING: Dict[str, Any] = {
    "company_name": None,
    "company_address": None,
    "company_contacts": None,
    "report_title": "",
    "report_subtitle": "",
    "primary_color": colors.HexColor("#2f6f4e"),
    "footer_bg_color": colors.HexColor("#1f4d36"),
    "text_color": colors.HexColor("#1d1d1d"),
    "muted_text_color": colors.HexColor("#6b6b6b"),
    "header_height": 26 * mm,
    "footer_height": 14 * mm,
    "footer_text": "Generated by Ali Farm",
    "show_page_number": True,
    "generated_at": None,
}

DEFAULT_DOC_KWARGS: Dict[str, Any] = {
    "pagesize": A4,
    "leftMargin": 16 * mm,
    "rightMargin": 16 * mm,
}


def prepare_branding(user_branding: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    branding = deepcopy(DEFAULT_BRANDING)
    branding["company_name"] = settings.FARM_NAME
    branding["company_address"] = settings.FARM_ADDRESS or None
    branding["company_contacts"] = settings.FARM_CONTACTS or None
    if user_branding:
        for key, value in user_branding.items():
            if value is not None:
                branding[key] = value

    branding["generated_at"] = branding.get("generated_at") or datetime.now()
    return branding


def create_document(buffer: BytesIO, branding: Optional[Dict[str, Any]] = None, doc_kwargs: Optional[Dict[str, Any]] = None):
    branding_cfg = prepare_branding(branding)
    merged_kwargs = {**DEFAULT_DOC_KWARGS}
    if doc_kwargs:
        merged_kwargs.update(doc_kwargs)

    merged_kwargs.setdefault("topMargin", branding_cfg["header_height"] + 8 * mm)
    merged_kwargs.setdefault("bottomMargin", branding_cfg["footer_height"] + 8 * mm)

    doc = SimpleDocTemplate(buffer, **merged_kwargs)
    return doc, branding_cfg


def _draw_header(canvas_obj, doc, branding: Dict[str, Any]):
    width, height = doc.pagesize
    header_height = branding["header_height"]
    left = doc.leftMargin
    right = width - doc.rightMargin

    canvas_obj.saveState()
    canvas_obj.setFillColor(branding["primary_color"])
    canvas_obj.rect(0, height - 4 * mm, width, 4 * mm, stroke=0, fill=1)

    top = height - 12 * mm
    canvas_obj.setFillColor(branding["text_color"])
    canvas_obj.setFont("Helvetica-Bold", 13)
    canvas_obj.drawString(left, top, branding.get("company_name") or "Ali Farm")

    y = top - 11
    canvas_obj.setFont("Helvetica", 8.5)
    canvas_obj.setFillColor(branding["muted_text_color"])
    for line in (branding.get("company_address"), branding.get("company_contacts")):
        if line:
            canvas_obj.drawString(left, y, line[:110])
            y -= 10

    title = branding.get("report_title")
    if title:
        canvas_obj.setFont("Helvetica-Bold", 11)
        canvas_obj.setFillColor(branding["primary_color"])
        canvas_obj.drawRightString(right, top, title)
    subtitle = branding.get("report_subtitle")
    if subtitle:
        canvas_obj.setFont("Helvetica", 8.5)
        canvas_obj.setFillColor(branding["muted_text_color"])
        canvas_obj.drawRightString(right, top - 11, subtitle)

    canvas_obj.setStrokeColor(branding["primary_color"])
    canvas_obj.setLineWidth(0.6)
    line_y = height - header_height
    canvas_obj.line(left, line_y, right, line_y)
    canvas_obj.restoreState()


def _draw_footer(canvas_obj, doc, branding: Dict[str, Any]):
    width, _ = doc.pagesize
    footer_height = branding["footer_height"]
    canvas_obj.saveState()
    canvas_obj.setFillColor(branding["footer_bg_color"])
    canvas_obj.rect(0, 0, width, footer_height, stroke=0, fill=1)

    canvas_obj.setFillColor(colors.white)
    canvas_obj.setFont("Helvetica", 8)
    timestamp = branding["generated_at"].strftime("%d/%m/%Y %H:%M")
    text_y = footer_height / 2 - 3
    canvas_obj.drawString(doc.leftMargin, text_y, f"{branding.get('footer_text')} - {timestamp}")

    if branding.get("show_page_number", True):
        canvas_obj.setFont("Helvetica-Bold", 8)
        canvas_obj.drawRightString(width - doc.rightMargin, text_y, f"Page {canvas_obj.getPageNumber()}")

    canvas_obj.restoreState()


def _draw_page_frame(canvas_obj, doc, branding: Dict[str, Any]):
    try:
        _draw_header(canvas_obj, doc, branding)
    except Exception as exc:
        logger.error("Error while drawing the PDF header: %s", exc, exc_info=True)
    _draw_footer(canvas_obj, doc, branding)


def build_pdf(doc, story, branding: Dict[str, Any]):
    def _on_page(canvas_obj, doc_obj):
        _draw_page_frame(canvas_obj, doc_obj, branding)

    doc.build(
        story,
        onFirstPage=_on_page,
        onLaterPages=_on_page,
    )
