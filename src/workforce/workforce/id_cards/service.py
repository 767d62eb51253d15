from __future__ import annotations

import io
import re
from dataclasses import dataclass

import qrcode
from loguru import logger
from qrcode.constants import ERROR_CORRECT_M
from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..core.constants import ID_CARD_HEIGHT_MM, ID_CARD_WIDTH_MM, NOT_AVAILABLE
from ..core.exceptions import NotFoundError
from ..data.workforce_data import WorkforceData
from ..helpers.model import Helper

CARD_SIZE = (ID_CARD_WIDTH_MM * mm, ID_CARD_HEIGHT_MM * mm)
BRAND = colors.HexColor("#1E3A8A")
ACTIVE_BADGE = colors.HexColor("#16A34A")
INACTIVE_BADGE = colors.HexColor("#DC2626")

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True)
class IdCardFile:
    filename: str
    content: bytes


def id_card_filename(helper: Helper) -> str:
    return "ID-Card-" + _WHITESPACE.sub("_", helper.name) + ".pdf"


def initials(name: str) -> str:
    parts = [p for p in name.split() if p]
    return "".join(p[0] for p in parts[:2]).upper() or "?"


def _qr_image(payload: str) -> ImageReader:
    qr = qrcode.QRCode(
        version=1,
        error_correction=ERROR_CORRECT_M,
        box_size=10,
        border=1,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    return ImageReader(img.get_image())


def render_id_card(helper: Helper, contractor_name: str) -> bytes:
    """Draw a one-page, card-sized PDF for ``helper``."""
    width, height = CARD_SIZE
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=CARD_SIZE)
    c.setTitle(f"ID Card {helper.employee_id}")

    # header band
    band = 11 * mm
    c.setFillColor(BRAND)
    c.rect(0, height - band, width, band, stroke=0, fill=1)
    c.setFillColor(colors.white)
    c.setFont("Helvetica-Bold", 8)
    c.drawString(4 * mm, height - 7 * mm, contractor_name[:40])
    c.setFont("Helvetica", 5.5)
    c.drawRightString(width - 4 * mm, height - 7 * mm, "HELPER ID CARD")

    # initials avatar
    cx, cy, r = 12 * mm, height - band - 12 * mm, 8 * mm
    c.setFillColor(colors.HexColor("#E0E7FF"))
    c.circle(cx, cy, r, stroke=0, fill=1)
    c.setFillColor(BRAND)
    c.setFont("Helvetica-Bold", 12)
    c.drawCentredString(cx, cy - 4, initials(helper.name))

    # details
    x = 24 * mm
    y = height - band - 6 * mm
    c.setFillColor(colors.black)
    c.setFont("Helvetica-Bold", 8.5)
    c.drawString(x, y, helper.name[:32])
    c.setFont("Helvetica", 6.5)
    for label, value in (
        ("ID", helper.employee_id),
        ("Designation", helper.designation or NOT_AVAILABLE),
        ("Department", helper.department or NOT_AVAILABLE),
        ("Joined", helper.join_date.isoformat()),
    ):
        y -= 4.2 * mm
        c.drawString(x, y, f"{label}: {value}"[:40])

    # validity badge
    badge_color = ACTIVE_BADGE if helper.is_active else INACTIVE_BADGE
    c.setFillColor(badge_color)
    c.roundRect(4 * mm, 3.5 * mm, 18 * mm, 5 * mm, 1.5 * mm, stroke=0, fill=1)
    c.setFillColor(colors.white)
    c.setFont("Helvetica-Bold", 6)
    c.drawCentredString(13 * mm, 5.3 * mm, helper.status.value.upper())

    # QR with the helper code
    qr_size = 17 * mm
    c.drawImage(_qr_image(helper.employee_id), width - qr_size - 3 * mm, 3 * mm, qr_size, qr_size)

    c.showPage()
    c.save()
    return buf.getvalue()


class IdCardService:
    def __init__(self, data: WorkforceData):
        self._data = data

    def render(self, helper_id: str) -> IdCardFile:
        helper = self._data.get_helper(helper_id)
        if helper is None:
            raise NotFoundError("Helper not found")
        contractor = self._data.get_contractor(helper.company_id)
        content = render_id_card(helper, contractor.name if contractor else NOT_AVAILABLE)
        logger.info(f"Rendered ID card for {helper.employee_id}")
        return IdCardFile(filename=id_card_filename(helper), content=content)
