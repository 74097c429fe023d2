"""
Printable HTML documents: payment receipts and the dashboard summary.
Rendered with Jinja2 (autoescaped) from cashier/templates; nothing is persisted.
"""

import re
import unicodedata
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from uuid import UUID

from fastapi import status
from jinja2 import Environment, FileSystemLoader, select_autoescape

from cashier.api.v1.dashboard.schemas import DashboardResponse
from cashier.api.v1.payments.schemas import PaymentResponse
from cashier.api.v1.payments.service import payment_to_response
from cashier.core.config import settings
from cashier.core.enums import PAYMENT_METHOD_LABELS
from cashier.core.exceptions import ServiceError
from cashier.db.repository import SchoolRepository

TEMPLATES_DIR = Path(__file__).resolve().parents[3] / "templates"


def format_amount(value) -> str:
    """25000 -> '25 000'; decimals are kept only when present."""
    amount = Decimal(str(value))
    text = f"{amount:,.0f}" if amount == amount.to_integral_value() else f"{amount:,.2f}"
    return text.replace(",", " ")


def format_date(value: datetime) -> str:
    return value.strftime("%d/%m/%Y")


_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["amount"] = format_amount
_env.filters["dmy"] = format_date


def _school_context() -> dict:
    return {
        "school_name": settings.school_name,
        "school_address": settings.school_address,
        "school_phones": settings.school_phones,
        "cashier_label": settings.cashier_label,
        "currency": settings.currency,
        "printed_on": datetime.now(timezone.utc),
    }


def render_receipt(payment: PaymentResponse) -> str:
    return _env.get_template("receipt.html").render(
        payment=payment,
        receipt_number=payment.receipt_number or str(payment.id),
        method_label=PAYMENT_METHOD_LABELS[payment.payment_method],
        **_school_context(),
    )


def render_dashboard_summary(stats: DashboardResponse) -> str:
    return _env.get_template("dashboard_summary.html").render(stats=stats, **_school_context())


def _slug(text: str) -> str:
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^A-Za-z0-9]+", "_", ascii_text).strip("_")


def receipt_filename(payment: PaymentResponse) -> str:
    labels = "-".join(_slug(m) for m in payment.months_paid)
    return f"recu_{_slug(payment.student_name)}_{labels}_{payment.id}.html"


async def get_receipt(repo: SchoolRepository, payment_id: UUID) -> PaymentResponse:
    payment = await repo.get_payment(payment_id)
    if not payment:
        raise ServiceError("Payment not found", status.HTTP_404_NOT_FOUND)
    return payment_to_response(payment)
