import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from biztime.core.db import write_scope
from biztime.core.errors import NotFoundError, company_not_found, invoice_not_found
from biztime.models.company_model import Company
from biztime.models.invoice_model import Invoice, utc_now
from biztime.schemas.invoice_schema import InvoiceCreate, InvoiceUpdate

logger = logging.getLogger(__name__)

# Largest id a BIGINT / SQLite INTEGER can hold
MAX_INVOICE_ID = 2**63 - 1


def resolve_payment_state(
    current_paid: bool,
    current_paid_date: Optional[datetime],
    requested_paid: Optional[bool],
    now: datetime,
) -> Tuple[bool, Optional[datetime]]:
    """
    Next (paid, paid_date) for an invoice given its persisted state and the
    paid value of an update request (None when the request left it out).

    - paid=True on an invoice with no paid_date stamps it with `now`
    - paid=False always clears paid_date
    - anything else keeps the persisted pair, so paying twice does not move
      the original paid_date
    """
    if requested_paid is True and current_paid_date is None:
        return True, now
    if requested_paid is False:
        return False, None
    return current_paid, current_paid_date


class InvoiceService:
    """
    Data-access layer for invoices.

    Every method takes the request's Session; nothing is held between calls.
    """

    # ------------------------------------------------------------
    # Fetch all invoices
    # ------------------------------------------------------------
    def get_all_invoices(self, db: Session) -> List[dict]:
        rows = db.query(Invoice.id, Invoice.comp_code).order_by(Invoice.id).all()
        return [{"id": r.id, "comp_code": r.comp_code} for r in rows]

    # ------------------------------------------------------------
    # Fetch single invoice by ID, with its company nested
    # ------------------------------------------------------------
    def get_invoice(self, db: Session, invoice_id: int) -> dict:
        if not 1 <= invoice_id <= MAX_INVOICE_ID:
            raise NotFoundError(invoice_not_found(invoice_id))

        row = (
            db.query(
                Invoice.id,
                Invoice.amt,
                Invoice.paid,
                Invoice.add_date,
                Invoice.paid_date,
                Company.code,
                Company.name,
                Company.description,
            )
            .join(Company, Invoice.comp_code == Company.code)
            .filter(Invoice.id == invoice_id)
            .first()
        )
        if row is None:
            logger.debug("Invoice lookup missed: %s", invoice_id)
            raise NotFoundError(invoice_not_found(invoice_id))

        return {
            "id": row.id,
            "amt": row.amt,
            "paid": row.paid,
            "add_date": row.add_date,
            "paid_date": row.paid_date,
            "company": {
                "code": row.code,
                "name": row.name,
                "description": row.description,
            },
        }

    # ------------------------------------------------------------
    # Create
    # ------------------------------------------------------------
    def create_invoice(self, db: Session, payload: InvoiceCreate) -> Invoice:
        invoice = Invoice(comp_code=payload.comp_code, amt=payload.amt, paid=False)
        missing = NotFoundError(company_not_found(payload.comp_code))
        with write_scope(db, on_foreign_key=missing):
            db.add(invoice)

        db.refresh(invoice)
        logger.info("Created invoice %s for %s", invoice.id, invoice.comp_code)
        return invoice

    # ------------------------------------------------------------
    # Update amount and payment state
    # ------------------------------------------------------------
    def update_invoice(
        self,
        db: Session,
        invoice_id: int,
        payload: InvoiceUpdate,
    ) -> Invoice:
        """
        Overwrite amt and move the payment state per resolve_payment_state.

        The current state is read with the row locked and written back in the
        same transaction, so two concurrent payments cannot both stamp
        paid_date.
        """
        if not 1 <= invoice_id <= MAX_INVOICE_ID:
            raise NotFoundError(invoice_not_found(invoice_id))

        with write_scope(db):
            invoice = (
                db.query(Invoice)
                .filter(Invoice.id == invoice_id)
                .with_for_update()
                .first()
            )
            if invoice is None:
                raise NotFoundError(invoice_not_found(invoice_id))

            paid, paid_date = resolve_payment_state(
                invoice.paid,
                invoice.paid_date,
                payload.paid,
                utc_now(),
            )
            invoice.amt = payload.amt
            invoice.paid = paid
            invoice.paid_date = paid_date

        db.refresh(invoice)
        logger.info("Updated invoice %s (paid=%s)", invoice.id, invoice.paid)
        return invoice

    # ------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------
    def delete_invoice(self, db: Session, invoice_id: int) -> None:
        if not 1 <= invoice_id <= MAX_INVOICE_ID:
            raise NotFoundError(invoice_not_found(invoice_id))

        with write_scope(db):
            deleted = (
                db.query(Invoice)
                .filter(Invoice.id == invoice_id)
                .delete(synchronize_session=False)
            )
            if deleted == 0:
                raise NotFoundError(invoice_not_found(invoice_id))

        logger.info("Deleted invoice %s", invoice_id)


invoice_service = InvoiceService()
