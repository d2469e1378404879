from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from biztime.core.db import get_db
from biztime.models.invoice_model import Invoice
from biztime.schemas.common_schema import DeletedResponse
from biztime.schemas.invoice_schema import (
    InvoiceCreate,
    InvoiceDetailResponse,
    InvoiceListResponse,
    InvoiceOut,
    InvoiceResponse,
    InvoiceUpdate,
)
from biztime.services.invoice_service import invoice_service

router = APIRouter()


def _invoice_to_out(invoice: Invoice) -> InvoiceOut:
    return InvoiceOut(
        id=invoice.id,
        comp_code=invoice.comp_code,
        amt=invoice.amt,
        paid=bool(invoice.paid),
        add_date=invoice.add_date,
        paid_date=invoice.paid_date,
    )


@router.get("", response_model=InvoiceListResponse)
def list_invoices(db: Session = Depends(get_db)):
    return {"invoices": invoice_service.get_all_invoices(db)}


@router.get("/{invoice_id}", response_model=InvoiceDetailResponse)
def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    return {"invoice": invoice_service.get_invoice(db, invoice_id)}


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
def create_invoice(payload: InvoiceCreate, db: Session = Depends(get_db)):
    invoice = invoice_service.create_invoice(db, payload)
    return InvoiceResponse(invoice=_invoice_to_out(invoice))


@router.put("/{invoice_id}", response_model=InvoiceResponse)
def update_invoice(invoice_id: int, payload: InvoiceUpdate, db: Session = Depends(get_db)):
    invoice = invoice_service.update_invoice(db, invoice_id, payload)
    return InvoiceResponse(invoice=_invoice_to_out(invoice))


@router.delete("/{invoice_id}", response_model=DeletedResponse)
def delete_invoice(invoice_id: int, db: Session = Depends(get_db)):
    invoice_service.delete_invoice(db, invoice_id)
    return DeletedResponse()
