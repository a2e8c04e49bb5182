"""Immutable dataclasses describing a document registration request.

Each field carries its wire name in metadata["json"]; the serializer uses
it so Python attribute names can stay snake_case while the API sees the
names it expects (e.g. importRequest, participantInn).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


def _wire(name: str, default=None):
    return field(default=default, metadata={"json": name})


@dataclass(frozen=True)
class Description:
    participant_inn: Optional[str] = _wire("participantInn")


@dataclass(frozen=True)
class Product:
    certificate_document: Optional[str] = _wire("certificate_document")
    certificate_document_date: Optional[str] = _wire("certificate_document_date")
    certificate_document_number: Optional[str] = _wire("certificate_document_number")
    owner_inn: Optional[str] = _wire("owner_inn")
    producer_inn: Optional[str] = _wire("producer_inn")
    production_date: Optional[str] = _wire("production_date")
    tnved_code: Optional[str] = _wire("tnved_code")
    uit_code: Optional[str] = _wire("uit_code")
    uitu_code: Optional[str] = _wire("uitu_code")


@dataclass(frozen=True)
class Document:
    """Document sent to the create endpoint.

    Field groups:
    - Identity: doc_id, doc_status, doc_type, reg_date, reg_number
    - Participants: description, owner_inn, participant_inn, producer_inn
    - Production: production_date, production_type, import_request, products
    """

    description: Optional[Description] = _wire("description")
    doc_id: Optional[str] = _wire("doc_id")
    doc_status: Optional[str] = _wire("doc_status")
    doc_type: Optional[str] = _wire("doc_type")
    import_request: bool = _wire("importRequest", default=False)
    owner_inn: Optional[str] = _wire("owner_inn")
    participant_inn: Optional[str] = _wire("participant_inn")
    producer_inn: Optional[str] = _wire("producer_inn")
    production_date: Optional[str] = _wire("production_date")
    production_type: Optional[str] = _wire("production_type")
    products: Tuple[Product, ...] = _wire("products", default=())
    reg_date: Optional[str] = _wire("reg_date")
    reg_number: Optional[str] = _wire("reg_number")


def example_document() -> Document:
    """A filled-in introduce-goods document, handy for smoke tests and docs."""
    product = Product(
        certificate_document="Document",
        certificate_document_date="2020-01-23",
        certificate_document_number="12345",
        owner_inn="OwnerINN",
        producer_inn="ProducerINN",
        production_date="2020-01-23",
        tnved_code="Code",
        uit_code="UIT123",
        uitu_code="UITU123",
    )
    return Document(
        description=Description(participant_inn="ParticipantINN"),
        doc_id="DocID123",
        doc_status="Status",
        doc_type="LP_INTRODUCE_GOODS",
        import_request=True,
        owner_inn="OwnerINN",
        participant_inn="ParticipantINN",
        producer_inn="ProducerINN",
        production_date="2020-01-23",
        production_type="Type",
        products=(product,),
        reg_date="2020-01-23",
        reg_number="RegNumber123",
    )
