import logging
from sqlalchemy.orm import Session
from sqlalchemy import select
from assetdesk.models.ticket import EndorsedTicket
from assetdesk.realtime import feed
from assetdesk.schemas.ticket import EndorsedTicketCreate, EndorsedTicketResponse

logger = logging.getLogger(__name__)


def endorse_ticket(db: Session, data: EndorsedTicketCreate) -> EndorsedTicket:
    ticket = EndorsedTicket(**data.model_dump())
    db.add(ticket)
    db.commit()
    db.refresh(ticket)
    logger.info("Ticket %s endorsed to %s", ticket.ticket_reference_number, ticket.agent)
    feed.publish(
        "endorsed_tickets", "insert",
        EndorsedTicketResponse.model_validate(ticket).model_dump(mode="json"),
    )
    return ticket


def get_endorsed_tickets(db: Session, agent: str | None = None) -> list[EndorsedTicket]:
    query = select(EndorsedTicket)
    if agent:
        query = query.where(EndorsedTicket.agent == agent)
    return db.scalars(query.order_by(EndorsedTicket.date_created.desc(), EndorsedTicket.id.desc())).all()
