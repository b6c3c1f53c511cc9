from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from assetdesk.database import get_db
from assetdesk.routers.auth import require_session_user
from assetdesk.schemas.common import DataResponse
from assetdesk.schemas.ticket import EndorsedTicketCreate, EndorsedTicketResponse
import assetdesk.services.ticket_service as svc

router = APIRouter(prefix="/api/tickets", tags=["tickets"])


@router.get("/endorsed", response_model=DataResponse[list[EndorsedTicketResponse]])
def list_endorsed(agent: str | None = None, db: Session = Depends(get_db)):
    return {"data": svc.get_endorsed_tickets(db, agent)}


@router.post("/endorsed", response_model=DataResponse[EndorsedTicketResponse], status_code=201)
def endorse(data: EndorsedTicketCreate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.endorse_ticket(db, data)}
