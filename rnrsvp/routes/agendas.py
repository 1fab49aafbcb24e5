"""Agenda routes for topics proposed per lunch date."""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from rnrsvp.core.database import get_session
from rnrsvp.models import Agenda, AgendaCreate

router = APIRouter(prefix="/api/agendas", tags=["agendas"])


@router.get("/{event_date}", response_model=list[Agenda])
async def list_agendas(event_date: date, session: Session = Depends(get_session)):
    """List agenda items for a date in the order they were proposed."""
    statement = (
        select(Agenda)
        .where(Agenda.event_date == event_date)
        .order_by(Agenda.created_at, Agenda.id)
    )
    return session.exec(statement).all()


@router.post("", response_model=Agenda, status_code=201)
async def create_agenda(data: AgendaCreate, session: Session = Depends(get_session)):
    """Propose an agenda item."""
    agenda = Agenda.model_validate(data)
    session.add(agenda)
    session.commit()
    session.refresh(agenda)
    return agenda


@router.delete("/{agenda_id}")
async def delete_agenda(agenda_id: int, session: Session = Depends(get_session)):
    """Remove an agenda item."""
    agenda = session.get(Agenda, agenda_id)
    if not agenda:
        raise HTTPException(status_code=404, detail="Agenda item not found")

    session.delete(agenda)
    session.commit()
    return {"success": True}
