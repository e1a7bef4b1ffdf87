"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from radio_calico.db.session import Database, get_database, get_db
from radio_calico.services.rating_store import RatingStore
from radio_calico.utils.net import client_address

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
DatabaseDep = Annotated[Database, Depends(get_database)]


def get_rating_store(db: SessionDep) -> RatingStore:
    """Return a rating store bound to the request's session."""
    return RatingStore(db)


def get_source_address(request: Request) -> str | None:
    """Return the caller's address for audit purposes."""
    return client_address(request, trust_proxy=request.app.state.settings.trust_proxy)


RatingStoreDep = Annotated[RatingStore, Depends(get_rating_store)]
SourceAddressDep = Annotated[str | None, Depends(get_source_address)]
