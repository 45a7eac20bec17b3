from fastapi import Request
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def get_store(request: Request):
    """FastAPI dependency returning the store handle selected at startup."""
    return request.app.state.store
