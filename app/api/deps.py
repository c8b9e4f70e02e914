from fastapi import Request
from app.services.ledger import InventoryLedger


def get_ledger(request: Request) -> InventoryLedger:
    """Returns the ledger created by the application lifespan."""
    return request.app.state.ledger
