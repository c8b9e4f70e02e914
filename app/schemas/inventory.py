from datetime import date
from typing import Optional
from pydantic import BaseModel, Field
from app.models.inventory import ItemCategory


class InventoryItemRequest(BaseModel):
    """Provisioning schema used by the seed script."""
    item_code: str = Field(..., description="Unique item code (e.g. MED001).")
    name: str = Field(..., description="Name of the item (e.g. Epinephrine).")
    category: ItemCategory = Field(..., description="Medication, Equipment or Supplies.")
    quantity: int = Field(0, ge=0, description="Initial available stock quantity.")
    min_quantity: int = Field(0, ge=0, description="Minimum stock level at or below which an alert is triggered.")
    expiry_date: Optional[date] = Field(None, description="Expiry date, if the item expires.")
    location: str = Field("", description="Where the item is stored (e.g. Ambulance A).")
