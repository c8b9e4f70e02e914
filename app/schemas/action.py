from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class ActionRequest(BaseModel):
    """
    Schema for an inventory action submitted by a scanner or manual entry.
    Fields are deliberately loose: the ledger validator normalizes them.
    """
    model_config = ConfigDict(populate_by_name=True)

    item_code: Optional[str] = Field(None, alias="itemCode", description="Scanned or typed item code (e.g. MED001).")
    action: Optional[str] = Field(None, description="Check In, Use, Transfer, Remove All or Check Out.")
    quantity: Optional[Any] = Field(None, description="Units affected. Non-numeric input counts as 0.")
    case_id: Optional[str] = Field(None, alias="caseId", description="Patient case reference. Generated when absent.")
    user: Optional[str] = Field(None, description="Crew member performing the action.")


class ActionResponse(BaseModel):
    """Response schema for a committed action."""
    model_config = ConfigDict(populate_by_name=True)

    new_quantity: int = Field(..., serialization_alias="newQuantity")
    record_id: int = Field(..., serialization_alias="recordId")
    low_stock_alert: bool = Field(..., serialization_alias="lowStockAlert")
    message: str = "Action logged and inventory updated."
