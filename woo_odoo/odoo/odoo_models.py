from pydantic import BaseModel, ConfigDict
from typing import Union, List, Dict, Any

# Odoo stores "no value" as False, not as an empty string.
OdooChar = Union[str, bool]


class PartnerValues(BaseModel):
    name: str
    email: str
    phone: OdooChar = False
    street: OdooChar = False
    city: OdooChar = False
    zip: OdooChar = False
    country_id: int
    customer_rank: int = 1
    model_config = ConfigDict(extra="forbid")


class ProductValues(BaseModel):
    name: str
    list_price: float
    default_code: str
    type: str = "consu"
    sale_ok: bool = True
    model_config = ConfigDict(extra="forbid")


class OrderLineValues(BaseModel):
    product_id: int
    name: str
    product_uom_qty: float
    price_unit: float

    def as_command(self) -> List[Any]:
        # (0, 0, values) = create a new one2many row
        return [0, 0, self.model_dump()]


class SaleOrderValues(BaseModel):
    partner_id: int
    origin: str
    client_order_ref: str
    state: str = "draft"
    date_order: str
    order_line: List[OrderLineValues]

    def to_odoo(self) -> Dict[str, Any]:
        values = self.model_dump(exclude={"order_line"})
        values["order_line"] = [line.as_command() for line in self.order_line]
        return values
