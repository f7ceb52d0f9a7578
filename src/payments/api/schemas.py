"""Pydantic request/response schemas for the Payments API.

These are external contracts (anti-corruption layer) — separate from the
internal PaymentEvent value object and gateway records.
"""

from decimal import Decimal

from pydantic import AliasChoices, BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateGatewayOrderRequest(BaseModel):
    order_id: int
    amount: Decimal
    currency: str | None = None
    receipt: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "order_id": 42,
                    "amount": "499.00",
                    "currency": "INR",
                }
            ]
        }
    }


class VerifyPaymentRequest(BaseModel):
    # Accepts the field names the gateway's checkout hands back verbatim
    gateway_order_id: str = Field(validation_alias=AliasChoices("gateway_order_id", "razorpay_order_id"))
    gateway_payment_id: str = Field(validation_alias=AliasChoices("gateway_payment_id", "razorpay_payment_id"))
    signature: str = Field(validation_alias=AliasChoices("signature", "razorpay_signature"))


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Gateway unavailable"


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class GatewayOrderResponse(BaseModel):
    gateway_order_id: str
    status: str | None = None
    amount: int | None = None
    currency: str | None = None
    receipt: str | None = None


class PaymentVerificationResponse(BaseModel):
    status: str  # SUCCESS, FAILED
    gateway_order_id: str
    gateway_payment_id: str
    message: str


class PaymentStatusResponse(BaseModel):
    gateway_payment_id: str
    gateway_order_id: str | None = None
    status: str | None = None
    amount: int | None = None
    currency: str | None = None


class WebhookAckResponse(BaseModel):
    status: str  # processed, ignored, acknowledged
    failure_stage: str = "none"


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str
