"""FastAPI routes for the Payments domain — gateway webhooks and checkout."""

import os

from fastapi import APIRouter, Header, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from payments.api.schemas import (
    ConfigureGatewayRequest,
    CreateGatewayOrderRequest,
    GatewayConfigResponse,
    GatewayOrderResponse,
    PaymentStatusResponse,
    PaymentVerificationResponse,
    VerifyPaymentRequest,
    WebhookAckResponse,
)
from payments.domain import logger
from payments.gateway import get_gateway
from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import GatewayError
from payments.reconciliation.classifier import PaymentAction
from payments.reconciliation.orchestrator import FailureStage, InvalidWebhookSignature
from payments.wiring import get_checkout_service, get_orchestrator

payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/webhook", response_model=WebhookAckResponse)
async def process_webhook(
    request: Request,
    x_razorpay_signature: str = Header(default=""),
) -> WebhookAckResponse:
    """Reconcile a gateway webhook delivery.

    Acknowledged with 200 whatever happens downstream; only a signature
    mismatch is rejected.
    """
    raw_body = await request.body()
    orchestrator = get_orchestrator()
    try:
        outcome = await run_in_threadpool(orchestrator.handle_webhook, x_razorpay_signature, raw_body)
    except InvalidWebhookSignature as exc:
        raise HTTPException(status_code=400, detail="Invalid webhook signature") from exc

    if outcome.action is PaymentAction.IGNORED:
        status = "ignored"
    elif outcome.failure_stage is FailureStage.NONE:
        status = "processed"
    else:
        status = "acknowledged"
    return WebhookAckResponse(status=status, failure_stage=outcome.failure_stage.value)


@payment_router.post("/gateway-orders", status_code=201, response_model=GatewayOrderResponse)
def create_gateway_order(body: CreateGatewayOrderRequest) -> GatewayOrderResponse:
    """Create a gateway order for an internal order ahead of checkout."""
    try:
        order = get_checkout_service().create_gateway_order(
            order_id=body.order_id,
            amount=body.amount,
            currency=body.currency,
            receipt=body.receipt,
        )
    except GatewayError as exc:
        logger.error("Gateway order creation failed", order_id=body.order_id, error=str(exc))
        raise HTTPException(status_code=502, detail=f"Failed to create gateway order: {exc}") from exc

    return GatewayOrderResponse(
        gateway_order_id=order.id,
        status=order.status,
        amount=order.amount,
        currency=order.currency,
        receipt=order.receipt,
    )


@payment_router.post("/verify", response_model=PaymentVerificationResponse)
def verify_payment(body: VerifyPaymentRequest) -> PaymentVerificationResponse:
    """Verify the signature returned by the gateway's checkout."""
    verification = get_checkout_service().verify_payment(
        gateway_order_id=body.gateway_order_id,
        gateway_payment_id=body.gateway_payment_id,
        signature=body.signature,
    )
    return PaymentVerificationResponse(
        status=verification.status,
        gateway_order_id=verification.gateway_order_id,
        gateway_payment_id=verification.gateway_payment_id,
        message=verification.message,
    )


@payment_router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only).

    This endpoint is only available when PROTEAN_ENV is not 'production'.
    It allows toggling success/failure behavior for manual API testing.
    """
    if os.environ.get("PROTEAN_ENV") == "production":
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(
        should_succeed=body.should_succeed,
        failure_reason=body.failure_reason,
    )
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
    )


@payment_router.get("/{gateway_payment_id}", response_model=PaymentStatusResponse)
def get_payment_status(gateway_payment_id: str) -> PaymentStatusResponse:
    """Look up a payment's status on the gateway."""
    try:
        payment = get_checkout_service().fetch_payment_status(gateway_payment_id)
    except GatewayError as exc:
        logger.error("Payment status lookup failed", gateway_payment_id=gateway_payment_id, error=str(exc))
        raise HTTPException(status_code=502, detail=f"Failed to fetch payment status: {exc}") from exc

    if payment is None:
        raise HTTPException(status_code=404, detail=f"Payment {gateway_payment_id} not found")

    return PaymentStatusResponse(
        gateway_payment_id=payment.id,
        gateway_order_id=payment.order_id,
        status=payment.status,
        amount=payment.amount,
        currency=payment.currency,
    )
