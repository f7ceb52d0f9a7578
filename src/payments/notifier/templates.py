"""Message templates for payment notifications."""

PAYMENT_CONFIRMED_DETAILS = "Your payment has been confirmed successfully."


class PaymentFailedTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        reason = context.get("reason") or "Payment failed"
        return {
            "subject": f"Payment Failed - Order #{order_id}",
            "body": (
                f"Your payment attempt failed. Reason: {reason}\n\n"
                "Please try again or contact support if the issue persists."
            ),
        }
