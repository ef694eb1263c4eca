from typing import Optional


class PaymentRequiredError(Exception):
    """No payment token accompanied the request."""


class PaymentGate:
    """
    Decides whether a request has been paid for. The token is opaque here:
    its presence is all that is checked. Deployments that verify tokens with
    the payment provider subclass this and override `authorize`.
    """

    def authorize(self, token: Optional[str]) -> None:
        if not token or not token.strip():
            raise PaymentRequiredError("Please complete payment to generate your W-4")


def get_payment_gate() -> PaymentGate:
    return PaymentGate()
