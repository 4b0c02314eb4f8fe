import logging

import requests

from config import BREVO_API_KEY, EMAIL_SENDER, OTP_TTL_MINUTES

logger = logging.getLogger(__name__)

BREVO_URL = "https://api.brevo.com/v3/smtp/email"


class EmailDeliveryError(Exception):
     pass


def send_confirmation_email(to_email: str, otp: str) -> None:
     if not BREVO_API_KEY:
          raise EmailDeliveryError("BREVO_API_KEY is not set")

     response = requests.post(
          BREVO_URL,
          headers={
               "api-key": BREVO_API_KEY,
               "Content-Type": "application/json",
          },
          json={
               "sender": {"name": "Ray Unity", "email": EMAIL_SENDER},
               "to": [{"email": to_email}],
               "subject": "Confirm your Ray Unity account",
               "htmlContent": f"""
                    <h2>Your confirmation code</h2>
                    <h1 style="color:#F5A623">{otp}</h1>
                    <p>This code expires in {OTP_TTL_MINUTES} minutes.</p>
               """,
          },
          timeout=10,
     )
     if response.status_code not in (200, 201):
          raise EmailDeliveryError(f"Brevo error: {response.text}")
     logger.info("Confirmation email sent to %s", to_email)
