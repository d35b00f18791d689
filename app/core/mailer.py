import logging
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail
from app.core.config import settings

logger = logging.getLogger(__name__)


def send_signin_email(to_email: str, signin_link: str):
    """Send the email-link sign-in message using SendGrid"""
    try:
        subject = "Sign in to Task Tracker"
        html_content = f"""
        <html>
            <body style="font-family: Arial, sans-serif; line-height: 1.6;">
                <p>We received a request to sign in with this email address.</p>
                <p style="text-align: center;">
                    <a href="{signin_link}"
                       style="background: #2c3e50; color: #ffffff; padding: 12px 24px; text-decoration: none;">
                        Sign in
                    </a>
                </p>
                <p>This link will expire in <b>{settings.signin_token_expire_hours} hours</b> and can be used once.</p>
                <br>
                <p>If you did not request this email, you can safely ignore it.</p>
            </body>
        </html>
        """

        message = Mail(
            from_email=settings.sendgrid_from_email,
            to_emails=to_email,
            subject=subject,
            html_content=html_content,
        )

        sg = SendGridAPIClient(settings.sendgrid_api_key)
        response = sg.send(message)
        logger.info(f"Sign-in email sent to {to_email}, status: {response.status_code}")

    except Exception:
        logger.exception(f"Failed to send sign-in email to {to_email}")
