from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType
from jinja2 import Environment, FileSystemLoader, select_autoescape
from pathlib import Path
from pydantic import ValidationError
from otp_auth.config import settings
from otp_auth.exceptions import DeliveryError
import logging

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
)


def build_connection_config(port: int, use_ssl: bool) -> ConnectionConfig:
    """STARTTLS config for the submission port, implicit TLS for 465."""
    return ConnectionConfig(
        MAIL_USERNAME=settings.EMAIL_HOST_USER,
        MAIL_PASSWORD=settings.EMAIL_HOST_PASSWORD,
        MAIL_FROM=settings.EMAIL_FROM,
        MAIL_FROM_NAME=settings.APP_NAME,
        MAIL_PORT=port,
        MAIL_SERVER=settings.EMAIL_HOST,
        MAIL_STARTTLS=not use_ssl,
        MAIL_SSL_TLS=use_ssl,
        USE_CREDENTIALS=bool(settings.EMAIL_HOST_USER),
        VALIDATE_CERTS=True,
    )


def render_verification_email(code: str) -> str:
    return env.get_template("verification_otp.html").render(
        app_name=settings.APP_NAME,
        code=code,
        expire_minutes=settings.OTP_EXPIRE_MINUTES,
    )


class EmailNotifier:
    """Sends verification codes by email, trying port 587 then 465."""

    def __init__(self, tls_config: ConnectionConfig = None, ssl_config: ConnectionConfig = None):
        self.tls_config = tls_config
        self.ssl_config = ssl_config

    def load_configs(self):
        """Build missing connection configs; bad mail settings become a DeliveryError."""
        try:
            if self.tls_config is None:
                self.tls_config = build_connection_config(settings.EMAIL_PORT, use_ssl=False)
            if self.ssl_config is None:
                self.ssl_config = build_connection_config(465, use_ssl=True)
        except ValidationError as e:
            logger.error(f"Invalid mail settings: {str(e)}")
            raise DeliveryError(str(e)) from e

    async def send_verification(self, email: str, code: str) -> None:
        subject = f"Verify your {settings.APP_NAME} account"
        message = MessageSchema(
            subject=subject,
            recipients=[email],
            body=render_verification_email(code),
            subtype=MessageType.html,
        )
        await self.send_with_fallback(message, subject, email)

    # 🔁 TLS first, SSL if that fails
    async def send_with_fallback(self, message: MessageSchema, subject: str, to_email: str) -> None:
        self.load_configs()

        try:
            await FastMail(self.tls_config).send_message(message)
            logger.info(f"{subject} email sent to {to_email} via port {self.tls_config.MAIL_PORT}")
            return
        except Exception as e:
            logger.warning(f"Failed to send {subject} via port {self.tls_config.MAIL_PORT}: {str(e)}")

        try:
            await FastMail(self.ssl_config).send_message(message)
            logger.info(f"{subject} email sent to {to_email} via port {self.ssl_config.MAIL_PORT}")
        except Exception as e:
            logger.error(f"Failed to send {subject} email via both ports: {str(e)}")
            raise DeliveryError(str(e)) from e
