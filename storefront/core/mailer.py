"""
Email adapter for the storefront backend.

The default implementation uses SMTP, reading credentials from Settings.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import smtplib
import ssl

from storefront.domain.errors import MailError

from .config import get_settings
from .logging import get_logger

logger = get_logger(__name__)


def make_a_nice_email(text: str) -> str:
    return f"""
    <div class="email" style="
      border: 1px solid black;
      padding: 20px;
      font-family: sans-serif;
      line-height: 2;
      font-size: 20px;
    ">
      <h2>Hello There!</h2>
      <p>{text}</p>
      <p>😘, The Storefront Team</p>
    </div>
    """


def send_email(subject: str, to_email: str, html_body: str, text_body: str | None = None, from_email: str | None = None) -> bool:
    """
    Send an email through the configured SMTP server.

    Returns False without sending when SMTP is not configured; raises MailError
    when the transport fails.
    """
    settings = get_settings()
    sender = from_email or settings.mail_from
    if not (
        settings.smtp_host
        and settings.smtp_user
        and settings.smtp_password
        and sender
        and settings.smtp_port
    ):
        logger.warning("SMTP not configured; skipping mail to %s (%s)", to_email, subject)
        return False
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = sender
    msg["To"] = to_email
    plain = text_body or html_body
    msg.attach(MIMEText(plain, "plain", "utf-8"))
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    port = settings.smtp_port or 465
    try:
        if port == 465:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(settings.smtp_host, port, context=context) as server:
                server.login(settings.smtp_user, settings.smtp_password)
                server.sendmail(sender, [to_email], msg.as_string())
        else:
            with smtplib.SMTP(settings.smtp_host, port) as server:
                server.ehlo()
                server.starttls(context=ssl.create_default_context())
                server.login(settings.smtp_user, settings.smtp_password)
                server.sendmail(sender, [to_email], msg.as_string())
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("Mail to %s failed: %s", to_email, exc)
        raise MailError(f"Could not send email to {to_email}") from exc
    logger.info("Mail sent to %s (%s)", to_email, subject)
    return True
