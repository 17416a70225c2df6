# mesa_places/infra/mailer.py
"""
Отправка транзакционных писем через SMTP-релей (по умолчанию Gmail).
"""

from __future__ import annotations

import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from mesa_places.common.constants import TypeMsg
from mesa_places.common.errors import MailDeliveryError
from mesa_places.common.logger import log_error, log_info


CHANGE_PASSWORD_SUBJECT = "Alterar senha"

_CHANGE_PASSWORD_HTML = """
<html>
  <head>
    <style>
      @import url('https://fonts.googleapis.com/css?family=Poppins');

      body {{
        font-family: 'Poppins', Helvetica, Arial, sans-serif;
      }}

      img {{
        border-radius: 50%;
      }}

      a {{
        background: #d94234;
        color: #ffffff;
        padding: 15px;
        font-weight: bold;
        border-radius: 10px;
      }}
    </style>
  </head>
  <body>
  <center>
    <img src="{logo_url}" alt="Logo">
    <h1>{sender_name}</h1>
    <h2>Alterar senha</h2>
    <a href="{link}">Clique aqui para continuar</a>
    <h4>Você será direcionado para nossa página de alteração</h4>
  </center>
  </body>
</html>
"""


def change_password_link(client_url: str, token: str) -> str:
    """Ссылка на страницу смены пароля с токеном во фрагменте."""
    return f"{client_url.rstrip('/')}/#/{token}"


def render_change_password_html(link: str, logo_url: str, sender_name: str) -> str:
    """Возвращает HTML письма со ссылкой смены пароля."""
    return _CHANGE_PASSWORD_HTML.format(link=link, logo_url=logo_url, sender_name=sender_name)


class Mailer:
    """SMTP-отправитель со STARTTLS."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        sender_name: str = "Mesa places",
    ) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender_name = sender_name

    def build_message(self, to: str, subject: str, html_body: str) -> MIMEMultipart:
        """Собирает письмо с HTML-телом."""
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = formataddr((self.sender_name, self.user))
        msg["To"] = to
        msg.attach(MIMEText(html_body, "html", "utf-8"))
        return msg

    def _send_sync(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.host, self.port) as server:
            server.starttls()
            if self.password:
                server.login(self.user, self.password)
            server.send_message(msg)

    async def send_html(self, to: str, subject: str, html_body: str) -> None:
        """
        Отправляет HTML-письмо.

        Raises:
            MailDeliveryError: Ошибка SMTP или сети
        """
        msg = self.build_message(to, subject, html_body)
        try:
            await asyncio.to_thread(self._send_sync, msg)
        except (smtplib.SMTPException, OSError) as error:
            await log_error(f"Не удалось отправить письмо на {to}: {error}")
            raise MailDeliveryError(str(error)) from error

        await log_info(f"Письмо отправлено: {subject}", type_msg=TypeMsg.INFO, extra={"to": to})
