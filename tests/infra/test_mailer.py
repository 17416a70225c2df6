# tests/infra/test_mailer.py
"""
Тесты отправки писем.
"""

from __future__ import annotations

import smtplib
from unittest.mock import MagicMock, patch

import pytest

from mesa_places.common.errors import MailDeliveryError
from mesa_places.infra.mailer import (
    Mailer,
    change_password_link,
    render_change_password_html,
)


@pytest.fixture
def mailer() -> Mailer:
    return Mailer(
        host="smtp.test",
        port=587,
        user="suporte@mesa.test",
        password="secret",
        sender_name="Mesa places",
    )


class TestTemplates:

    def test_link_carries_token_in_fragment(self) -> None:
        assert change_password_link("https://client.test/", "abc.def") == "https://client.test/#/abc.def"

    def test_html_contains_link_and_logo(self) -> None:
        html = render_change_password_html(
            link="https://client.test/#/tok",
            logo_url="https://client.test/logo.png",
            sender_name="Mesa places",
        )

        assert 'href="https://client.test/#/tok"' in html
        assert 'src="https://client.test/logo.png"' in html
        assert "<h1>Mesa places</h1>" in html
        assert "border-radius: 50%;" in html


class TestMailer:

    def test_build_message_headers(self, mailer: Mailer) -> None:
        msg = mailer.build_message("ana@example.com", "Alterar senha", "<b>oi</b>")

        assert msg["Subject"] == "Alterar senha"
        assert msg["To"] == "ana@example.com"
        assert "suporte@mesa.test" in msg["From"]
        assert "Mesa places" in msg["From"]

    @pytest.mark.asyncio
    async def test_send_html_uses_starttls_and_login(self, mailer: Mailer) -> None:
        with patch("mesa_places.infra.mailer.smtplib.SMTP") as smtp_cls:
            server = smtp_cls.return_value.__enter__.return_value

            await mailer.send_html("ana@example.com", "Alterar senha", "<b>oi</b>")

        smtp_cls.assert_called_once_with("smtp.test", 587)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("suporte@mesa.test", "secret")
        server.send_message.assert_called_once()

    @pytest.mark.asyncio
    async def test_smtp_failure_raises_delivery_error(self, mailer: Mailer) -> None:
        with patch("mesa_places.infra.mailer.smtplib.SMTP") as smtp_cls:
            server = smtp_cls.return_value.__enter__.return_value
            server.send_message = MagicMock(side_effect=smtplib.SMTPException("rejected"))

            with pytest.raises(MailDeliveryError):
                await mailer.send_html("ana@example.com", "Alterar senha", "<b>oi</b>")
