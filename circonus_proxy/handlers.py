"""Handlers que recebem o webhook do Circonus e repassam para outros serviços.

Cada handler expõe nome, rota, registro no app Flask e texto de uso para o
``--help``. A lista de handlers ativos é fixa (ver ``build_handlers``).
"""
import abc
import logging
from datetime import tzinfo
from typing import List, Optional, Tuple

from flask import Flask, abort, request

from .circonus import parse_payload
from .constants import HIPCHAT_FROM
from .errors import DecodeError, RenderError, SendError
from .hipchat import FORMAT_TEXT, HipchatClient, MessageRequest
from .templates import NotificationRenderer

logger = logging.getLogger(__name__)


class WebhookHandler(abc.ABC):
    name: str = ""
    route: str = ""

    @abc.abstractmethod
    def register(self, app: Flask) -> None:
        """Adiciona as rotas do handler ao app."""

    @classmethod
    @abc.abstractmethod
    def usage(cls) -> str:
        """Texto de configuração exibido no --help."""


class HipchatHandler(WebhookHandler):
    name = "Hipchat"
    route = "/hipchat/{room}?format=json"

    def __init__(
        self,
        client: Optional[HipchatClient] = None,
        renderer: Optional[NotificationRenderer] = None,
        sender: str = HIPCHAT_FROM,
        timezone: Optional[tzinfo] = None,
    ):
        self.client = client or HipchatClient()
        self.renderer = renderer or NotificationRenderer()
        self.sender = sender
        self.timezone = timezone

    def register(self, app: Flask) -> None:
        def hipchat_webhook(room):
            # A rota só existe com ?format=json, como o Circonus chama
            if request.args.get("format") != "json":
                abort(404)
            return self.dispatch(room, request.get_data())

        app.add_url_rule("/hipchat/<room>", "hipchat_webhook", hipchat_webhook, methods=["POST"])

    def dispatch(self, room: str, body) -> Tuple[str, int]:
        """Processa um payload e envia uma mensagem por alerta, na ordem recebida.

        Para no primeiro erro: as mensagens já enviadas não são desfeitas e os
        alertas seguintes não são enviados.
        """
        try:
            payload = parse_payload(body, self.timezone)
        except DecodeError as exc:
            logger.warning(f"Payload inválido para a sala {room}: {exc}")
            return f"could not parse request body: {exc}", 400

        for alert in payload.alerts:
            try:
                message, color = self.renderer.render(alert, payload.account_name)
            except RenderError as exc:
                logger.warning(f"Falha ao renderizar alerta {alert.id}: {exc}")
                return f"error executing alert template: {exc}", 500

            req = MessageRequest(
                room_id=room,
                sender=self.sender,
                message=message,
                color=color,
                message_format=FORMAT_TEXT,
                notify=True,
            )
            try:
                self.client.post_message(req)
            except SendError as exc:
                logger.warning(f"Falha ao enviar alerta {alert.id} para a sala {room}: {exc}")
                return f"error sending message to hipchat: {exc}", 500

            logger.debug(f"Alerta {alert.id} enviado para a sala {room}")

        return "", 200

    @classmethod
    def usage(cls) -> str:
        return """
    Sends alerts to the Hipchat room identified in the URL as {room}.

    Requires the following environment variables:
    CIRCONUS_WEBHOOK_PROXY_HIPCHAT_API_TOKEN: API (version 1) token

    Permits the following environment variables:
    CIRCONUS_WEBHOOK_PROXY_HIPCHAT_API_URL: Base URL of the Hipchat server (defaults to https://api.hipchat.com)
    CIRCONUS_WEBHOOK_PROXY_HIPCHAT_ALERT_TEMPLATE: Jinja2 template to format alert
        Defaults to: Severity {{ severity }} alert triggered by {{ check_name }} ({{ metric_name }}: {{ value }}). {{ url }}
    CIRCONUS_WEBHOOK_PROXY_HIPCHAT_RECOVERY_TEMPLATE: Jinja2 template to format recovery
        Defaults to: Recovery of {{ check_name }} ({{ metric_name }}: {{ value }}). {{ url }}
        Fields: id, severity, value, time, url, agent, check_name, metric_name,
        clear_time, clear_value, account_name. Simple Go style field references ({{.CheckName}})
        are also accepted; other Go template actions (if, range, pipelines) are not.
    CIRCONUS_WEBHOOK_PROXY_HIPCHAT_ALERT_COLOR: Color of Hipchat message for alerts (defaults to red)
    CIRCONUS_WEBHOOK_PROXY_HIPCHAT_RECOVERY_COLOR: Color of Hipchat message for recovery (defaults to green)
    CIRCONUS_WEBHOOK_PROXY_HIPCHAT_FROM: User to use as "From" (defaults to Circonus)
    CIRCONUS_WEBHOOK_PROXY_HIPCHAT_TIMEOUT_SECONDS: Timeout of requests to Hipchat (defaults to 10)
    """


HANDLER_CLASSES = [
    HipchatHandler,
]


def build_handlers(timezone: Optional[tzinfo] = None) -> List[WebhookHandler]:
    """Instancia os handlers ativos. Levanta ``ConfigError`` se template ou cor forem inválidos."""
    return [cls(timezone=timezone) for cls in HANDLER_CLASSES]
