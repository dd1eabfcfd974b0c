import logging
import re
from typing import Tuple

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError

from .circonus import Alert
from .constants import (
    HIPCHAT_ALERT_COLOR,
    HIPCHAT_ALERT_TEMPLATE,
    HIPCHAT_COLORS,
    HIPCHAT_RECOVERY_COLOR,
    HIPCHAT_RECOVERY_TEMPLATE,
)
from .errors import ConfigError, RenderError

logger = logging.getLogger(__name__)

_env = Environment(undefined=StrictUndefined, autoescape=False, keep_trailing_newline=True)

# Referências simples a campos no estilo text/template do Go ({{.CheckName}}) usadas em
# configs antigas. Ações do Go (if, range, pipelines) não são traduzidas.
_GO_FIELD_RE = re.compile(r"\{\{\s*\.([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")
_GO_FIELDS = {
    "ID": "id",
    "Severity": "severity",
    "Value": "value",
    "Time": "time",
    "URL": "url",
    "Agent": "agent",
    "CheckName": "check_name",
    "MetricName": "metric_name",
    "ClearTime": "clear_time",
    "ClearValue": "clear_value",
}


def _snake_case(name: str) -> str:
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name).lower()


def translate_go_template(source: str) -> str:
    """Converte referências simples ``{{.Campo}}`` para a sintaxe do Jinja2 (``{{ campo }}``)."""
    def _replace(match):
        field = match.group(1)
        return "{{ %s }}" % _GO_FIELDS.get(field, _snake_case(field))

    return _GO_FIELD_RE.sub(_replace, source)


def compile_template(source: str, name: str):
    try:
        return _env.from_string(translate_go_template(source))
    except TemplateSyntaxError as exc:
        raise ConfigError(f"invalid {name} template: {exc}") from exc


def _check_color(color: str, name: str) -> str:
    normalized = (color or "").strip().lower()
    if normalized not in HIPCHAT_COLORS:
        raise ConfigError(f"invalid {name} color {color!r}, expected one of: {', '.join(sorted(HIPCHAT_COLORS))}")
    return normalized


class NotificationRenderer:
    """Escolhe template e cor (alerta ou recuperação) e renderiza a mensagem."""

    def __init__(
        self,
        alert_template: str = HIPCHAT_ALERT_TEMPLATE,
        recovery_template: str = HIPCHAT_RECOVERY_TEMPLATE,
        alert_color: str = HIPCHAT_ALERT_COLOR,
        recovery_color: str = HIPCHAT_RECOVERY_COLOR,
    ):
        self.alert_template = compile_template(alert_template, "alert")
        self.recovery_template = compile_template(recovery_template, "recovery")
        self.alert_color = _check_color(alert_color, "alert")
        self.recovery_color = _check_color(recovery_color, "recovery")

    def render(self, alert: Alert, account_name: str = "") -> Tuple[str, str]:
        if alert.is_recovery():
            template, color, kind = self.recovery_template, self.recovery_color, "recovery"
        else:
            template, color, kind = self.alert_template, self.alert_color, "alert"

        fields = alert.template_fields()
        fields["account_name"] = account_name
        try:
            message = template.render(**fields)
        except Exception as exc:
            raise RenderError(f"{kind} template for alert {alert.id}: {exc}") from exc

        logger.debug(f"Alerta {alert.id} renderizado como {kind} (cor={color})")
        return message, color
