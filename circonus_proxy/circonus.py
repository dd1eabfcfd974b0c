"""Modelo do payload enviado pelo webhook do Circonus.

O Circonus manda o valor do alerta ora como string, ora como número, e as
datas num formato próprio sem fuso horário. Os tipos ``AlertValue`` e
``AlertTime`` isolam essa decodificação; ``parse_payload`` cuida do resto via
pydantic. O fuso da conta é passado explicitamente pelo contexto de validação.
"""
import json
import re
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from .constants import CIRCONUS_TIME_FORMAT
from .errors import ConfigError, DecodeError, TimeParseError


def load_account_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Resolve o fuso IANA da conta. Nome vazio significa horário local (None)."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Could not parse timezone location: {name}") from exc


# Layout fixo: dia com dois dígitos, sem espaços extras
_CIRCONUS_TIME_RE = re.compile(r"[A-Z][a-z]{2}, \d{2} [A-Z][a-z]{2} \d{4} \d{2}:\d{2}:\d{2}")


class JsonFloat:
    """Número JSON não inteiro, guardado com o texto literal recebido.

    Não é ``str`` para que campos de texto e inteiros continuem rejeitando
    números; só ``AlertValue`` o aceita.
    """

    __slots__ = ("text",)

    def __init__(self, text: str):
        self.text = text

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return self.text


def _strip_quotes(raw) -> str:
    return str(raw).strip('"')


@dataclass(frozen=True)
class AlertValue:
    value: str = ""

    @classmethod
    def parse(cls, raw) -> "AlertValue":
        # Nunca falha: qualquer escalar JSON vira sua forma textual
        if raw is None:
            return cls()
        if isinstance(raw, bool):
            return cls("true" if raw else "false")
        return cls(_strip_quotes(raw))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AlertTime:
    time: Optional[datetime] = None

    @classmethod
    def parse(cls, raw, tz: Optional[tzinfo] = None) -> "AlertTime":
        if raw is None:
            return cls()
        if not isinstance(raw, str):
            raise TimeParseError(f"expected a quoted time string, got {raw!r}")
        text = _strip_quotes(raw)
        if text == "":
            return cls()
        if not _CIRCONUS_TIME_RE.fullmatch(text):
            raise TimeParseError(f"could not parse time {text!r}: expected format 'Mon, 02 Jan 2006 15:04:05'")
        try:
            naive = datetime.strptime(text, CIRCONUS_TIME_FORMAT)
        except ValueError as exc:
            raise TimeParseError(f"could not parse time {text!r}: {exc}") from exc
        if tz is None:
            return cls(naive.astimezone())
        return cls(naive.replace(tzinfo=tz))

    def is_zero(self) -> bool:
        return self.time is None

    def __str__(self) -> str:
        if self.time is None:
            return ""
        return self.time.strftime(CIRCONUS_TIME_FORMAT)


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, populate_by_name=True)

    id: StrictInt = Field(0, alias="alert_id")
    severity: StrictInt = 0
    value: AlertValue = Field(default_factory=AlertValue, alias="alert_value")
    time: AlertTime = Field(default_factory=AlertTime, alias="alert_time")
    url: StrictStr = Field("", alias="alert_url")
    agent: StrictStr = ""
    check_name: StrictStr = ""
    metric_name: StrictStr = ""

    # Preenchidos apenas quando o alerta se recuperou
    clear_time: AlertTime = Field(default_factory=AlertTime)
    clear_value: AlertValue = Field(default_factory=AlertValue)

    @field_validator("value", "clear_value", mode="before")
    @classmethod
    def _decode_value(cls, raw):
        if isinstance(raw, AlertValue):
            return raw
        return AlertValue.parse(raw)

    @field_validator("time", "clear_time", mode="before")
    @classmethod
    def _decode_time(cls, raw, info: ValidationInfo):
        if isinstance(raw, AlertTime):
            return raw
        tz = (info.context or {}).get("timezone")
        return AlertTime.parse(raw, tz)

    def is_recovery(self) -> bool:
        return not self.clear_time.is_zero()

    def template_fields(self) -> dict:
        return {
            "id": self.id,
            "severity": self.severity,
            "value": self.value,
            "time": self.time,
            "url": self.url,
            "agent": self.agent,
            "check_name": self.check_name,
            "metric_name": self.metric_name,
            "clear_time": self.clear_time,
            "clear_value": self.clear_value,
        }


class Payload(BaseModel):
    model_config = ConfigDict(frozen=True)

    account_name: StrictStr = ""
    alerts: List[Alert] = Field(default_factory=list)

    @field_validator("alerts", mode="before")
    @classmethod
    def _null_alerts(cls, raw):
        return [] if raw is None else raw


def parse_payload(body, tz: Optional[tzinfo] = None) -> Payload:
    """Decodifica o corpo da requisição num ``Payload``.

    Levanta ``DecodeError`` se o corpo não for JSON ou não tiver o formato
    esperado, e ``TimeParseError`` (subclasse) se alguma data for inválida.
    """
    try:
        # JsonFloat preserva o texto literal de números como alert_value
        data = json.loads(body, parse_float=JsonFloat)
    except (TypeError, ValueError, RecursionError) as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc

    try:
        return Payload.model_validate(data, context={"timezone": tz})
    except ValidationError as exc:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}" for err in exc.errors()
        )
        raise DecodeError(f"unexpected payload shape: {errors}") from exc
