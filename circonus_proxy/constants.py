import os

# Configurações globais de ambiente
APP_PORT = int(os.getenv("PORT", "3000"))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"

# O payload do Circonus não informa o fuso; vazio = horário local do sistema
ACCOUNT_TIMEZONE = os.getenv("CIRCONUS_WEBHOOK_PROXY_ACCOUNT_TIMEZONE", "").strip()

# Formato em que o Circonus envia as datas (ex: "Mon, 02 Jan 2006 15:04:05")
CIRCONUS_TIME_FORMAT = "%a, %d %b %Y %H:%M:%S"

# Integração com HipChat (API v1)
HIPCHAT_API_TOKEN = os.getenv("CIRCONUS_WEBHOOK_PROXY_HIPCHAT_API_TOKEN", "")
HIPCHAT_API_URL = os.getenv("CIRCONUS_WEBHOOK_PROXY_HIPCHAT_API_URL", "https://api.hipchat.com").rstrip("/")
HIPCHAT_TIMEOUT_SECONDS = float(os.getenv("CIRCONUS_WEBHOOK_PROXY_HIPCHAT_TIMEOUT_SECONDS", "10"))
HIPCHAT_FROM = os.getenv("CIRCONUS_WEBHOOK_PROXY_HIPCHAT_FROM") or "Circonus"

DEFAULT_ALERT_TEMPLATE = (
    "Severity {{ severity }} alert triggered by {{ check_name }} "
    "({{ metric_name }}: {{ value }}). {{ url }}"
)
DEFAULT_RECOVERY_TEMPLATE = "Recovery of {{ check_name }} ({{ metric_name }}: {{ value }}). {{ url }}"

HIPCHAT_ALERT_TEMPLATE = os.getenv("CIRCONUS_WEBHOOK_PROXY_HIPCHAT_ALERT_TEMPLATE") or DEFAULT_ALERT_TEMPLATE
HIPCHAT_RECOVERY_TEMPLATE = os.getenv("CIRCONUS_WEBHOOK_PROXY_HIPCHAT_RECOVERY_TEMPLATE") or DEFAULT_RECOVERY_TEMPLATE

# Cores aceitas pela API v1 do HipChat
HIPCHAT_COLORS = {"yellow", "red", "green", "purple", "gray", "random"}
HIPCHAT_ALERT_COLOR = (os.getenv("CIRCONUS_WEBHOOK_PROXY_HIPCHAT_ALERT_COLOR") or "red").strip().lower()
HIPCHAT_RECOVERY_COLOR = (os.getenv("CIRCONUS_WEBHOOK_PROXY_HIPCHAT_RECOVERY_COLOR") or "green").strip().lower()
