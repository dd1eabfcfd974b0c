import argparse
import logging
import sys

from .circonus import load_account_timezone
from .constants import ACCOUNT_TIMEZONE, APP_PORT, DEBUG_MODE
from .controller import create_app
from .errors import ConfigError
from .handlers import HANDLER_CLASSES

DESCRIPTION = """
Contains plugins for proxying Circonus webhook requests to non-natively supported services (e.g. Hipchat).
See http://www.circonus.com/webhook-notifications for more information.

Reads the following environment configuration globally:
PORT: Port to listen on (defaults to 3000).
CIRCONUS_WEBHOOK_PROXY_ACCOUNT_TIMEZONE: Timezone your Circonus organization
    account is in (this information is not included in the webhook payload).
    Expects locations to be in IANA Time Zone format.
    Defaults to local system time.
DEBUG_MODE: Enables debug logging (defaults to false).
"""


def plugins_help(handler_classes=HANDLER_CLASSES) -> str:
    parts = ["Plugins:", ""]
    for handler in handler_classes:
        parts.append(f"{handler.name} - {handler.route}")
        parts.append(handler.usage())
    return "\n".join(parts)


def build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="circonus-webhook-proxy",
        description=DESCRIPTION,
        epilog=plugins_help(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )


def main(argv=None) -> int:
    parser = build_parser()
    parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if DEBUG_MODE else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        timezone = load_account_timezone(ACCOUNT_TIMEZONE)
        app = create_app(timezone=timezone)
    except ConfigError as exc:
        print(exc)
        parser.print_help(sys.stderr)
        return 1

    # use_reloader=False: o reloader iniciaria o processo duas vezes
    app.run(host='0.0.0.0', port=APP_PORT, debug=DEBUG_MODE, use_reloader=False)
    return 0
