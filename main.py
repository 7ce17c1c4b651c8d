import argparse
import logging
import sys

from icecream import ic

from core.abstract import App
from core.config import get_settings


def main() -> int:
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.server_debug else logging.INFO,
        format="[%(asctime)s] [%(levelname)-8s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ic.configureOutput(prefix="🍦 DEBUG | ")
    if not settings.server_debug:
        ic.disable()

    parser = argparse.ArgumentParser(description="PUBG Discord Bot")
    parser.add_argument(
        "--mode",
        "-m",
        choices=["server", "commands"],
        default="server",
        help="'server' serves the interactions endpoint, 'commands' registers slash commands "
        "(default: server)",
    )
    args = parser.parse_args()

    app_cls: type[App] | None = None
    if args.mode == "server":
        from server.app import ServerApp

        app_cls = ServerApp
    elif args.mode == "commands":
        from server.commands import CommandInstallerApp

        app_cls = CommandInstallerApp

    if app_cls is None:
        return 1

    app = app_cls(settings)
    return app.run() or 0


if __name__ == "__main__":
    sys.exit(main())
