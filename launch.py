import argparse
import logging
import sys

import discord
from colorama import Fore, Style

from capturebot import config
from capturebot.console import print_colored, print_status_header
from capturebot.errors import ConfigurationError
from capturebot.live_monitor import start_monitoring
from capturebot.log_simulator import SimulationManager
from capturebot.notifier import DiscordNotifier
from capturebot.state import CaptureService
from capturebot.webserver import create_app, start_server

SUBTITLES = {
    "watch": "Auto generated from server.log",
    "http": "Created via capture control endpoint",
}


# choice -> (label, hint, mode, test_mode)
MENU = {
    "1": ("Log Watch", "announce captures written to the server log", "watch", False),
    "2": ("HTTP Control", "start captures / declare winners over HTTP", "http", False),
    "3": ("Test Mode", "watch a simulated log built from test files", "watch", True),
}


def choose_mode():
    """Ask for a mode on the console; returns (mode, test_mode)."""
    print_colored("\nCAPTURE BOT", Fore.CYAN, Style.BRIGHT)
    for key, (label, hint, _, _) in MENU.items():
        print_colored(f"  {key}. {label}", Fore.GREEN, end="")
        print_colored(f"  - {hint}", Fore.WHITE, Style.DIM)
    print_colored("  q. Exit", Fore.RED)

    while True:
        try:
            choice = input(f"{Fore.CYAN}Mode [1-3, q]: {Style.RESET_ALL}").strip().lower()
        except (KeyboardInterrupt, EOFError):
            choice = "q"
        if choice == "q":
            print_colored("Goodbye!", Fore.CYAN)
            sys.exit(0)
        if choice in MENU:
            _, _, mode, test_mode = MENU[choice]
            return mode, test_mode
        print_colored("Invalid choice.", Fore.RED)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Capture notifier bot")
    parser.add_argument("--mode", choices=config.MODES, help="ingress variant (default: MODE env or menu)")
    parser.add_argument("--test", action="store_true", help="watch a simulated log instead of LOG_PATH")
    args = parser.parse_args(argv)
    if args.test and args.mode == "http":
        parser.error("--test replays a log file and only works with --mode watch")
    return args


def run(mode, token, test_mode=False):
    """Wire the service, web server and Discord client for one mode, then block on the bot."""
    config.ensure_directories()
    print_status_header(f"{mode} (test)" if test_mode else mode)

    client = discord.Client(intents=discord.Intents.default())
    notifier = DiscordNotifier(client, config.parse_channel_id())
    service = CaptureService(config.WEB_DIR, config.SITE_URL, notifier, subtitle=SUBTITLES[mode])

    app = create_app(service, config.WEB_DIR, control=(mode == "http"))
    start_server(app, config.WEB_SERVER_HOST, config.WEB_SERVER_PORT)
    print_colored(f"🌐 Web server running at http://localhost:{config.WEB_SERVER_PORT}", Fore.GREEN)

    log_path = config.SIMULATED_LOG_FILE if test_mode else config.LOG_PATH
    simulation_manager = SimulationManager(quiet=True) if test_mode else None
    running = {}

    @client.event
    async def on_ready():
        print_colored(f"🤖 Bot logged in as {client.user}", Fore.GREEN, Style.BRIGHT)
        # on_ready fires again after reconnects
        if mode != "watch" or "watcher" in running:
            return
        if simulation_manager:
            log_path.touch()
        running["watcher"] = start_monitoring(service, log_path)
        if simulation_manager:
            simulation_manager.start()
            print_colored("✓ Simulation running in background", Fore.GREEN)

    try:
        client.run(token, log_handler=None)
    except discord.LoginFailure as e:
        logging.error(f"Login failed: {e}")
        print_colored(f"❌ Login failed: {e}", Fore.RED)
        sys.exit(1)
    finally:
        if "watcher" in running:
            running["watcher"].stop()
        if simulation_manager:
            simulation_manager.stop()


def main(argv=None):
    """Main entry point."""
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO), format=config.LOG_FORMAT)
    args = parse_args(argv)

    try:
        token = config.require_token()
        config.parse_channel_id()
    except ConfigurationError as e:
        print_colored(f"❌ {e}", Fore.RED)
        sys.exit(1)

    for issue in config.validate_config():
        logging.warning(issue)

    mode, test_mode = args.mode, args.test
    if test_mode:
        mode = "watch"
    elif mode is None and sys.stdin.isatty():
        mode, test_mode = choose_mode()
    elif mode is None:
        mode = config.DEFAULT_MODE if config.DEFAULT_MODE in config.MODES else "watch"

    try:
        run(mode, token, test_mode=test_mode)
    except KeyboardInterrupt:
        print_colored("\nStopped by user (Ctrl+C).", Fore.YELLOW)


if __name__ == "__main__":
    main()
