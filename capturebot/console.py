from colorama import init, Fore, Style

init(autoreset=True)


def print_colored(text, color=Fore.WHITE, style=Style.NORMAL, end="\n"):
    """Print colored text to the console."""
    print(f"{style}{color}{text}{Style.RESET_ALL}", end=end)


def print_status_header(mode="watch"):
    """Print a status header with current mode."""
    status_color = Fore.GREEN if mode == "watch" else Fore.YELLOW
    print_colored(f"\n{'='*60}", Fore.BLUE)
    print_colored(f"CAPTURE BOT - {mode.upper()} MODE", status_color, Style.BRIGHT)
    print_colored(f"{'='*60}", Fore.BLUE)
