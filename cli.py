# cli.py
import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, Prompt
from rich.table import Table

from pydantic import ValidationError
from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.cache import ProductCache, ProductSync, SyncPolicy
from sdk.config import get_settings
from sdk.errors import ProductClientError
from sdk.models import Product
from sdk.productos import ProductClient

console = Console()
status_message = "Ready"

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


def setup_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Product]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Productos",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", justify="right", width=6)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Image", width=30)

    for p in products:
        table.add_row(str(p.id), p.name, f"{p.price:.2f}", p.image_url or "-")
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None):
    """
    Calls fn(*args) behind a spinner. Client errors become a red status
    panel and a None result; the cache is whatever it was before the call.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args)
    except ProductClientError as e:
        status_message = f"Error: {e}"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_price(message: str, default: float = 0.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            price = float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")
            continue
        if price < 0:
            console.print("[red]Price cannot be negative.[/red]")
            continue
        return price


def id_completer(cache: ProductCache):
    return WordCompleter([str(i) for i in cache.ids()])


def ask_product_id(cache: ProductCache) -> Optional[int]:
    raw = prompt_with_autocomplete("Enter product ID", completer=id_completer(cache)).strip()
    try:
        return int(raw)
    except ValueError:
        console.print(show_status(f"'{raw}' is not a product id", False))
        return None


def create_header(policy: SyncPolicy):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ productos",
        f"[bold blue]Product manager[/bold blue] [dim](sync: {policy.value})[/dim]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Interactive menu
# ---------------------------
def menu(sync: ProductSync):
    global status_message

    console.clear()
    console.print(create_header(sync.policy))
    try_api(sync.refresh, success_msg="Products loaded")

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_row("1", "📦 Show cached products")
        menu_table.add_row("2", "🔄 Reload from server")
        menu_table.add_row("3", "➕ Add product")
        menu_table.add_row("4", "✏️ Update product")
        menu_table.add_row("5", "🗑️ Delete product")
        menu_table.add_row("6", "⚙️ Toggle sync policy")
        menu_table.add_row("q", "👋 Quit")
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "4", "5", "6", "q", "quit", "exit"])
        ).strip()

        if choice == "1":
            show_products(sync.cache.products)

        elif choice == "2":
            if try_api(sync.refresh, success_msg="Products reloaded") is not None:
                show_products(sync.cache.products)

        elif choice == "3":
            name = prompt_with_autocomplete("Enter product name").strip()
            price = ask_price("💰 Price")
            image_url = prompt_with_autocomplete("🖼️ Image URL (optional)").strip() or None
            created = try_api(sync.create, Product.draft(name, price, image_url),
                              success_msg=f"Product '{name}' created")
            if created:
                show_products([created])

        elif choice == "4":
            pid = ask_product_id(sync.cache)
            if pid is None:
                continue
            current = sync.cache.get(pid)
            name = prompt_with_autocomplete("Enter product name",
                                            default=current.name if current else "").strip()
            price = ask_price("💰 Price", default=current.price if current else 0.0)
            image_url = prompt_with_autocomplete(
                "🖼️ Image URL (optional)",
                default=(current.image_url or "") if current else "",
            ).strip() or None
            updated = try_api(sync.update, pid, Product.draft(name, price, image_url),
                              success_msg=f"Product {pid} updated")
            if updated:
                show_products([updated])

        elif choice == "5":
            pid = ask_product_id(sync.cache)
            if pid is None:
                continue
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(sync.delete, pid, success_msg=f"Product {pid} deleted")

        elif choice == "6":
            sync.policy = SyncPolicy.REFETCH if sync.policy is SyncPolicy.PATCH else SyncPolicy.PATCH
            status_message = f"Sync policy: {sync.policy.value}"
            console.print(show_status(status_message))

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                return

        console.print()
        console.rule(style="dim")


# ---------------------------
# One-shot commands
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="productos CLI")
    parser.add_argument("--base-url", help="Override PRODUCTOS_BASE_URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List all products")

    cp = subparsers.add_parser("create", help="Create a product")
    cp.add_argument("--name", required=True, help="Product name")
    cp.add_argument("--price", type=float, required=True, help="Product price")
    cp.add_argument("--image-url", help="Optional image URL")

    up = subparsers.add_parser("update", help="Replace a product")
    up.add_argument("--id", type=int, required=True, help="ID of the product")
    up.add_argument("--name", required=True, help="Product name")
    up.add_argument("--price", type=float, required=True, help="Product price")
    up.add_argument("--image-url", help="Optional image URL")

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("--id", type=int, required=True, help="ID of the product")

    ip = subparsers.add_parser("interactive", help="Interactive product manager")
    ip.add_argument("--policy", choices=[p.value for p in SyncPolicy], default=SyncPolicy.PATCH.value,
                    help="How the local list follows mutations")
    return parser


def run(args: argparse.Namespace, c: ProductClient) -> int:
    if args.command == "interactive":
        menu(ProductSync(c, ProductCache(), SyncPolicy(args.policy)))
        return 0

    try:
        if args.command == "list":
            show_products(c.list_products())
        elif args.command == "create":
            show_products([c.create_product(Product.draft(args.name, args.price, args.image_url))])
        elif args.command == "update":
            show_products([c.update_product(args.id, Product.draft(args.name, args.price, args.image_url))])
        elif args.command == "delete":
            c.delete_product(args.id)
            console.print(show_status(f"Product {args.id} deleted"))
    except ValidationError as e:
        console.print(show_status(f"Invalid product: {e.errors()[0]['msg']}", False))
        return 2
    except ProductClientError as e:
        console.print(show_status(f"Error: {e}", False))
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)
    with ProductClient(base_url=args.base_url) as c:
        return run(args, c)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
