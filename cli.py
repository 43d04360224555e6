# cli.py - interactive terminal client for the catalog API
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from catalog_sdk.client import CatalogClient

console = Console()
c = CatalogClient(base_url=os.getenv("CATALOG_API_URL", "http://127.0.0.1:8080"))

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
cart_cache = set()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Title", style="bold", width=20)
    table.add_column("Code", width=10)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Category", width=15)
    table.add_column("Available", width=9)

    for p in products:
        table.add_row(
            p.get("id", "N/A"),
            p.get("title", "N/A"),
            p.get("code", "N/A"),
            f"${p.get('price', 0):.2f}",
            str(p.get("stock", 0)),
            p.get("category", "N/A"),
            "[green]yes[/green]" if p.get("status") else "[red]no[/red]",
        )
    console.print(table)


def show_page(page: Dict[str, Any]):
    show_products(page.get("payload", []),
                  title=f"📦 Products - page {page.get('page')} of {page.get('totalPages')}")
    nav = []
    if page.get("hasPrevPage"):
        nav.append(f"prev: {page.get('prevLink')}")
    if page.get("hasNextPage"):
        nav.append(f"next: {page.get('nextLink')}")
    if nav:
        console.print("[dim]" + "  |  ".join(nav) + "[/dim]")


def show_cart(cart: Dict[str, Any]):
    if not cart:
        console.print("[italic yellow]No cart data[/italic yellow]")
        return

    lines = cart.get("products", [])
    total = sum(l["product"].get("price", 0) * l.get("quantity", 0) for l in lines if l.get("product"))

    title = Text()
    title.append("🛒 Cart ", style="bold")
    title.append(cart.get("id", "Unknown"), style="bold cyan")
    title.append(f" - Total: ${total:.2f}", style="bold green")

    if not lines:
        console.print(Panel("This cart is empty 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Qty", justify="right", width=8)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Subtotal", justify="right", width=12)

    for line in lines:
        product = line.get("product")
        if product:
            price = product.get("price", 0)
            table.add_row(
                product.get("title", "Unknown"),
                str(line.get("quantity", 0)),
                f"${price:.2f}",
                f"${price * line.get('quantity', 0):.2f}"
            )
        else:
            table.add_row(
                f"[red]Missing product: {line.get('productId', 'Unknown')}[/red]",
                str(line.get("quantity", "-")),
                "-",
                "-"
            )

    console.print(Panel(table, title=title, border_style="blue"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper with exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner and returns its result.
    Errors are reported in the status panel and come back as None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache():
    global product_cache
    page = try_api(c.list_products, limit=100) or {}
    product_cache = page.get("payload", [])


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_category_completer():
    if not product_cache:
        refresh_product_cache()
    return WordCompleter(sorted({p.get("category", "") for p in product_cache if p.get("category")}), ignore_case=True)


def get_cart_completer():
    return WordCompleter(list(cart_cache), ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_cart_id() -> str:
    cid = prompt_with_autocomplete("Enter cart ID", completer=get_cart_completer()).strip()
    if cid:
        cart_cache.add(cid)
    return cid


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    header.add_row(
        "🛍️ Catalog client",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{datetime.now().strftime('%Y-%m-%d %H:%M:%S')}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Actions
# ---------------------------
def list_products_action():
    category = prompt_with_autocomplete("Category (blank for all)", completer=get_category_completer()).strip()
    query = Prompt.ask("Title contains", default="").strip()
    sort = Prompt.ask("Sort by price", choices=["none", "asc", "desc"], default="none")
    availability = Prompt.ask("Availability", choices=["any", "true", "false"], default="any")
    limit = IntPrompt.ask("Page size", default=10)
    page = IntPrompt.ask("Page", default=1)
    result = try_api(
        c.list_products,
        limit=limit,
        page=page,
        sort=None if sort == "none" else sort,
        query=query or None,
        category=category or None,
        availability=None if availability == "any" else availability == "true",
        success_msg="Products loaded successfully",
    )
    if result is not None:
        show_page(result)


def create_product_action():
    title = prompt_with_autocomplete("Title")
    description = prompt_with_autocomplete("Description")
    code = prompt_with_autocomplete("Code")
    price = ask_float("💰 Price", default=10.0)
    stock = IntPrompt.ask("📦 Stock", default=1)
    category = prompt_with_autocomplete("🏷️ Category", completer=get_category_completer())
    raw_thumbs = Prompt.ask("Thumbnails (comma separated)", default="")
    thumbnails = [t.strip() for t in raw_thumbs.split(",") if t.strip()]
    resp = try_api(c.create_product, title, description, code, price, stock, category, thumbnails,
                   success_msg=f"Product '{title}' created")
    if resp:
        show_products([resp])
        refresh_product_cache()


def update_product_action():
    pid = prompt_with_autocomplete("Product ID", completer=get_product_completer()).strip()
    current = try_api(c.get_product, pid)
    if not current:
        return
    fields: Dict[str, Any] = {}
    for name in ("title", "description", "code", "category"):
        value = Prompt.ask(name.capitalize(), default=str(current.get(name, "")))
        if value != current.get(name):
            fields[name] = value
    price = ask_float("Price", default=current.get("price", 0))
    if price != current.get("price"):
        fields["price"] = price
    stock = IntPrompt.ask("Stock", default=current.get("stock", 0))
    if stock != current.get("stock"):
        fields["stock"] = stock
    status = Confirm.ask("Available?", default=bool(current.get("status", True)))
    if status != current.get("status"):
        fields["status"] = status
    resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
    if resp:
        show_products([resp])
        refresh_product_cache()


def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_product_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "6", "🛒 View cart"),
            ("2", "ℹ️ Get product by ID", "7", "🔢 Set quantity in cart"),
            ("3", "➕ Create product", "8", "➖ Remove from cart"),
            ("4", "✏️ Update product", "9", "🗑️ Delete cart"),
            ("5", "❌ Delete product", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 10)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            list_products_action()

        elif choice == "2":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
            if resp:
                show_products([resp])

        elif choice == "3":
            create_product_action()

        elif choice == "4":
            update_product_action()

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                refresh_product_cache()

        elif choice == "6":
            cid = ask_cart_id()
            resp = try_api(c.get_cart, cid, success_msg=f"Cart {cid} loaded")
            if resp:
                show_cart(resp)

        elif choice == "7":
            cid = ask_cart_id()
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            qty = IntPrompt.ask("Quantity", default=1)
            resp = try_api(c.set_cart_quantity, cid, pid, qty, success_msg=f"Quantity of {pid} set to {qty}")
            if resp is not None:
                cart_view = try_api(c.get_cart, cid)
                if cart_view:
                    show_cart(cart_view)

        elif choice == "8":
            cid = ask_cart_id()
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.remove_from_cart, cid, pid)
            if resp is not None:
                console.print(show_status(resp.get("message", str(resp)), "not found" not in resp.get("message", "")))
                cart_view = try_api(c.get_cart, cid)
                if cart_view:
                    show_cart(cart_view)

        elif choice == "9":
            cid = ask_cart_id()
            if Confirm.ask(f"[red]Delete cart {cid}?[/red]"):
                if try_api(c.delete_cart, cid, success_msg=f"Cart {cid} deleted") is not None:
                    cart_cache.discard(cid)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
