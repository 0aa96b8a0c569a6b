"""User management CLI commands."""

from typing import Any

import typer
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from src.user_admin.entities.core.user import UserCreate, compose_full_name, split_full_name

from . import utils
from .utils import console

users_app = typer.Typer(help="👥 User management commands")

# (field, label, required) per wizard step; the last step is the review
WIZARD_STEPS: list[tuple[str, list[tuple[str, str, bool]]]] = [
    (
        "Basic information",
        [
            ("first_name", "First name", True),
            ("last_name", "Last name", True),
            ("username", "Username", True),
            ("email", "Email", True),
            ("phone", "Phone", False),
        ],
    ),
    (
        "Address",
        [
            ("street", "Street", False),
            ("city", "City", True),
            ("zipcode", "Zip code", False),
            ("state", "State", False),
        ],
    ),
    ("Review", []),
]


def _directory_table(users: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Username", style="green")
    table.add_column("Email", style="blue")
    table.add_column("City", style="blue")
    table.add_column("Source", style="yellow")

    for user in users:
        table.add_row(
            str(user["id"]),
            user["name"],
            user["username"],
            user["email"],
            user["address"]["city"],
            "local" if user.get("is_local") else "external",
        )
    return table


def _local_table(users: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Username", style="green")
    table.add_column("Email", style="blue")
    table.add_column("City", style="blue")

    for user in users:
        table.add_row(
            str(user["id"]), user["name"], user["username"], user["email"], user["city"]
        )
    return table


def _details_panel(user: dict[str, Any], *, local: bool) -> Panel:
    if local:
        address = {
            "street": user.get("street"),
            "city": user.get("city"),
            "zipcode": user.get("zipcode"),
            "state": user.get("state"),
        }
    else:
        address = user.get("address") or {}

    lines = [
        f"[blue]Username:[/blue] {user['username']}",
        f"[blue]Email:[/blue] {user['email']}",
        f"[blue]Phone:[/blue] {user.get('phone') or '-'}",
        "[blue]Address:[/blue] "
        + (", ".join(str(v) for v in address.values() if v) or "-"),
    ]
    if not local:
        lines.append(f"[blue]Website:[/blue] {user.get('website') or '-'}")
        lines.append(
            f"[blue]Company:[/blue] {(user.get('company') or {}).get('name') or '-'}"
        )

    source = "local" if local else "external"
    return Panel(
        "\n".join(lines),
        title=f"[bold cyan]#{user['id']} {user['name']}[/bold cyan] ({source})",
        border_style="cyan",
    )


@users_app.command("list")
def list_users(
    search: str = typer.Option("", "--search", "-s", help="Filter by name or city"),
    local_only: bool = typer.Option(False, "--local", help="Only show local users"),
) -> None:
    """
    📋 List users from the merged directory.

    External users come first, followed by locally created users.
    """
    if local_only:
        users = utils.api_request("GET", "/api/users", params={"search": search} if search else None)
        if not users:
            console.print("[yellow]No local users found[/yellow]")
            return
        console.print(_local_table(users))
        return

    listing = utils.api_request("GET", "/api/directory", params={"q": search})
    if not listing["users"]:
        if search:
            console.print(f'[yellow]No users match "{search}". Try adjusting your search.[/yellow]')
        else:
            console.print("[yellow]No users available to display.[/yellow]")
    else:
        console.print(_directory_table(listing["users"]))

    console.print(
        f"\n[dim]{listing['total']} total users • {listing['local']} local • "
        f"{listing['external']} external[/dim]"
    )


@users_app.command("search")
def search_users(query: str = typer.Argument(..., help="Name or city fragment")) -> None:
    """🔎 Search local users by name or city."""
    users = utils.api_request("GET", "/api/users/search", params={"q": query})
    if not users:
        console.print(f'[yellow]No local users match "{query}"[/yellow]')
        return
    console.print(_local_table(users))


@users_app.command("show")
def show_user(
    user_id: int = typer.Argument(..., help="User ID"),
    external: bool = typer.Option(False, "--external", help="Look up an external user"),
) -> None:
    """🔍 Show the details of one user."""
    path = f"/api/external-users/{user_id}" if external else f"/api/users/{user_id}"
    user = utils.api_request("GET", path)
    console.print(_details_panel(user, local=not external))


@users_app.command("external")
def list_external(
    refresh: bool = typer.Option(False, "--refresh", help="Bypass the cached snapshot"),
) -> None:
    """🌐 List users from the external source."""
    users = utils.api_request(
        "GET", "/api/external-users", params={"refresh": "true"} if refresh else None
    )
    console.print(_directory_table(users))


def _prompt_field(label: str, required: bool) -> str:
    while True:
        value = typer.prompt(label, default="", show_default=False).strip()
        if value or not required:
            return value
        console.print(f"[red]{label} is required[/red]")


def run_wizard(values: dict[str, str | None]) -> dict[str, str | None]:
    """Collect missing fields step by step; pre-supplied values are kept.

    A step is only shown when one of its required fields is missing; it then
    asks for every field of the step that was not supplied.
    """
    total = len(WIZARD_STEPS)
    for index, (title, fields) in enumerate(WIZARD_STEPS, start=1):
        missing = [f for f in fields if values.get(f[0]) is None]
        if not any(required for _, _, required in missing):
            continue
        console.print(f"\n[bold cyan]Step {index} of {total}: {title}[/bold cyan]")
        for field, label, required in missing:
            values[field] = _prompt_field(label, required)
    return values


def build_create_payload(values: dict[str, str | None]) -> dict[str, str | None]:
    """Turn wizard values into the create request body."""
    payload = {
        "name": compose_full_name(values.get("first_name") or "", values.get("last_name") or ""),
    }
    for field in ("username", "email", "phone", "street", "city", "zipcode", "state"):
        payload[field] = values.get(field) or None
    return payload


@users_app.command("add")
def add_user(
    first_name: str | None = typer.Option(None, "--first-name", help="First name"),
    last_name: str | None = typer.Option(None, "--last-name", help="Last name"),
    username: str | None = typer.Option(None, "--username", "-u", help="Username"),
    email: str | None = typer.Option(None, "--email", "-e", help="Email address"),
    phone: str | None = typer.Option(None, "--phone", help="Phone number"),
    street: str | None = typer.Option(None, "--street", help="Street"),
    city: str | None = typer.Option(None, "--city", help="City"),
    zipcode: str | None = typer.Option(None, "--zipcode", help="Zip code"),
    state: str | None = typer.Option(None, "--state", help="State"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the review confirmation"),
) -> None:
    """
    ➕ Add a new local user.

    Fields not given as options are asked for in three steps: basic
    information, address, and a final review.
    """
    console.print(Panel.fit("[bold green]Add New User[/bold green]", border_style="green"))

    values = run_wizard(
        {
            "first_name": first_name,
            "last_name": last_name,
            "username": username,
            "email": email,
            "phone": phone,
            "street": street,
            "city": city,
            "zipcode": zipcode,
            "state": state,
        }
    )
    payload = build_create_payload(values)

    try:
        UserCreate.model_validate(payload)
    except ValidationError as e:
        console.print("[red]❌ Invalid user data[/red]")
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"[red]  • {field}: {error['msg']}[/red]")
        raise typer.Exit(1) from None

    review = Table(show_header=False, box=None)
    review.add_column("Field", style="blue")
    review.add_column("Value")
    for field, value in payload.items():
        review.add_row(field, value or "-")
    console.print(f"\n[bold cyan]Step {len(WIZARD_STEPS)} of {len(WIZARD_STEPS)}: Review[/bold cyan]")
    console.print(review)

    if not yes and not typer.confirm("Create this user?", default=True):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(0)

    user = utils.api_request("POST", "/api/users", json=payload)
    console.print(f"[green]✅ User '{user['username']}' created with ID {user['id']}[/green]")


@users_app.command("update")
def update_user(
    user_id: int = typer.Argument(..., help="User ID"),
    first_name: str | None = typer.Option(None, "--first-name", help="First name"),
    last_name: str | None = typer.Option(None, "--last-name", help="Last name"),
    username: str | None = typer.Option(None, "--username", "-u", help="Username"),
    email: str | None = typer.Option(None, "--email", "-e", help="Email address"),
    phone: str | None = typer.Option(None, "--phone", help="Phone number"),
    street: str | None = typer.Option(None, "--street", help="Street"),
    city: str | None = typer.Option(None, "--city", help="City"),
    zipcode: str | None = typer.Option(None, "--zipcode", help="Zip code"),
    state: str | None = typer.Option(None, "--state", help="State"),
) -> None:
    """✏️ Update fields of a local user; omitted fields are left unchanged."""
    changes: dict[str, str] = {
        field: value
        for field, value in {
            "username": username,
            "email": email,
            "phone": phone,
            "street": street,
            "city": city,
            "zipcode": zipcode,
            "state": state,
        }.items()
        if value is not None
    }

    if first_name is not None or last_name is not None:
        current = utils.api_request("GET", f"/api/users/{user_id}")
        current_first, current_last = split_full_name(current["name"])
        changes["name"] = compose_full_name(
            first_name if first_name is not None else current_first,
            last_name if last_name is not None else current_last,
        )

    if not changes:
        console.print("[yellow]Nothing to update[/yellow]")
        return

    user = utils.api_request("PUT", f"/api/users/{user_id}", json=changes)
    console.print(f"[green]✅ User {user['id']} updated[/green]")
    console.print(_details_panel(user, local=True))
