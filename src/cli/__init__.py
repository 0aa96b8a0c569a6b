"""Main CLI application module."""

import typer

from src.user_admin.runtime.context import get_config

from .user_commands import users_app

app = typer.Typer(
    help="🛠️  User Admin CLI - manage users through the user admin API",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(users_app, name="users")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind host (defaults to config)"),
    port: int | None = typer.Option(None, help="Bind port (defaults to config)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """🚀 Run the user admin API with uvicorn."""
    import uvicorn

    config = get_config().app
    uvicorn.run(
        "src.user_admin.api.http.app:app",
        host=host or config.host,
        port=port or config.port,
        reload=reload,
        access_log=False,
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
