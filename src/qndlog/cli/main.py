"""qndlog CLI entry point."""

import typer
from rich.console import Console

app = typer.Typer(
    name="qndlog",
    help="Quick and dirty JSON entry log",
    no_args_is_help=True,
    invoke_without_command=True,
)

console = Console()


@app.callback()
def main(
    show_version: bool = typer.Option(
        False, "--version", "-V", help="Show version and exit"
    ),
) -> None:
    """qndlog: quick and dirty JSON entry log."""
    if show_version:
        from qndlog import __version__

        console.print(f"qndlog {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """Show qndlog version."""
    from qndlog import __version__

    console.print(f"qndlog {__version__}")


from qndlog.cli.add import add
from qndlog.cli.show import show

app.command()(add)
app.command()(show)


if __name__ == "__main__":
    app()
