import typer
from cosmos2xlsx.commands import config, logs
from cosmos2xlsx.commands.export import create_export_command
from cosmos2xlsx.logging import log_application_event, setup_logging

app = typer.Typer(
    help="[bold blue]cosmos2xlsx[/bold blue] - Export Cosmos DB containers to XLSX files",
    rich_markup_mode="rich",
)

# Add command groups
app.add_typer(config.app, name="config")
app.add_typer(logs.app, name="logs")

# Add standalone commands
app.command("export")(create_export_command())


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context):
    """
    [bold blue]cosmos2xlsx[/bold blue] - Export Cosmos DB containers to XLSX files

    One workbook per container, one row per document, one column per property.
    """
    if not ctx.invoked_subcommand:
        print("Export Cosmos DB containers to XLSX. To proceed type cosmos2xlsx --help")


def main():
    setup_logging()
    log_application_event("started")

    try:
        app()
    except Exception as e:
        log_application_event(f"unhandled exception: {e}", level="error")
        raise
    finally:
        log_application_event("finished", level="debug")


if __name__ == "__main__":
    main()
