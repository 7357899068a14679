import typer

from docsplice.cli.annotate import annotate, locate, scan

app = typer.Typer(
    name="docsplice",
    help="docsplice CLI — add TSDoc comments to undocumented TypeScript declarations.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("annotate")(annotate)
app.command("scan")(scan)
app.command("locate")(locate)


def main() -> None:
    app()
