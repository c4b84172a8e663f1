"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .init import init_command
from .record import record_command
from .recommend import explain_command, recommend_command

app = typer.Typer(
    name="puzzlefeed",
    help="Puzzle feed ranking - personalized puzzle recommendations",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("recommend")(recommend_command)
app.command("explain")(explain_command)
app.command("record")(record_command)


if __name__ == "__main__":
    app()
