"""Package logger: standard records through Rich, plus the few console lines the CLI prints."""

import logging
from collections.abc import Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape


class GraphQLImportLogger(logging.Logger):
    """
    Logger whose records are rendered by a RichHandler on a shared console.

    The console helpers bypass log levels: they are CLI output, not diagnostics.
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        super().__init__(name, level)
        self.console = Console()

        handler = RichHandler(console=self.console, rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.addHandler(handler)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def hint(self, message: str) -> None:
        self.console.print(escape(message), style="dim")

    def rule(self, title: str) -> None:
        self.console.rule(f"[bold blue]{escape(title)}")

    def import_request(self, imports: Sequence[str], source: str) -> None:
        """Print one import line as `- A, B from source`, the source highlighted."""
        self.console.print(f"- {', '.join(imports)} from [cyan]{escape(source)}[/cyan]")


def get_logger(name: str = "graphql_import") -> GraphQLImportLogger:
    """
    Get or create a graphql-import logger instance.

    Records are not propagated to the root logger, which would print them a second time.
    """
    previous_class = logging.getLoggerClass()
    logging.setLoggerClass(GraphQLImportLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(previous_class)

    logger.propagate = False
    return logger  # type: ignore[return-value]
