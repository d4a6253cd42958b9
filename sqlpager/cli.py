"""
CLI tool for inspecting pagination rewrites.

Provides commands for listing the registered dialects and rendering the count
and page queries a dialect produces for a statement.
"""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from sqlpager.dialects import DIALECTS, select_dialect
from sqlpager.dialects.sql_utils import is_select
from sqlpager.exceptions import DialectUnsupportedError
from sqlpager.schemas.page import OrderType, Page

# Initialize Typer app with help text
typer_app = typer.Typer(
    name="sqlpager",
    help="SQL pagination CLI - Inspect count and page query rewriting",
    add_completion=False,
)
console = Console()


def _parse_order(value: str) -> tuple[str, OrderType]:
    """
    Parse a "column[:direction]" order option.

    Raises:
        typer.BadParameter: If the direction is not asc/desc.
    """
    column, _, direction = value.partition(":")
    try:
        return column.strip(), OrderType(direction or OrderType.ASC.value)
    except ValueError as ex:
        raise typer.BadParameter(
            f"Invalid order direction in '{value}', use asc or desc"
        ) from ex


@typer_app.command(name="dialects")
def dialects():
    """
    Display a table of all registered dialect names.

    Example:
        sqlpager dialects
    """
    table = Table(
        "Name",
        "Dialect Class",
        title="Registered Dialects",
        show_lines=True,
    )
    for name, dialect_cls in sorted(DIALECTS.items()):
        table.add_row(
            f"[green]{name}[/green]",
            f"{dialect_cls.__module__}.[yellow]{dialect_cls.__name__}[/yellow]",
        )

    console.print()
    console.print(table)
    console.print()


@typer_app.command(name="render")
def render(
    sql: str = typer.Argument(..., help="SELECT statement to paginate"),
    dialect: str = typer.Option(
        "generic", "--dialect", "-d", help="Dialect name or module:Class"
    ),
    page_num: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
    page_size: int = typer.Option(
        10, "--size", "-s", min=1, help="Rows per page"
    ),
    order: list[str] = typer.Option(
        [], "--order", "-o", help="Order column as column[:asc|desc]"
    ),
):
    """
    Render the count and page queries for a statement.

    Example:
        sqlpager render "SELECT * FROM users WHERE active = :active" \\
            --dialect oracle --page 2 --size 20 --order name --order id:desc
    """
    try:
        selected = select_dialect(dialect)
    except DialectUnsupportedError as ex:
        console.print(f"[red]✗ {ex}[/red]")
        raise typer.Exit(code=1)

    if not is_select(sql):
        console.print("[red]✗ Only SELECT statements can be paginated[/red]")
        raise typer.Exit(code=1)

    try:
        page = Page(
            page_num=page_num,
            page_size=page_size,
            orders=dict(_parse_order(value) for value in order),
        )
    except ValueError as ex:
        console.print(f"[red]✗ {ex}[/red]")
        raise typer.Exit(code=1)

    count_sql = selected.build_count_sql(sql, page, None)
    page_sql = selected.build_page_sql(
        sql, page, page.offset, page.limit, page.orders
    )

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]{selected.name}[/bold cyan] "
            f"page {page.page_num}, size {page.page_size} "
            f"(offset {page.offset}, limit {page.limit})",
            border_style="cyan",
        )
    )
    console.print(Panel(Text(count_sql.sql), title="Count query", expand=False))
    console.print(Panel(Text(page_sql.sql), title="Page query", expand=False))
    console.print()


def main():
    typer_app()


if __name__ == "__main__":
    main()
