"""
Cali help rendering.

render(parser) builds a rich renderable listing every registered flag as

    -<short>  --<long> [<value>]  <description>

in registration order. Styling follows the parser's options:
- colorful: apply styles (overridable through __styles__ in __main__).
- fancy: wrap the table in a rounded panel titled with the program name.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


def render(parser, /):
    """
    Return a rich renderable (Table or Panel) describing parser's flags.
    """
    main = __import__("__main__")

    styles = defaultdict(str, {
        "prog-name": "bold #E6E6F0",
        "usage": "#C8C8D0",
        "short": "bold #00E5FF",
        "long": "bold #00E5FF",
        "metavar": "italic #FFB400",
        "descr": "#D6D6DE",
    } | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if parser.colorful else ""

    table = Table.grid(padding=(0, 2))
    table.add_column(no_wrap=True)
    table.add_column(no_wrap=True)
    table.add_column(no_wrap=True)
    table.add_column()

    for definition in parser.list_definitions():
        table.add_row(
            Text("-" + definition.short, styler("short")),
            Text("--" + definition.long, styler("long")),
            Text(definition.metavar or "", styler("metavar")),
            Text(definition.description, styler("descr")),
        )

    usage = Text.assemble(
        ("usage: ", styler("usage")),
        (parser.prog, styler("prog-name")),
        (" [flags]" if parser.list_definitions() else "", styler("usage")),
    )

    if parser.fancy:
        return Panel(table, title=usage, title_align="left", box=ROUNDED)

    grid = Table.grid()
    grid.add_row(usage)
    grid.add_row(table)
    return grid


__all__ = (
    "render",
)
