import io

from rich.console import Console

from utils.common.console_log import ConsoleLog


def captured_log(verbosity: int = 1) -> ConsoleLog:
    """A ConsoleLog writing to an in-memory buffer; read it with output()."""
    console = Console(file=io.StringIO(), width=400, color_system=None, highlight=False, emoji=False)
    return ConsoleLog(verbosity, console=console)


def output(log: ConsoleLog) -> str:
    return log.console.file.getvalue()
