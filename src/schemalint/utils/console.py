"""
Central Logging and Console Utilities.

Diagnostics tables and log records share one ``rich`` console so CLI output
can be redirected (tests capture it in memory) without touching the modules
that print.

1.  **Logging**: the root logger gets a ``RichHandler`` bound to a stderr console,
    so stdout carries command output only (tables, JSON, listings).
    Library modules log through ``logging.getLogger(__name__)``.
2.  **Redirection**: ``set_console`` sends both output and logs to one console
    (tests record it in memory) and re-binds the handler.

Attributes:
    console (_ConsoleProxy): Stable module-level reference to the active console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_THEME = Theme(
  {
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "rule": "bold magenta",
  }
)


class _ConsoleProxy:
  """
  Forwards to a swappable ``rich.console.Console``.

  Attributes:
      _backend (Console): The active output console.
      _log_backend (Console): The console log records are rendered to.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._log_backend: Console = Console(theme=_THEME, stderr=True)
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new console for both output and logging.

    The schemalint theme is pushed onto it so styled tables render.

    Args:
        new_console (Console): The console to use from now on.
    """
    new_console.push_theme(_THEME)
    self._backend = new_console
    self._log_backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    """Restores stdout for output and stderr for logs."""
    self._backend = Console(theme=_THEME)
    self._log_backend = Console(theme=_THEME, stderr=True)
    self._configure_logging()

  def set_level(self, level: int) -> None:
    """
    Sets the root logger threshold.

    Args:
        level (int): A ``logging`` level such as ``logging.DEBUG``.
    """
    logging.getLogger().setLevel(level)

  def _configure_logging(self) -> None:
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
      if isinstance(handler, RichHandler):
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._log_backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    if root_logger.level == logging.NOTSET or root_logger.level > logging.INFO:
      root_logger.setLevel(logging.INFO)
    root_logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    """Forwards ``print`` to the active console."""
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects console output and logging to another console.

  Args:
      new_console (Console): The configured console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Restores the default stdout and stderr consoles."""
  console.reset()


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): Message, may contain rich markup.
  """
  logging.info(msg, extra={"markup": True})


def log_success(msg: str) -> None:
  """Logs a success message at INFO level with success styling."""
  logging.info(f"[success]{msg}[/success]", extra={"markup": True})


def log_warning(msg: str) -> None:
  """Logs a warning message."""
  logging.warning(msg, extra={"markup": True})


def log_error(msg: str) -> None:
  """Logs an error message."""
  logging.error(msg, extra={"markup": True})
