"""Activity reporters: progress display and the error policy of a run."""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, List, Optional
import sys
import logging

from rich.console import Console
from rich.markup import escape

from .utils import describe_aws_error

logger = logging.getLogger(__name__)


class ErrorOutcome(Enum):
    """What a reporter decided after seeing an error."""
    NONE = 'none'            # there was no error
    CONTINUE = 'continue'    # recorded; the caller keeps its partial result
    TERMINATE = 'terminate'  # the run was asked to exit


class ActivityReporter(ABC):
    """
    Observes progress and errors for every counter.

    ``check_error`` is the only place errors are observed. Whether an error
    is fatal is up to the implementation; callers must keep working (and
    return whatever they accumulated) if control comes back to them.
    """

    @abstractmethod
    def start(self, label: str) -> None:
        pass

    @abstractmethod
    def message(self, text: str) -> None:
        pass

    @abstractmethod
    def end(self, label: str) -> None:
        pass

    @abstractmethod
    def report_error(self, error: Exception) -> ErrorOutcome:
        """Handle a non-None error and say what happened."""
        pass

    @abstractmethod
    def fail(self, text: str, exit_code: int = 1) -> None:
        """Report a problem that is not an exception (e.g. bad arguments)."""
        pass

    def check_error(self, error: Optional[Exception]) -> bool:
        """
        Inspect an error.

        Returns:
            True if an error was observed (and reported), False for None
        """
        return self.error_outcome(error) is not ErrorOutcome.NONE

    def error_outcome(self, error: Optional[Exception]) -> ErrorOutcome:
        if error is None:
            return ErrorOutcome.NONE
        return self.report_error(error)


class TerminalReporter(ActivityReporter):
    """Prints progress to the terminal and exits on the first error."""

    def __init__(self, console: Optional[Console] = None, exit_fn: Callable[[int], None] = sys.exit):
        self.console = console or Console(stderr=True, highlight=False)
        self.exit_fn = exit_fn

    def start(self, label: str) -> None:
        self.console.print(f" * {escape(label)}...", end='')

    def message(self, text: str) -> None:
        self.console.print(text, end='')

    def end(self, label: str) -> None:
        self.console.print(label)

    def report_error(self, error: Exception) -> ErrorOutcome:
        logger.debug("Reporting error", exc_info=error)
        self.fail(describe_aws_error(error))
        return ErrorOutcome.TERMINATE

    def fail(self, text: str, exit_code: int = 1) -> None:
        self.console.print(f"[red]{escape(text)}[/red]")
        self.console.print()
        self.exit(exit_code)

    def exit(self, exit_code: int) -> None:
        self.exit_fn(exit_code)


class RecordingReporter(ActivityReporter):
    """
    Records everything and never stops the run.

    Used when the counters are embedded in another program, and in tests.
    """

    def __init__(self) -> None:
        self.messages: List[str] = []
        self.errors: List[Exception] = []
        self.failures: List[str] = []
        self.started = False
        self.ended = False
        self.exit_code: Optional[int] = None

    @property
    def error_occurred(self) -> bool:
        return bool(self.errors or self.failures)

    def start(self, label: str) -> None:
        self.messages.append(label)
        self.started = True

    def message(self, text: str) -> None:
        self.messages.append(text)

    def end(self, label: str) -> None:
        self.messages.append(label)
        self.ended = True

    def report_error(self, error: Exception) -> ErrorOutcome:
        logger.warning(f"Continuing after error: {error}")
        self.errors.append(error)
        self.messages.append(f"Error: {describe_aws_error(error)}")
        return ErrorOutcome.CONTINUE

    def fail(self, text: str, exit_code: int = 1) -> None:
        self.failures.append(text)
        self.messages.append(text)
        self.exit_code = exit_code
