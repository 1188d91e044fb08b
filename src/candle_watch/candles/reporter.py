import sys
import traceback
from typing import TextIO

from candle_watch.logging import Logger


class CompletionReporter:
    """
    Writes one line per finished candle or stream error to a text stream.

    Output faults never propagate; they are logged as warnings, or printed
    to stderr when no logger is attached.
    """

    def __init__(self, stream: TextIO | None = None, logger: Logger | None = None):
        """
        Parameters
        ----------
        stream : TextIO, optional
            Destination for report lines, defaults to stdout.

        logger : Logger, optional
            Logger used to report output faults.
        """
        self._stream = stream
        self._logger = logger

    @staticmethod
    def format_completion(processed: int, product_id: str, start: int) -> str:
        return f"{processed} {product_id:>10} ({start}): finished candle."

    @staticmethod
    def format_error(err: Exception) -> str:
        return f"!WEBSOCKET ERROR! {err}"

    def _write(self, line: str) -> None:
        try:
            stream = self._stream if self._stream is not None else sys.stdout
            stream.write(line + "\n")
            stream.flush()
        except Exception as exc:
            if self._logger is not None:
                self._logger.warning(f"Unable to write report line: {exc}")
            else:
                traceback.print_exc(file=sys.stderr)

    def report(self, processed: int, product_id: str, start: int) -> None:
        """Report a finished candle."""
        self._write(self.format_completion(processed, product_id, start))

    def report_error(self, err: Exception) -> None:
        """Report a stream error."""
        self._write(self.format_error(err))
