import os

from candle_watch.logging.handlers.base import BaseLogHandler

LOG_FILE_SUFFIX = ".txt"


class FileLogHandler(BaseLogHandler):
    """
    Mirrors every flushed batch of log lines into a '.txt' file.

    The file is opened in append mode when the handler is built, so lines
    from earlier runs are kept, and stays open until aclose().
    """

    def __init__(self, filepath: str) -> None:
        """
        Args:
            filepath (str): Target file. Missing parent directories are created.

        Raises:
            ValueError: If filepath does not end with '.txt'.
            OSError: If the file cannot be opened.
        """
        super().__init__()

        if not filepath.endswith(LOG_FILE_SUFFIX):
            raise ValueError(
                f"Invalid filepath; expected string ending with '{LOG_FILE_SUFFIX}' but got {filepath}"
            )

        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        self.filepath = filepath
        self._file = open(filepath, "a")

    async def push(self, buffer: list[str]) -> None:
        self._file.writelines(f"{line}\n" for line in buffer)
        self._file.flush()

    async def aclose(self) -> None:
        self._file.close()
