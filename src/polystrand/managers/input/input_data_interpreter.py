import os

from .data_processing_strategy import JsonViewDataStrategy
from ...models.exceptions import UnsupportedFileTypeError
from ...utils.logger.logger import Logger


class InputDataInterpreter:
    """Pick a data processing strategy based on file type."""

    def __init__(self, registry=None, notify=None):
        self.registry = registry
        self.notify = notify

    def get_data_processing_strategy(self, input_data):
        """Return a strategy for `input_data` path."""
        Logger.log(f"start get_data_processing_strategy(self, {input_data})")
        if not os.path.exists(input_data):
            Logger.log(f"input file not found: {input_data}", Logger.LogPriority.ERROR)
            raise FileNotFoundError(f"Input file not found: {input_data}")

        file_size = os.path.getsize(input_data)
        file_name = os.path.basename(input_data)
        file_extension = os.path.splitext(input_data)[1].lower()
        Logger.log(f"File details - Name: {file_name}, Size: {file_size} bytes, Extension: {file_extension}")

        if file_extension == '.json':
            Logger.log("json view input detected")
            return JsonViewDataStrategy(self.registry, self.notify)

        Logger.log(f"unsupported file type: {file_extension}")
        raise UnsupportedFileTypeError(f"Unsupported file type: {file_extension}")
