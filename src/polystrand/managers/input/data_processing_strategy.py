import json

from .view_loader import load_systems_from_view
from ...models.exceptions import InvalidViewDataError
from ...utils.logger.logger import Logger


class DataProcessingStrategy():
    """Interface for converting input files into systems."""

    def process(self, input_data):
        """Return a list of `System` parsed from `input_data` path."""
        raise NotImplementedError()


class JsonViewDataStrategy(DataProcessingStrategy):
    """Parse a JSON view file into systems."""

    def __init__(self, registry=None, notify=None):
        self.registry = registry
        self.notify = notify

    def process(self, input_data):
        Logger.log(f"start JsonViewDataStrategy process(self, {input_data})")
        try:
            with open(input_data, 'r') as f:
                view = json.load(f)
        except json.JSONDecodeError as e:
            Logger.log(f"Error decoding view: {e}", Logger.LogPriority.ERROR)
            raise InvalidViewDataError(f"Invalid view data: {e}")

        systems = load_systems_from_view(view, registry=self.registry, notify=self.notify)
        Logger.log("end JsonViewDataStrategy process(self, input_data)")
        return systems
