from .input_data_interpreter import InputDataInterpreter
from ...utils.logger.logger import Logger


class InputManager:
    """Coordinate reading input data into systems."""

    def __init__(self, registry=None, notify=None):
        Logger.log("start InputManager __init__(self)")
        self.data_interpreter = InputDataInterpreter(registry, notify)
        Logger.log("end InputManager __init__(self)")

    def get_systems(self, input_data):
        """Return the systems parsed from `input_data` path."""
        Logger.log(f"start get_systems(self, {input_data})")
        strategy = self.data_interpreter.get_data_processing_strategy(input_data)
        systems = strategy.process(input_data)
        Logger.log("end get_systems(self, input_data)")
        return systems
