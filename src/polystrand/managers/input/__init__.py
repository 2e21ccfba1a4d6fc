from .view_loader import load_system_from_view, load_systems_from_view
from .data_processing_strategy import DataProcessingStrategy, JsonViewDataStrategy
from .input_data_interpreter import InputDataInterpreter
from .input_manager import InputManager
