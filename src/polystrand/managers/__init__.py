"""
Managers operating on systems: strand editing, export and input.
"""

from .strand_edit_manager import StrandEditManager, ExtensionResult, link_chain
from .export import ExportManager, ExportRequestInterpreter
from .input import InputManager, load_system_from_view, load_systems_from_view
