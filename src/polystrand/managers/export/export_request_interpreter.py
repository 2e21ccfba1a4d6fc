from .json_view_export_strategy import JsonViewExportStrategy
from .oxdna_export_strategy import (
    OxDNAConfigurationExportStrategy,
    OxDNATopologyExportStrategy,
    PairTrapExportStrategy,
)
from .sequence_csv_export_strategy import SequenceCsvExportStrategy
from ...config.settings import ExportConfig
from ...utils.logger.logger import Logger


class ExportRequestInterpreter:
    """Parse export requests and instantiate strategies."""

    VALID_STRATEGIES = {
        "oxdna_topology": OxDNATopologyExportStrategy,
        "oxdna_configuration": OxDNAConfigurationExportStrategy,
        "json_view": JsonViewExportStrategy,
        "sequence_csv": SequenceCsvExportStrategy,
        "pair_traps": PairTrapExportStrategy,
    }

    def __init__(self, config: ExportConfig = None):
        self.config = config if config is not None else ExportConfig()

    def create_strategy(self, name):
        if name not in self.VALID_STRATEGIES:
            Logger.log(f"Invalid export strategy: {name}")
            raise ValueError(f"Invalid export strategy: '{name}'.")
        Logger.log(f"Instantiating export strategy: {name}")
        if name == "oxdna_configuration":
            return OxDNAConfigurationExportStrategy(box_scale=self.config.box_scale)
        return self.VALID_STRATEGIES[name]()

    def parse_request(self, request_str: str):
        """
        Return dict with strategies, folder and base name from a request string.

        Format: export_request <strategy[,strategy...]|default> <folder> [base_name]
        """
        Logger.log(f"start parse_request(self, {request_str})")
        request_str = request_str.strip()
        if not request_str.startswith("export_request"):
            Logger.log("Request does not start with 'export_request'")
            raise ValueError("The request must start with 'export_request'")
        request_str = request_str[len("export_request"):].strip()
        parts = request_str.split()
        Logger.log(f"Split request into parts: {parts}")

        if len(parts) not in (2, 3):
            Logger.log(f"Invalid number of parts in the request, expected 2 or 3 but got {len(parts)}")
            raise ValueError("Request must consist of 2 or 3 parts: strategies, folder, [name].")

        strategy_part, folder_location = parts[0], parts[1]
        base_name = parts[2] if len(parts) == 3 else self.config.base_name

        if strategy_part.lower() == "default":
            names = list(self.config.strategies)
        elif strategy_part.lower() == "none":
            names = []
        else:
            names = [name for name in strategy_part.split(",") if name]

        if not names:
            Logger.log("No export strategy provided.")
            raise ValueError("At least one export strategy must be provided.")

        if folder_location.lower() == "none":
            Logger.log("File location is 'none', which is not allowed.")
            raise ValueError("File location cannot be 'none'.")

        strategies = [self.create_strategy(name) for name in names]
        Logger.log("Request parsed successfully.")

        return {
            'export_strategies': strategies,
            'folder_location': folder_location,
            'base_name': base_name,
        }
