from .export_strategy import ExportStrategy, ExportNumbering, file_order
from .oxdna_export_strategy import (
    OxDNATopologyExportStrategy,
    OxDNAConfigurationExportStrategy,
    PairTrapExportStrategy,
)
from .json_view_export_strategy import JsonViewExportStrategy, build_view
from .sequence_csv_export_strategy import SequenceCsvExportStrategy
from .export_request_interpreter import ExportRequestInterpreter
from .export_manager import ExportManager
