import pandas as pd

from .export_strategy import ExportStrategy
from ...utils.logger.logger import Logger


class SequenceCsvExportStrategy(ExportStrategy):
    """Write one 'label, sequence' row per strand."""

    def generate_export(self, systems, base_name="output"):
        Logger.log("Starting sequence export generation")
        rows = []
        for system in systems:
            for strand in system.strands:
                label = strand.label if strand.label else f"strand_{system.id}_{strand.id}"
                rows.append({'label': label, 'sequence': strand.get_sequence()})

        sequences_df = pd.DataFrame(rows, columns=['label', 'sequence'])
        Logger.log(f"Processed sequences dataframe with {len(sequences_df)} rows")
        content = sequences_df.to_csv(index=False)
        return [("sequences.csv", content.encode("utf-8"))]
