import json
from datetime import datetime

from .export_strategy import ExportNumbering, ExportStrategy
from ...utils.logger.logger import Logger

VIEW_FORMAT_VERSION = 1


def element_record(e, numbering) -> dict:
    """Element record with export ids and its p/a1/a3 frame."""
    record = e.to_json()
    record['id'] = numbering.element_id(e)
    record['n3'] = numbering.element_id(e.n3)
    record['n5'] = numbering.element_id(e.n5)
    if e.is_paired():
        if e.pair in numbering.element_ids:
            record['bp'] = numbering.element_id(e.pair)
        else:
            del record['bp']
    position, a1, a3 = e.get_frame()
    record['p'] = [float(v) for v in position]
    record['a1'] = [float(v) for v in a1]
    record['a3'] = [float(v) for v in a3]
    return record


def strand_record(strand, numbering) -> dict:
    record = strand.to_json()
    record['id'] = numbering.strand_ids[strand]
    record['monomers'] = strand.map(lambda e, i: element_record(e, numbering))
    record['end3'] = numbering.element_id(strand.end3)
    record['end5'] = numbering.element_id(strand.end5)
    if strand.kwdata:
        record['kwdata'] = dict(strand.kwdata)
    return record


def build_view(systems) -> dict:
    """Serializable view of `systems` with export-time ids."""
    numbering = ExportNumbering(systems)
    return {
        'version': VIEW_FORMAT_VERSION,
        'date': datetime.now().isoformat(),
        'systems': [
            {
                'id': system.id,
                'strands': [strand_record(strand, numbering) for strand in system.strands],
            }
            for system in systems
        ],
    }


class JsonViewExportStrategy(ExportStrategy):
    """Write the full topology and conformation as a JSON view."""

    def generate_export(self, systems, base_name="output"):
        Logger.log("Starting JSON view export generation")
        view = build_view(systems)
        Logger.log(f"JSON view export: {len(view['systems'])} system(s)")
        return [(f"{base_name}.json", json.dumps(view, indent=2).encode("utf-8"))]
