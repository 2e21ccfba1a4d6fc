import math

from .export_strategy import ExportNumbering, ExportStrategy
from ...utils.logger.logger import Logger


class OxDNATopologyExportStrategy(ExportStrategy):
    """Write an oxDNA topology (.top) file."""

    def generate_export(self, systems, base_name="output"):
        Logger.log("Starting topology export generation")
        numbering = ExportNumbering(systems)

        lines = [f"{numbering.element_count()} {numbering.strand_count()}"]
        for strand, e in numbering.ordered:
            element_type = e.type if e.type is not None else e.element_class
            lines.append(" ".join(str(v) for v in (
                numbering.strand_ids[strand],
                element_type,
                numbering.element_id(e.n3),
                numbering.element_id(e.n5),
            )))

        Logger.log(f"Topology export: {numbering.element_count()} elements, "
                   f"{numbering.strand_count()} strands")
        return [(f"{base_name}.top", "\n".join(lines).encode("utf-8"))]


class OxDNAConfigurationExportStrategy(ExportStrategy):
    """Write an oxDNA configuration (.dat) file with a cubic box."""

    def __init__(self, box_scale=5.0):
        if box_scale <= 0:
            raise ValueError("box_scale must be positive")
        self.box_scale = box_scale

    def box_size(self, numbering) -> int:
        """Cube edge: box_scale times the largest absolute coordinate, rounded up."""
        max_coord = 0.0
        for _, e in numbering.ordered:
            max_coord = max(max_coord, float(max(abs(c) for c in e.get_pos())))
        return math.ceil(self.box_scale * max_coord)

    def generate_export(self, systems, base_name="output"):
        Logger.log("Starting configuration export generation")
        numbering = ExportNumbering(systems)
        box = self.box_size(numbering)
        Logger.log(f"Configuration box size: {box}")

        dat = "\n".join([
            "t = 0",
            f"b = {box} {box} {box}",
            "E = 0 0 0\n",
        ])
        dat += "".join(e.get_dat_file_output() for _, e in numbering.ordered)
        return [(f"{base_name}.dat", dat.encode("utf-8"))]


class PairTrapExportStrategy(ExportStrategy):
    """Write mutual-trap external forces for every base pair."""

    def __init__(self, stiff=0.09, r0=1.2, pbc=1):
        self.stiff = stiff
        self.r0 = r0
        self.pbc = pbc

    def _trap(self, particle, ref_particle) -> str:
        return (
            "{\n"
            "type = mutual_trap\n"
            f"particle = {particle}\n"
            f"ref_particle = {ref_particle}\n"
            f"stiff = {self.stiff}\n"
            f"r0 = {self.r0}\n"
            f"PBC = {self.pbc}\n"
            "}\n\n"
        )

    def generate_export(self, systems, base_name="output"):
        numbering = ExportNumbering(systems)
        text = ""
        pairs = 0
        for _, e in numbering.ordered:
            if not e.is_paired():
                continue
            if e.pair not in numbering.element_ids:
                Logger.log(f"{e!r} is paired with an element outside the export", Logger.LogPriority.WARNING)
                continue
            text += self._trap(numbering.element_id(e), numbering.element_id(e.pair))
            pairs += 1
        Logger.log(f"Pair trap export: {pairs} trap(s)")
        return [(f"{base_name}_pair_traps.txt", text.encode("utf-8"))]
