from ...utils.logger.logger import Logger


class ExportStrategy():
    """Interface for turning systems into exported files."""

    def generate_export(self, systems, base_name="output"):
        """Return a list[(filename, bytes)] for this export."""
        raise NotImplementedError()


class ExportNumbering:
    """
    Export-time ids in file order.

    Strands are numbered from 1 and elements from 0, system by system and
    strand by strand, walking each strand 3'->5'.
    """

    def __init__(self, systems):
        self.strand_ids = {}
        self.element_ids = {}
        self.ordered = []
        for system in systems:
            for strand in system.strands:
                self.strand_ids[strand] = len(self.strand_ids) + 1
                for e in file_order(strand):
                    self.element_ids[e] = len(self.element_ids)
                    self.ordered.append((strand, e))

        registered = sum(system.element_count() for system in systems)
        if registered != len(self.ordered):
            Logger.log(
                f"Number of exported elements ({len(self.ordered)}) is not equal to "
                f"the number of registered elements ({registered})",
                Logger.LogPriority.WARNING,
            )

    def element_id(self, element) -> int:
        """Export id of `element`, -1 for None."""
        if element is None:
            return -1
        return self.element_ids[element]

    def strand_count(self) -> int:
        return len(self.strand_ids)

    def element_count(self) -> int:
        return len(self.ordered)


def file_order(strand) -> list:
    """Monomers of `strand` walked from its 3' end along 5' links."""
    return strand.get_monomers(reverse=not strand.family.natural_reversed)
