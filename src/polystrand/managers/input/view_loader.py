"""
Rebuild systems from a JSON view (see managers.export.json_view_export_strategy).

Elements get fresh gids; the ids in the view are only used to resolve the
n3/n5/bp references, which may point across strands and systems.
"""

from ...core.frames import OrientedFrame
from ...models.exceptions import InvalidViewDataError, TopologyError
from ...models.strand_families import get_family
from ...models.system import System
from ...utils.logger.logger import Logger

NUCLEIC_CLASSES = {"DNA": "dna", "RNA": "rna"}


def _frame_from_record(record) -> OrientedFrame:
    try:
        return OrientedFrame(record['p'], record['a1'], record['a3'])
    except KeyError as ex:
        raise InvalidViewDataError(f"Element {record.get('id')} is missing {ex}")
    except ValueError as ex:
        raise InvalidViewDataError(f"Element {record.get('id')} has an invalid frame: {ex}")


def _resolve(elements_by_id, ref, what):
    if ref is None or ref == -1:
        return None
    if ref not in elements_by_id:
        raise InvalidViewDataError(f"{what} refers to unknown element id {ref}")
    return elements_by_id[ref]


def load_systems_from_view(view, registry=None, notify=None) -> list:
    """
    Restore every system of a view produced by build_view().

    Raises:
        InvalidViewDataError: Missing fields, unknown classes or ids, or links
            that do not form strands.
    """
    Logger.log("start load_systems_from_view")
    if not isinstance(view, dict) or not isinstance(view.get('systems'), list):
        raise InvalidViewDataError("View must be a mapping with a 'systems' list.")

    systems = []
    elements_by_id = {}
    pending = []
    first_elements = {}
    for system_record in view['systems']:
        try:
            system = System(system_record.get('id', len(systems)), registry=registry, notify=notify)
            for strand_record in system_record['strands']:
                family = get_family(strand_record['class'])
                strand = system.create_strand(
                    family,
                    label=strand_record.get('label'),
                    **strand_record.get('kwdata', {}),
                )
                for monomer in strand_record['monomers']:
                    nucleic_type = NUCLEIC_CLASSES.get(monomer.get('class')) if family.supports_helix else None
                    e = strand.create_element(nucleic_type)
                    if e is None or monomer.get('class', e.element_class) != e.element_class:
                        raise InvalidViewDataError(
                            f"Element {monomer.get('id')} of class {monomer.get('class')!r} "
                            f"cannot belong to a {family.class_tag} strand"
                        )
                    if monomer['id'] in elements_by_id:
                        raise InvalidViewDataError(f"Duplicate element id {monomer['id']}")
                    e.type = monomer.get('type')
                    if 'radius' in monomer:
                        e.radius = float(monomer['radius'])
                    e.set_frame(_frame_from_record(monomer))
                    elements_by_id[monomer['id']] = e
                    pending.append((strand, e, monomer))
                    first_elements.setdefault(strand, e)
        except (KeyError, TypeError, ValueError) as ex:
            Logger.log(f"Invalid view data: {ex}", Logger.LogPriority.ERROR)
            raise InvalidViewDataError(f"Invalid view data: {ex}")
        systems.append(system)

    for strand, e, monomer in pending:
        e.n3 = _resolve(elements_by_id, monomer.get('n3', -1), f"n3 of element {monomer['id']}")
        e.n5 = _resolve(elements_by_id, monomer.get('n5', -1), f"n5 of element {monomer['id']}")
        e.pair = _resolve(elements_by_id, monomer.get('bp', -1), f"bp of element {monomer['id']}")
        if e.n3 is not None and e.n3.strand is not strand:
            raise InvalidViewDataError(f"Element {monomer['id']} links to another strand")

    for strand, first in first_elements.items():
        try:
            strand.set_from(first)
        except TopologyError as ex:
            raise InvalidViewDataError(f"Strand {strand.id}: {ex}")

    Logger.log(f"end load_systems_from_view: {len(systems)} system(s), {len(elements_by_id)} element(s)")
    return systems


def load_system_from_view(view, registry=None, notify=None) -> System:
    """
    Restore a single system.

    Accepts a full view holding exactly one system, or a bare system record
    ({'strands': [...]}).
    """
    if isinstance(view, dict) and 'systems' not in view and 'strands' in view:
        view = {'systems': [view]}
    systems = load_systems_from_view(view, registry=registry, notify=notify)
    if len(systems) != 1:
        raise InvalidViewDataError(f"Expected one system in view, found {len(systems)}")
    return systems[0]
