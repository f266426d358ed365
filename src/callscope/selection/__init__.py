"""Selection engine and the partition it produces."""

from callscope.selection.engine import SelectionEngine
from callscope.selection.models import Partition, Selection, SelectionKind
from callscope.selection.scene import SceneTree

__all__ = ["Partition", "SceneTree", "Selection", "SelectionEngine", "SelectionKind"]
