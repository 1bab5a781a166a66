"""
Traversal Context Tracker.

Mirrors the schema engine's position in the document while it validates.

Schema engines report a missing node only once the *next* sibling begins, so
at the moment an error callback fires the top of the stack is the parent of
the defect, not the defect location itself. Classification relies on this.
"""

from typing import Dict, List, Optional


class TrackerContractViolation(RuntimeError):
    """Enter/exit callbacks arrived out of nesting order"""


class TraversalContext:
    """
    Element path and ancestor attributes for one validation run.

    Both stacks always have the same length. A context belongs to exactly one
    run and must not be reused.
    """

    def __init__(self):
        self.path_stack: List[str] = []
        self.attribute_stack: List[Dict[str, str]] = []

    def on_element_enter(self, name: str, attributes: Optional[Dict[str, str]] = None):
        self.path_stack.append(name)
        self.attribute_stack.append(dict(attributes or {}))

    def on_element_exit(self):
        """
        Leave the current element.

        Raises:
            TrackerContractViolation: If no element is open
        """
        if not self.path_stack:
            raise TrackerContractViolation("Element exit received with no open element")
        self.path_stack.pop()
        self.attribute_stack.pop()

    def current_path(self) -> str:
        return "/".join(self.path_stack)

    def current_parent_name(self) -> str:
        return self.path_stack[-1] if self.path_stack else ""

    def current_parent_attributes(self) -> Dict[str, str]:
        return dict(self.attribute_stack[-1]) if self.attribute_stack else {}

    @property
    def depth(self) -> int:
        return len(self.path_stack)

    def is_empty(self) -> bool:
        return not self.path_stack
