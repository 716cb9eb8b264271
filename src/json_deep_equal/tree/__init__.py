"""Tree subpackage for the JSON value model and object conversion.

Re-exports the public API for the tree module:
- NodeType: StrEnum of the seven kinds of tree value
- node_type / deep_equals: classification and exact structural equality
- TreeBuilder: converts Python object graphs into tree values
"""

from json_deep_equal.tree.builder import TreeBuilder
from json_deep_equal.tree.nodes import JsonValue, NodeType, deep_equals, node_type

__all__ = ["JsonValue", "NodeType", "TreeBuilder", "deep_equals", "node_type"]
