"""Markup package - tagged ranges over text and nested markup trees.

This package models text annotated with possibly overlapping tagged
ranges and converts those ranges into properly nested trees for
hierarchical rendering.

Public API:
    Types:
        - Range: Tagged half-open interval
        - Tree: Range with nested child trees
        - Leaf, Node: Generic materialized output nodes
        - FormattedText: Text plus invariant-preserving range set
        - AllenRelation, NestingRelation: Literal relation types

    Functions:
        - from_text, insert_range: Build formatted text
        - classify, collapse, nesting_relation: Interval relations
        - build_forest, insert, insert_tree, flatten_forest: Forest builder
        - slice_parse: Position-based slicing parser
        - materialize, trees, to_nodes, from_nodes: Tree materializer
        - segment, desegment, chunks: Flat chunk segmentation
"""

from markforest.markup.forest import (
    build_forest,
    flatten_forest,
    insert,
    insert_tree,
)
from markforest.markup.formatted_text import (
    FormattedText,
    clamp_range,
    from_text,
    insert_range,
)
from markforest.markup.materialize import (
    from_nodes,
    materialize,
    to_nodes,
    trees,
)
from markforest.markup.relations import (
    ALLEN_RELATIONS,
    NESTING_RELATIONS,
    classify,
    classify_bounds,
    collapse,
    nesting_relation,
)
from markforest.markup.segment import (
    Chunk,
    chunks,
    desegment,
    segment,
)
from markforest.markup.slicing import Bite, slice_parse
from markforest.markup.types import (
    AllenRelation,
    Forest,
    Leaf,
    NestingRelation,
    Node,
    Range,
    Tree,
)

__all__ = [
    # Constants
    "ALLEN_RELATIONS",
    "NESTING_RELATIONS",
    # Types
    "AllenRelation",
    "Bite",
    "Chunk",
    "Forest",
    "FormattedText",
    "Leaf",
    "NestingRelation",
    "Node",
    "Range",
    "Tree",
    # Formatted text
    "clamp_range",
    "from_text",
    "insert_range",
    # Relations
    "classify",
    "classify_bounds",
    "collapse",
    "nesting_relation",
    # Forest
    "build_forest",
    "flatten_forest",
    "insert",
    "insert_tree",
    # Materialization
    "from_nodes",
    "materialize",
    "slice_parse",
    "to_nodes",
    "trees",
    # Segmentation
    "chunks",
    "desegment",
    "segment",
]
