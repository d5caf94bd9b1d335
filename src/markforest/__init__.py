"""markforest - tagged text ranges and nested markup trees.

Text annotated with possibly overlapping tagged ranges is kept in a
``FormattedText`` whose same-tag ranges are always merged. The ranges can
be rendered flat (``segment``) or turned into a properly nested forest
(``build_forest``) and materialized into any tree structure (``trees``).

Example usage::

    from markforest import FormattedText, Range, segment

    ft = FormattedText("foo bar baz").apply("A", 0, 3).apply("B", 8, 11)
    segment(ft.ranges, ft.text)
    # [('foo', ['A']), (' bar ', []), ('baz', ['B'])]
"""

from markforest.markup import (
    ALLEN_RELATIONS,
    NESTING_RELATIONS,
    AllenRelation,
    Bite,
    Chunk,
    Forest,
    FormattedText,
    Leaf,
    NestingRelation,
    Node,
    Range,
    Tree,
    build_forest,
    chunks,
    clamp_range,
    classify,
    classify_bounds,
    collapse,
    desegment,
    flatten_forest,
    from_nodes,
    from_text,
    insert,
    insert_range,
    insert_tree,
    materialize,
    nesting_relation,
    segment,
    slice_parse,
    to_nodes,
    trees,
)

__all__ = [
    "ALLEN_RELATIONS",
    "NESTING_RELATIONS",
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
    "build_forest",
    "chunks",
    "clamp_range",
    "classify",
    "classify_bounds",
    "collapse",
    "desegment",
    "flatten_forest",
    "from_nodes",
    "from_text",
    "insert",
    "insert_range",
    "insert_tree",
    "materialize",
    "nesting_relation",
    "segment",
    "slice_parse",
    "to_nodes",
    "trees",
]
