"""Structural merge of schema nodes, used to flatten ``allOf``.

This is a keyword-level merge, not a logical intersection: when two
branches set the same keyword (other than ``properties`` and ``required``)
the later branch wins. A value can therefore satisfy the merged schema
without satisfying every input branch, e.g. when two branches declare
different ``format`` values.
"""

from functools import reduce


def merge_schemas(base: dict, addition: dict) -> dict:
    """Merge two schema nodes into a new node.

    Keys of ``addition`` overwrite keys of ``base``. When both nodes declare
    ``properties`` the mappings are combined (same-named child schemas are
    replaced, not merged). When both declare ``required`` the result is the
    de-duplicated union of the two lists.

    Args:
        base: The schema node merged into.
        addition: The schema node whose keys take precedence.

    Returns:
        A new schema dict. Neither input is modified.
    """
    merged = {**base, **addition}
    if base.get("properties") is not None and addition.get("properties") is not None:
        merged["properties"] = {**base["properties"], **addition["properties"]}
    if base.get("required") is not None and addition.get("required") is not None:
        merged["required"] = list(dict.fromkeys([*base["required"], *addition["required"]]))
    return merged


def merge_all(schemas: list[dict]) -> dict:
    """Left-fold ``merge_schemas`` over a non-empty sequence of schema nodes.

    Raises:
        ValueError: If ``schemas`` is empty.
    """
    if not schemas:
        raise ValueError("Cannot merge an empty list of schemas")
    return reduce(merge_schemas, schemas[1:], dict(schemas[0]))
