"""Set-expression engine: parsing, enumeration oracles, Venn region masks, exercises."""

from sets.expr import (
    Complement,
    Diff,
    Inter,
    SetConst,
    SetNode,
    SetUnion,
    SetVar,
    Sym,
    eval_set_expr,
    parse_set_expression,
    set_to_string,
)
from sets.oracle import are_set_expr_equivalent, is_disjoint, is_subset, truth_table_set
from sets.venn import (
    compare_masks,
    compute_region_mask_from_expr,
    mask_to_regions,
    region_labels,
    regions_equal,
    regions_for_expression,
)
from sets.tasks import SetCheck, SetMode, SetRelation, SetTask, check_set_answer, classify_relation

__all__ = [
    "SetVar",
    "SetConst",
    "Complement",
    "SetUnion",
    "Inter",
    "Diff",
    "Sym",
    "SetNode",
    "parse_set_expression",
    "eval_set_expr",
    "set_to_string",
    "truth_table_set",
    "are_set_expr_equivalent",
    "is_subset",
    "is_disjoint",
    "compute_region_mask_from_expr",
    "region_labels",
    "mask_to_regions",
    "compare_masks",
    "regions_for_expression",
    "regions_equal",
    "SetMode",
    "SetRelation",
    "SetTask",
    "SetCheck",
    "classify_relation",
    "check_set_answer",
]
