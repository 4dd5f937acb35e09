"""Exact trigonometry: angles, special values, the fallacy bank and trig exercises."""

from trig.angles import (
    Angle,
    DegAngle,
    RadAngle,
    angle_to_string,
    angles_equivalent,
    normalize_angle,
    parse_angle,
    to_radians,
)
from trig.exact import (
    ExactValue,
    TrigValues,
    exact_equal,
    format_exact,
    parse_exact_value,
    sin_cos_tan_exact,
    tan_from_exact,
)
from trig.fallacies import FallacyLabel, FallacyRule, FallacyTask, draw_fallacy, generate_fallacy_rule
from trig.tasks import TrigCheck, TrigMode, TrigTask, check_trig_answer, generate_trig_task

__all__ = [
    "Angle",
    "DegAngle",
    "RadAngle",
    "parse_angle",
    "normalize_angle",
    "angles_equivalent",
    "angle_to_string",
    "to_radians",
    "ExactValue",
    "TrigValues",
    "sin_cos_tan_exact",
    "tan_from_exact",
    "format_exact",
    "parse_exact_value",
    "exact_equal",
    "FallacyLabel",
    "FallacyRule",
    "FallacyTask",
    "draw_fallacy",
    "generate_fallacy_rule",
    "TrigMode",
    "TrigTask",
    "TrigCheck",
    "generate_trig_task",
    "check_trig_answer",
]
