# Import all builtin rules to register them
from parakontra.rules.builtin.dtype import DtypeRule
from parakontra.rules.builtin.numericality import NumericalityRule
from parakontra.rules.builtin.allowed_values import AllowedValuesRule
from parakontra.rules.builtin.disallowed_values import DisallowedValuesRule
from parakontra.rules.builtin.regex import RegexRule
from parakontra.rules.builtin.length import LengthRule
from parakontra.rules.builtin.inner import InnerRule
from parakontra.rules.builtin.struct import StructRule
from parakontra.rules.builtin.custom_check import CustomCheckRule

__all__ = [
    "DtypeRule",
    "NumericalityRule",
    "AllowedValuesRule",
    "DisallowedValuesRule",
    "RegexRule",
    "LengthRule",
    "InnerRule",
    "StructRule",
    "CustomCheckRule",
]
