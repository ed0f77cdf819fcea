"""Data model for stylesheet modules, their members and their relationships."""

from .model import ModuleGraph, ModuleEdge
from .records import (
    ImportDeclaration,
    ReexportDeclaration,
    Parameter,
    MixinDefinition,
    VariableDefinition,
    ForwardedMember,
    Location,
    MemberKind,
)

__all__ = [
    "ModuleGraph",
    "ModuleEdge",
    "ImportDeclaration",
    "ReexportDeclaration",
    "Parameter",
    "MixinDefinition",
    "VariableDefinition",
    "ForwardedMember",
    "Location",
    "MemberKind",
]
