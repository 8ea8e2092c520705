"""Member reconciliation and batch compilation."""

from .members import MemberReconciler
from .compiler import ExclusionList, ClassOutcome, StubCompiler

__all__ = ["MemberReconciler", "ExclusionList", "ClassOutcome", "StubCompiler"]
