"""
Principle heuristic detectors.

One pure function per principle, each taking a file and its extracted
units or type declarations and returning PrincipleIssues. No detector reads
another's output.

Usage:
    from nextlens.analysis.principles import analyze_srp

    issues = analyze_srp(source.file, source.units, thresholds)
"""

from nextlens.analysis.principles.dip import analyze_dip
from nextlens.analysis.principles.isp import analyze_isp
from nextlens.analysis.principles.lsp import analyze_lsp
from nextlens.analysis.principles.ocp import analyze_ocp
from nextlens.analysis.principles.srp import analyze_srp

__all__ = ["analyze_srp", "analyze_ocp", "analyze_lsp", "analyze_isp", "analyze_dip"]
