"""Human-readable rendering of a reconstruction run."""
from __future__ import annotations

from typing import List

from .consensus import ConsensusResult
from .loader import ShareDocument


def describe_configuration(document: ShareDocument) -> List[str]:
    return [
        "Configuration:",
        f"  n (total shares):     {document.n}",
        f"  k (minimum required): {document.k}",
        f"  polynomial degree:    {document.degree}",
    ]


def describe_shares(document: ShareDocument) -> List[str]:
    lines = ["Shares:"]
    for share in document.shares:
        value = share.value.to_string()
        if share.source and share.source != value:
            lines.append(f"  Share {share.id}: {share.source} = {value}")
        else:
            lines.append(f"  Share {share.id}: {value}")
    return lines


def describe_result(result: ConsensusResult) -> List[str]:
    lines = [
        f"Combinations tried: {result.total_subsets}",
        f"Secret: {result.secret}",
        f"Agreeing combinations: {result.agreeing}/{result.total_subsets} ({result.agreement:.2f}%)",
    ]
    if result.failed_subsets:
        lines.append(f"Skipped combinations: {result.failed_subsets}")
    if result.wrong_share_ids:
        ids = ", ".join(f"Share {id_}" for id_ in result.wrong_share_ids)
        lines.append(f"Wrong shares detected: {ids}")
    else:
        lines.append("No wrong shares detected")
    return lines


def render_report(document: ShareDocument, result: ConsensusResult) -> str:
    sections = [
        describe_configuration(document),
        describe_shares(document),
        describe_result(result),
    ]
    return "\n\n".join("\n".join(section) for section in sections)


__all__ = ["describe_configuration", "describe_shares", "describe_result", "render_report"]
