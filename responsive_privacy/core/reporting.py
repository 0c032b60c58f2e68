"""Build summaries of what was hidden or redacted, for build logs and audits."""

from collections.abc import Mapping, Sequence

from .context import DisclosureContext
from .results import AuditSummary, CollectionAudit, EntryResult


def summarize(
    results_by_collection: Mapping[str, Sequence[EntryResult]],
    context: DisclosureContext,
) -> AuditSummary:
    """
    Aggregate transform results across collections.

    Never raises for a level missing from the level definitions; the label
    falls back to "Unknown".

    Args:
        results_by_collection: Collection name to its entry results
        context: The disclosure context the results were produced with

    Returns:
        AuditSummary with per-collection counts and every warning
    """
    audits = []

    for collection, results in results_by_collection.items():
        hidden_names: dict[str, None] = {}
        warnings: list[str] = []
        configuration_warnings: list[str] = []
        hidden_count = 0

        for result in results:
            hidden_count += len(result.hidden_fields)
            for name in result.hidden_fields:
                hidden_names.setdefault(name, None)
            warnings.extend(result.warnings)
            configuration_warnings.extend(result.configuration_warnings)

        audits.append(
            CollectionAudit(
                collection=collection,
                entry_count=len(results),
                hidden_count=hidden_count,
                hidden_field_names=tuple(hidden_names),
                warnings=tuple(warnings),
                configuration_warnings=tuple(configuration_warnings),
            )
        )

    return AuditSummary(
        level=context.current_level,
        level_name=context.level_name,
        level_description=context.level_description,
        collections=tuple(audits),
    )


def render_summary(summary: AuditSummary) -> str:
    """Render an audit summary as plain text."""
    lines = [
        "",
        "Responsive Privacy Build Summary",
        f"   Level: {summary.level} - {summary.level_name}",
        f"   {summary.level_description}",
        "",
    ]

    for audit in summary.collections:
        if audit.has_hidden_fields:
            lines.append(
                f"   [{audit.collection}] {audit.entry_count} entries, "
                f"{audit.hidden_count} fields hidden"
            )
            lines.append(f"      Hidden: {', '.join(audit.hidden_field_names)}")

        for warning in audit.warnings:
            lines.append(f"   WARNING ({audit.collection}): {warning}")
        for warning in audit.configuration_warnings:
            lines.append(f"   CONFIG ({audit.collection}): {warning}")

    lines.append("")
    lines.append(
        f"   Total: {summary.total_hidden} fields hidden, "
        f"{summary.total_warnings} compliance warnings"
    )
    if summary.total_configuration_warnings:
        lines.append(
            f"   Configuration: {summary.total_configuration_warnings} unresolved attribute mappings"
        )
    lines.append("")

    return "\n".join(lines)


def build_summary(
    results_by_collection: Mapping[str, Sequence[EntryResult]],
    context: DisclosureContext,
) -> str:
    """Generate the plain-text build summary in one call."""
    return render_summary(summarize(results_by_collection, context))
