"""Command line entry point for an audit session.

Run with: audit-guard <command> or python -m audit_guard.main <command>
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from .core.assessment import AssessmentFailed, RiskAssessmentAdapter
from .core.config import load_settings
from .core.errors import AuditGuardError
from .core.models import Transaction
from .core.observability import configure_logging
from .core.seed import load_seed_transactions
from .core.store import TransactionStore
from .core.workspace import FAILURE_MESSAGE, AuditWorkspace


def _format_row(t: Transaction, currency: str) -> str:
    level = t.risk_assessment.level.value if t.risk_assessment else "-"
    return f"{t.id:<10} {t.status.value:<9} {level:<7} {currency} {t.amount:>15,}  {t.category:<18} {t.title}"


def _print_list(store: TransactionStore, currency: str, query: Optional[str]) -> None:
    rows = store.search(query) if query else store.get_all()
    for t in rows:
        print(_format_row(t, currency))


def _print_summary(store: TransactionStore, currency: str) -> None:
    summary = store.summary()
    print(f"Transactions:   {summary.total_count}")
    print(f"Pending review: {summary.pending_count}")
    print(f"Approved:       {summary.approved_count}")
    print(f"Rejected:       {summary.rejected_count}")
    print(f"High risk:      {summary.high_risk_count}")
    print(f"Total volume:   {currency} {summary.total_amount:,}")
    print("By category:")
    for category, count in summary.count_by_category.items():
        amount = summary.amount_by_category[category]
        print(f"  {category:<18} {count:>3}  {currency} {amount:,}")


def _print_assessment(t: Transaction) -> None:
    a = t.risk_assessment
    if a is None:
        return
    print(f"{t.id}: score={a.score:g} level={a.level.value} anomaly={'yes' if a.anomaly_flag else 'no'}")
    print(f"  {a.summary}")
    if a.compliance_concerns:
        print("  " + " ".join(f"#{tag}" for tag in a.compliance_concerns))


async def _analyze(workspace: AuditWorkspace, ids: List[str], decision: Optional[str]) -> int:
    exit_code = 0
    for transaction_id in ids:
        outcome = await workspace.run_analysis(transaction_id)
        if isinstance(outcome, AssessmentFailed):
            print(f"{transaction_id}: {FAILURE_MESSAGE} ({outcome.kind.value})", file=sys.stderr)
            exit_code = 1
            continue
        _print_assessment(workspace.store.get_by_id(transaction_id))
        if decision == "approve":
            workspace.approve(transaction_id)
        elif decision == "reject":
            workspace.reject(transaction_id)
    return exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Audit transactions with AI risk scoring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  audit-guard list                       # Show the seeded ledger
  audit-guard list --search consulting   # Filter by id, reference or title
  audit-guard summary                    # Dashboard figures
  audit-guard analyze TRX-001 TRX-003    # Score transactions with Gemini
  audit-guard analyze TRX-002 --approve  # Score, then approve
        """,
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error", "critical"],
        default=None,
        help="Logging level (default: from LOG_LEVEL)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List transactions in store order")
    list_cmd.add_argument("--search", type=str, default=None, help="Case-insensitive filter")

    commands.add_parser("summary", help="Print aggregate dashboard figures")

    analyze_cmd = commands.add_parser("analyze", help="Run risk analysis on transactions")
    analyze_cmd.add_argument("ids", nargs="+", help="Transaction ids")
    decision = analyze_cmd.add_mutually_exclusive_group()
    decision.add_argument("--approve", action="store_const", const="approve", dest="decision")
    decision.add_argument("--reject", action="store_const", const="reject", dest="decision")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
        configure_logging(
            level=args.log_level or settings.log_level,
            json_format=settings.log_format == "json",
        )
        store = TransactionStore(load_seed_transactions(settings.seed_path))
    except AuditGuardError as e:
        print(f"Error loading session: {e}", file=sys.stderr)
        return 1

    if args.command == "list":
        _print_list(store, settings.currency, args.search)
        return 0

    if args.command == "summary":
        _print_summary(store, settings.currency)
        return 0

    workspace = AuditWorkspace(store, RiskAssessmentAdapter(settings=settings))
    try:
        exit_code = asyncio.run(_analyze(workspace, args.ids, args.decision))
    except AuditGuardError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print()
    _print_summary(store, settings.currency)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
