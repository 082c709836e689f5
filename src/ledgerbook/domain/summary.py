"""Monthly report domain service."""

from collections import defaultdict
from decimal import Decimal
from typing import Optional, Sequence

from ledgerbook.database.base import Database
from ledgerbook.domain.account import parse_account_type
from ledgerbook.domain.entities import (
    Account,
    AccountExpense,
    AccountType,
    CategoryExpense,
    MonthlyExpenseReport,
    Transaction,
)
from ledgerbook.utils.date_parser import validate_month

ZERO = Decimal("0.00")


class SummaryService:
    """Service for building per-period reports."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_monthly_expense_report(
        self,
        month: int,
        year: int,
        account_type: Optional[AccountType | str] = None,
    ) -> MonthlyExpenseReport:
        """Group a period's transactions by account, then by category.

        Totals are raw sums of stored values, like generate_monthly_summary.
        An unknown period yields a report with no sections.

        Args:
            month: Month (1-12)
            year: Year
            account_type: Optional filter restricting the report to Debit or Credit accounts

        Returns:
            MonthlyExpenseReport with accounts ordered by name and categories by
            absolute total (largest first)
        """
        validate_month(month)
        period = self.db.get_month_reference_by_period(month, year)
        if period is None:
            return MonthlyExpenseReport(month=month, year=year, month_reference_id=None)

        accounts = self.db.list_accounts(
            account_type=parse_account_type(account_type) if account_type is not None else None
        )
        transactions = self.db.list_transactions(month_reference_id=period.id)
        sections = self.build_account_sections(accounts, transactions)
        return MonthlyExpenseReport(
            month=month,
            year=year,
            month_reference_id=period.id,
            accounts=tuple(sections),
        )

    def build_account_sections(
        self, accounts: Sequence[Account], transactions: Sequence[Transaction]
    ) -> list[AccountExpense]:
        """Build report sections for the given accounts from a list of transactions.

        Accounts without transactions are left out.
        """
        by_account: dict[int, list[Transaction]] = defaultdict(list)
        for txn in transactions:
            by_account[txn.account_id].append(txn)

        category_names = {cat.id: cat.name for cat in self.db.list_categories()}

        sections = []
        for account in accounts:
            account_transactions = by_account.get(account.id)
            if not account_transactions:
                continue
            categories = self.group_by_category(account_transactions, category_names)
            sections.append(
                AccountExpense(
                    account=account,
                    total=sum((txn.value for txn in account_transactions), ZERO),
                    categories=tuple(categories),
                )
            )
        return sections

    def group_by_category(
        self, transactions: Sequence[Transaction], category_names: dict[int, str]
    ) -> list[CategoryExpense]:
        """Aggregate transactions per category, largest absolute total first."""
        grouped: dict[int, list[Transaction]] = defaultdict(list)
        for txn in transactions:
            grouped[txn.category_id].append(txn)

        results = [
            CategoryExpense(
                category_id=category_id,
                category_name=category_names.get(category_id, "Unknown"),
                total=sum((txn.value for txn in txns), ZERO),
                transactions=tuple(txns),
            )
            for category_id, txns in grouped.items()
        ]
        return sorted(results, key=lambda item: (-abs(item.total), item.category_name))
